from Modules.Menu import global_sidebar
from Modules.StaticPages import render_page

render_page("privacy_policy", "Privacy Policy", "🔒")

global_sidebar()
