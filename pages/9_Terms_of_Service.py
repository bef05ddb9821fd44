from Modules.Menu import global_sidebar
from Modules.StaticPages import render_page

render_page("terms_of_service", "Terms of Service", "📜")

global_sidebar()
