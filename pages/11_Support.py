from Modules.Menu import global_sidebar
from Modules.StaticPages import render_page

render_page("support", "Support & Help", "💬")

global_sidebar()
