from Modules.Menu import global_sidebar
from Modules.StaticPages import render_page

render_page("data_safety", "Data Safety", "🛡")

global_sidebar()
