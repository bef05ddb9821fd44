import streamlit as st
from Modules.auth import show_login
from Modules.Menu import global_sidebar

st.set_page_config(page_title="Login", page_icon="🔐")


st.title("🔐 Login to MovieDesk")

if st.session_state.get("logged_in", False):
    st.success("You're already logged in! Use the sidebar to go to other pages.")
    st.page_link("pages/2_Dashboard.py", label="Go to Dashboard", icon="📊")
else:
    show_login()

global_sidebar()
