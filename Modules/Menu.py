import streamlit as st
from appwrite.exception import AppwriteException
from Database.Appwrite_Connection import Connect
from Modules.auth import init_session_state, sign_out


def legal_links():
    st.sidebar.markdown("---")
    st.sidebar.page_link("pages/8_Privacy_Policy.py", label="Privacy Policy", icon="🔒")
    st.sidebar.page_link("pages/9_Terms_of_Service.py", label="Terms of Service", icon="📜")
    st.sidebar.page_link("pages/10_Data_Safety.py", label="Data Safety", icon="🛡")
    st.sidebar.page_link("pages/11_Support.py", label="Support", icon="💬")


def global_sidebar():
    init_session_state()

    st.sidebar.title("🎬 MovieDesk")

    if st.session_state.logged_in:
        # Full navigation for logged-in admins
        st.sidebar.markdown(f"👤 Logged in as `{st.session_state.user_name or st.session_state.email}`")

        st.sidebar.page_link("pages/2_Dashboard.py", label="Dashboard", icon="📊")
        st.sidebar.page_link("pages/3_Movies.py", label="All Movies", icon="🎞")
        st.sidebar.page_link("pages/4_Add_Movie.py", label="Add Movie", icon="➕")
        st.sidebar.page_link("pages/5_Bulk_Upload.py", label="Bulk Upload", icon="📤")

        if st.sidebar.button("Logout"):
            try:
                sign_out(Connect(), st.session_state)
            except AppwriteException as e:
                # the local login is cleared either way
                print(f"[WARN] Logout could not delete the session: {e.message}")
            st.rerun()

    else:
        # Only show Login page if not logged in
        st.sidebar.page_link("MovieDesk.py", label="Home", icon="🏡")
        st.sidebar.page_link("pages/1_Login.py", label="Login", icon="🔐")

    legal_links()
