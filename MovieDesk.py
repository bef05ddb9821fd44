import streamlit as st
from Modules.auth import init_session_state
from Modules.Menu import global_sidebar

st.set_page_config(page_title="MovieDesk | Admin", page_icon="🎬", layout="wide")


# ------------------------
# Session Initialization
# ------------------------
init_session_state()
global_sidebar()

# ------------------------
# Public Home Page Content
# ------------------------

st.title("🍿 DJ Afro Movies Admin")
st.markdown("""
### Catalog management for the DJ Afro Movies streaming app
From here administrators can:

- 📊 Follow catalog statistics, views, downloads and ratings on the **Dashboard**.
- ➕ Add a single movie with its poster, qualities and streaming link.
- 📤 Import many movies at once from a **CSV file**.
- 🎞 Search, filter, edit and delete existing movies.

---

👉 Login using the sidebar to get started.
""")

if st.session_state.logged_in:
    st.success(f"✅ You are logged in as `{st.session_state.email}`. Use the sidebar to navigate.")
    st.page_link("pages/2_Dashboard.py", label="Go to Dashboard", icon="📊")
else:
    st.info("🔐 Please login to manage the catalog.")
    st.page_link("pages/1_Login.py", label="Admin Login", icon="🔐")
