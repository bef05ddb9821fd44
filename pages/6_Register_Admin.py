import streamlit as st
from appwrite.exception import AppwriteException
from Database.Appwrite_Connection import Connect
from Modules.auth import PasswordError, register_admin, registration_enabled
from Modules.Menu import global_sidebar

st.set_page_config(page_title="Register Admin", page_icon="🟣")


def show():
    st.title("🟣 Create Admin Account")

    if not registration_enabled():
        st.warning("Admin registration is disabled. Set `ALLOW_ADMIN_REGISTRATION=true` to enable it.")
        return

    st.warning("⚠ Disable registration again once your admin account exists.")

    with st.form("register_form"):
        name = st.text_input("👤 Name", "Admin User")
        email = st.text_input("📧 Email")
        password = st.text_input("🔑 Password", type="password")
        password_confirm = st.text_input("🔑 Confirm Password", type="password")

        submitted = st.form_submit_button("🟣 Create Admin Account")

    if submitted:
        if not email.strip():
            st.error("❌ Please enter an email address.")
            return
        if password != password_confirm:
            st.error("❌ Passwords do not match.")
            return
        try:
            register_admin(Connect(), email.strip(), password, name.strip())
        except PasswordError as e:
            st.error(f"❌ {e}")
        except AppwriteException as e:
            st.error(f"❌ {e.message or 'Failed to register admin. Please try again.'}")
        else:
            st.success("🎉 Admin user created successfully. You can now login.")
            st.page_link("pages/1_Login.py", label="Go to Login", icon="🔐")


show()

global_sidebar()
