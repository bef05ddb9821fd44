import os

import streamlit as st
from appwrite.exception import AppwriteException
from Database.Appwrite_Connection import Connect
from Modules.auth import PasswordError, complete_recovery, send_recovery_email
from Modules.Menu import global_sidebar

st.set_page_config(page_title="Reset Password", page_icon="❓")


def show_reset_form(user_id, secret):
    st.write("Choose a new password for your account.")

    with st.form("reset_password_form"):
        password = st.text_input("🔑 New Password", type="password")
        confirm = st.text_input("🔑 Confirm New Password", type="password")
        submitted = st.form_submit_button("Reset Password")

    if submitted:
        try:
            complete_recovery(Connect(), user_id, secret, password, confirm)
        except PasswordError as e:
            st.error(f"❌ {e}")
        except AppwriteException as e:
            st.error(f"❌ {e.message or 'Failed to reset password. Please try again.'}")
        else:
            st.success("✅ Your password has been reset. You can now login.")
            st.page_link("pages/1_Login.py", label="Go to Login", icon="🔐")


def show_request_form():
    st.write("Enter your email address and we'll send you a link to reset your password.")

    with st.form("recovery_email_form"):
        email = st.text_input("📧 Email")
        submitted = st.form_submit_button("Send Reset Link")

    if submitted:
        recovery_url = os.getenv("PASSWORD_RECOVERY_URL", "http://localhost:8501/Forgot_Password")
        try:
            send_recovery_email(Connect(), email, recovery_url)
        except AppwriteException as e:
            st.error(f"❌ {e.message or 'Failed to send recovery email. Please try again.'}")
        except ValueError as e:
            st.error(f"❌ {e}")
        else:
            st.success("📬 Check your inbox for the password reset link.")


def show():
    st.title("❓ Reset Password")

    # The recovery email links back here with userId and secret
    user_id = st.query_params.get("userId")
    secret = st.query_params.get("secret")

    if user_id and secret:
        show_reset_form(user_id, secret)
    else:
        show_request_form()


show()

global_sidebar()
