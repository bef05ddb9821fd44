import os

import streamlit as st
from appwrite.exception import AppwriteException
from appwrite.id import ID
from Database.Appwrite_Connection import Connect

MIN_PASSWORD_LENGTH = 8


class PasswordError(ValueError):
    pass


def login(db, email, password):
    try:
        return db.account.create_email_password_session(email=email, password=password)
    except AppwriteException as e:
        print(f"[ERROR] Login error for {email}: {e}")
        raise


def register_admin(db, email, password, name="Admin User"):
    validate_new_password(password, password)
    try:
        user = db.account.create(user_id=ID.unique(), email=email, password=password, name=name or "Admin User")
    except AppwriteException as e:
        print(f"[ERROR] Registration error for {email}: {e}")
        raise
    print(f"[INFO] Admin user created successfully: {user.get('$id')}")
    return user


def get_current_user(db, user_id, session_id):
    """Returns the user while the session is alive, otherwise None."""
    if not user_id or not session_id:
        return None
    try:
        sessions = db.users.list_sessions(user_id=user_id)
        if not any(s.get("$id") == session_id for s in sessions.get("sessions", [])):
            return None
        return db.users.get(user_id=user_id)
    except AppwriteException as e:
        print(f"[ERROR] Error getting current user: {e}")
        return None


def logout(db, user_id, session_id):
    try:
        db.users.delete_session(user_id=user_id, session_id=session_id)
        return True
    except AppwriteException as e:
        print(f"[ERROR] Logout error: {e}")
        raise


def validate_new_password(password, confirm):
    if password != confirm:
        raise PasswordError("Passwords do not match")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")


def send_recovery_email(db, email, url):
    email = (email or "").strip()
    if not email:
        raise ValueError("Please enter your email address")
    try:
        return db.account.create_recovery(email=email, url=url)
    except AppwriteException as e:
        print(f"[ERROR] Send recovery email error: {e}")
        raise


def complete_recovery(db, user_id, secret, password, confirm):
    validate_new_password(password, confirm)
    try:
        return db.account.update_recovery(user_id=user_id, secret=secret, password=password)
    except AppwriteException as e:
        print(f"[ERROR] Password recovery error: {e}")
        raise


def registration_enabled():
    return os.getenv("ALLOW_ADMIN_REGISTRATION", "false").lower() == "true"


SESSION_DEFAULTS = {
    "logged_in": False,
    "email": "",
    "user_name": "",
    "user_id": "",
    "session_id": "",
}


def init_session_state(state=None):
    state = st.session_state if state is None else state
    for key, value in SESSION_DEFAULTS.items():
        if key not in state:
            state[key] = value


def clear_session_state(state=None):
    state = st.session_state if state is None else state
    for key, value in SESSION_DEFAULTS.items():
        state[key] = value


def check_session(db, state):
    """Keeps the login only while Appwrite still knows the session."""
    if not state.get("logged_in"):
        return False
    if get_current_user(db, state.get("user_id"), state.get("session_id")) is None:
        print(f"[WARN] Session for {state.get('email')} has ended, logging out")
        clear_session_state(state)
        return False
    return True


def sign_out(db, state):
    try:
        logout(db, state.get("user_id"), state.get("session_id"))
    finally:
        clear_session_state(state)


def login_blocker():
    init_session_state()

    if not st.session_state.logged_in:
        st.warning("You must login to access this page.")
        show_login()
        st.stop()

    if not check_session(Connect(), st.session_state):
        st.warning("Your session has expired. Please login again.")
        show_login()
        st.stop()


def show_login():
    init_session_state()

    with st.form("login_form"):
        st.subheader("🔐 Admin Login")

        email = st.text_input("📧 Email")
        password = st.text_input("🔑 Password", type="password")

        submitted = st.form_submit_button("🚪 Login")

        if submitted:
            if not email or not password:
                st.error("❌ Please enter your email and password.")
            else:
                db = Connect()
                try:
                    session = login(db, email.strip(), password)
                except AppwriteException as e:
                    st.error(f"❌ {e.message or 'Invalid email or password.'}")
                else:
                    user = get_current_user(db, session["userId"], session["$id"]) or {}
                    st.session_state.logged_in = True
                    st.session_state.email = email.strip()
                    st.session_state.user_name = user.get("name", "")
                    st.session_state.user_id = session["userId"]
                    st.session_state.session_id = session["$id"]
                    st.success("✅ Login successful! Use the sidebar to navigate.")
                    st.rerun()

    st.page_link("pages/7_Forgot_Password.py", label="Forgot your password?", icon="❓")
    if registration_enabled():
        st.page_link("pages/6_Register_Admin.py", label="Need an admin account? Register here", icon="🟣")
