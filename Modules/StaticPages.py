import os
from pathlib import Path
from string import Template

import streamlit as st

CONTENT_DIR = Path(__file__).resolve().parent.parent / "content"
LAST_UPDATED = "January 2025"
APP_NAME = "DjAfro StreamBox"


def load_page(name, support_email=None):
    """Reads content/<name>.md and fills in $support_email and $last_updated."""
    text = (CONTENT_DIR / f"{name}.md").read_text(encoding="utf-8")
    return Template(text).safe_substitute(
        support_email=support_email or os.getenv("SUPPORT_EMAIL", "support@djafrostreambox.com"),
        last_updated=LAST_UPDATED
    )


def render_page(name, title, icon):
    st.set_page_config(page_title=f"{title} - {APP_NAME}", page_icon=icon)
    st.title(f"{icon} {title}")
    st.caption(APP_NAME)
    st.markdown(load_page(name))
