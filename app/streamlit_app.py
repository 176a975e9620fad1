"""
Word Cards - Main App

Run with: streamlit run app/streamlit_app.py
"""

import sys
from pathlib import Path

# Make `core` and `app` importable when launched via `streamlit run`
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st

from app.router import PAGES
from app.session_controller import end_session
from app.state import ensure_session_state, get_services
from app.ui import render_session_stats


# ---- Page Setup ----

st.set_page_config(
    page_title="Word Cards",
    page_icon="🗂️",
    layout="centered"
)

get_services()
ensure_session_state()


# ---- Main App ----

def main():
    """Main app entry point."""
    quit_clicked = render_session_stats(st.session_state.review_session)
    if quit_clicked:
        end_session()
        st.rerun()

    tabs = st.tabs([page.title for page in PAGES])
    for tab, page in zip(tabs, PAGES):
        with tab:
            page.render()


if __name__ == "__main__":
    main()
