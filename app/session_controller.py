"""
Session lifecycle helpers for Streamlit app.
"""

from __future__ import annotations

import streamlit as st

from app.state import get_services
from core.errors import EmptyStoreError
from core.review_session import ReviewSession
from core.srs import ReviewOutcome


def _summarize(session: ReviewSession) -> dict:
    return {
        "graded": session.graded,
        "passed": session.passed,
        "failed": session.failed,
    }


def start_new_session() -> bool:
    """
    Start a new review session.

    Returns:
        True if a session is now active
    """
    services = get_services()
    session = ReviewSession(services.store)
    session.on_finished = lambda: _finish(session)

    try:
        session.start()
    except EmptyStoreError as exc:
        st.error(str(exc))
        return False

    st.session_state.review_session = session
    st.session_state.last_summary = None
    return True


def _finish(session: ReviewSession) -> None:
    st.session_state.last_summary = _summarize(session)
    st.session_state.review_session = None


def process_feedback(outcome: ReviewOutcome) -> None:
    """
    Grade the current card and move to the next one.
    """
    session: ReviewSession | None = st.session_state.review_session
    if session is not None and session.current is not None:
        session.grade(outcome)
    st.rerun()


def toggle_details() -> None:
    session: ReviewSession | None = st.session_state.review_session
    if session is not None:
        session.toggle_detail()


def end_session() -> None:
    """End the current session (grades already given are kept)."""
    session: ReviewSession | None = st.session_state.review_session
    if session is not None:
        session.exit()
    st.session_state.review_session = None
