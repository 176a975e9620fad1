"""
Session Statistics UI

Renders progress metrics and controls.
"""

from typing import Optional

import streamlit as st

from core.review_session import ReviewSession, SessionState


def render_session_stats(session: Optional[ReviewSession]) -> bool:
    """
    Render session progress and exit button.

    Returns:
        True if quit button was clicked, False otherwise
    """
    if session is None or session.state is not SessionState.ACTIVE:
        return False

    total = len(session.queue)
    col1, col2, col3, col4 = st.columns([2, 2, 2, 1])

    with col1:
        st.metric("Progress", f"{session.position}/{total}")

    with col2:
        st.metric("Passed", session.passed)

    with col3:
        st.metric("Failed", session.failed)

    with col4:
        st.markdown("<br>", unsafe_allow_html=True)  # Align with metrics
        if st.button("❌", help="Quit session", use_container_width=True):
            return True

    st.progress(session.progress)
    st.divider()
    return False


def render_session_complete(summary: Optional[dict]) -> None:
    """Render the summary of the last finished session."""
    if not summary or not summary.get("graded"):
        return
    st.success(f"🎉 Session complete! You reviewed {summary['graded']} words.")
    accuracy = summary["passed"] / summary["graded"] * 100
    st.info(f"Remembered {summary['passed']}, forgot {summary['failed']} ({accuracy:.0f}%)")
