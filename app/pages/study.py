"""
Study page rendering.
"""

from __future__ import annotations

import random

import streamlit as st

from app.session_controller import process_feedback, start_new_session, toggle_details
from app.ui import (
    render_feedback_buttons,
    render_flashcard,
    render_session_complete,
    render_word_details,
)
from core.example_sentences import generate_example
from core.review_session import ReviewSession


def render_study_page() -> None:
    """
    Render the study flow (intro or active session).
    """
    session: ReviewSession | None = st.session_state.review_session
    if session is None or session.current is None:
        _render_intro_screen()
    else:
        _render_active_session(session)


def _render_intro_screen() -> None:
    st.markdown("<style>.stApp h1 { font-size: 1.6rem; }</style>", unsafe_allow_html=True)
    st.title("🗂️ Word Cards")
    st.markdown("<br>" * 2, unsafe_allow_html=True)

    render_session_complete(st.session_state.last_summary)

    st.markdown("Review the words that are due today, or the newest ones if nothing is due.")
    if st.button("Start Review", type="primary", use_container_width=True):
        if start_new_session():
            st.rerun()


def _render_active_session(session: ReviewSession) -> None:
    record = session.current
    word = str(record.get("word") or "")

    # Seeded per record so the sentence is stable across reruns
    example = generate_example(word, random.Random(record.get("id")))
    footer = [f"BOX {record.get('box', 1)}", f"DUE {record.get('nextDueISO', '-')}"]

    st.markdown("<br>", unsafe_allow_html=True)
    render_flashcard(word, lede=example, footer_tags=footer)
    st.markdown("<br>", unsafe_allow_html=True)

    label = "Hide Details" if session.detail_expanded else "Show Details"
    if st.button(label, use_container_width=True, key=f"details_{session.position}"):
        toggle_details()
        st.rerun()

    if session.detail_expanded:
        render_word_details(record, expanded=True)

    st.markdown("<br>", unsafe_allow_html=True)
    outcome = render_feedback_buttons(key_suffix=str(session.position))
    if outcome is not None:
        process_feedback(outcome)
