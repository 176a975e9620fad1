"""
Feedback Button UI

Renders the pass/fail grading buttons.
"""

from typing import Optional

import streamlit as st
from core.srs import ReviewOutcome


def render_feedback_buttons(key_suffix: str = "") -> Optional[ReviewOutcome]:
    """
    Render grading buttons.

    Args:
        key_suffix: Makes widget keys unique per card

    Returns:
        ReviewOutcome selected by user, or None if no button clicked
    """
    st.markdown("**Did you remember this word?**")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("❌ Forgot", key=f"fail_{key_suffix}", use_container_width=True):
            return ReviewOutcome.FAIL
    with col2:
        if st.button("✅ Remembered", key=f"pass_{key_suffix}", type="primary", use_container_width=True):
            return ReviewOutcome.PASS
    return None
