"""
Flashcard UI Component

Renders the card front: headline word, example sentence, footer tags.
"""

from __future__ import annotations

from html import escape
from typing import Sequence

import streamlit as st
from app.ui.flashcard_style import (
    CARD_FRONT_STYLE,
    CARD_MIN_HEIGHT,
    CARD_PADDING,
    FlashcardStyle,
)


def render_flashcard(
    headline: str,
    lede: str = "",
    footer_tags: Sequence[str] = (),
    style: FlashcardStyle | None = None,
) -> None:
    """
    Render a word card.

    Args:
        headline: Primary text (center, large)
        lede: Optional sentence below the headline
        footer_tags: Short labels along the bottom edge (e.g. "BOX 2")
        style: Style preset (defaults to the card front)
    """
    style = style or CARD_FRONT_STYLE
    headline_text = escape(headline)
    if style.headline_uppercase:
        headline_text = headline_text.upper()

    headline_html = (
        f'<h1 style="font-size: {style.headline_font_size}; color: {style.headline_color}; '
        'margin: 0; text-align: center; line-height: 1.3; letter-spacing: 0.04em; '
        'overflow-wrap: anywhere; word-break: break-word; '
        'border-top: 3px double #333; border-bottom: 3px double #333; padding: 8px 0;">'
        f"{headline_text}</h1>"
    )

    lede_html = ""
    if lede:
        lede_html = (
            f'<p style="font-size: {style.lede_font_size}; color: {style.lede_color}; '
            'font-style: italic; margin: 18px 0 0 0; text-align: center; line-height: 1.4;">'
            f"{escape(lede)}</p>"
        )

    footer_html = ""
    if footer_tags:
        tags = "".join(
            f'<span style="border: 1px solid {style.footer_color}; padding: 2px 8px; '
            f'margin: 0 4px; border-radius: 3px;">{escape(tag)}</span>'
            for tag in footer_tags
        )
        footer_html = (
            f'<div style="margin-top: 22px; font-size: {style.footer_font_size}; '
            f'color: {style.footer_color}; letter-spacing: 0.08em;">{tags}</div>'
        )

    html = (
        f'<div style="background-color: {style.bg_color}; padding: {CARD_PADDING}; '
        'border-radius: 6px; text-align: center; box-shadow: 0 4px 6px '
        f'rgba(0, 0, 0, 0.1); min-height: {CARD_MIN_HEIGHT}; display: flex; '
        'flex-direction: column; align-items: center; justify-content: center; '
        f'font-family: Georgia, serif;">{headline_html}{lede_html}{footer_html}</div>'
    )

    st.markdown(html, unsafe_allow_html=True)
