"""
Flashcard style presets and constants.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---- Shared Card Layout ----

CARD_PADDING = "32px 24px 20px 24px"
CARD_MIN_HEIGHT = "230px"
FRONT_BG_COLOR = "#f7f3ea"


# ---- Shared Typography Defaults ----

DEFAULT_HEADLINE_FONT_SIZE = "2.8em"
DEFAULT_HEADLINE_COLOR = "#1f1f1f"
DEFAULT_LEDE_FONT_SIZE = "1.1em"
DEFAULT_LEDE_COLOR = "#555"
DEFAULT_FOOTER_FONT_SIZE = "0.75em"
DEFAULT_FOOTER_COLOR = "#777"


@dataclass(frozen=True)
class FlashcardStyle:
    """
    Visual style preset for word cards.
    """
    headline_font_size: str = DEFAULT_HEADLINE_FONT_SIZE
    headline_color: str = DEFAULT_HEADLINE_COLOR
    headline_uppercase: bool = True
    lede_font_size: str = DEFAULT_LEDE_FONT_SIZE
    lede_color: str = DEFAULT_LEDE_COLOR
    footer_font_size: str = DEFAULT_FOOTER_FONT_SIZE
    footer_color: str = DEFAULT_FOOTER_COLOR
    bg_color: str = FRONT_BG_COLOR


CARD_FRONT_STYLE = FlashcardStyle()
