"""
Word Details UI

Renders the read-only content block (meta) of a word record.
"""

from dataclasses import dataclass

import streamlit as st

from core.schemas import nl_split


@dataclass(frozen=True)
class DetailWidget:
    kind: str
    key: str
    label: str


DEFAULT_WIDGETS = [
    DetailWidget(kind="list", key="pron", label="Pronunciations"),
    DetailWidget(kind="senses", key="senses", label="Senses"),
    DetailWidget(kind="text", key="ety", label="Etymologies"),
    DetailWidget(kind="tags", key="same", label="Same Origin"),
    DetailWidget(kind="tags", key="coll", label="Collocations"),
    DetailWidget(kind="tags", key="conf", label="Confusions"),
    DetailWidget(kind="tags", key="beans", label="Beans"),
]


def render_word_details(record: dict, expanded: bool = False) -> None:
    """
    Render the details expander for a word record.

    Args:
        record: Local word record
        expanded: Whether the expander starts open
    """
    meta = record.get("meta") if isinstance(record.get("meta"), dict) else {}

    with st.expander("📖 Details", expanded=expanded):
        shown = 0
        for widget in DEFAULT_WIDGETS:
            if _render_widget(widget, meta.get(widget.key)):
                shown += 1
        if not shown:
            st.caption("No details synced for this word yet.")


def _render_widget(widget: DetailWidget, value) -> bool:
    if widget.kind == "text":
        text = str(value).strip() if value else ""
        if not text:
            return False
        st.markdown(f"**{widget.label}**")
        st.markdown(text.replace("\n", "  \n"))
        return True

    items = nl_split(value)
    if not items:
        # Confusions always get a slot so their absence is visible
        if widget.key == "conf":
            st.markdown(f"**{widget.label}**")
            st.caption("no records")
            return True
        return False

    st.markdown(f"**{widget.label}**")
    if widget.kind == "senses":
        st.markdown("\n".join(f"{idx}. {item}" for idx, item in enumerate(items, start=1)))
    elif widget.kind == "tags":
        st.markdown(" ".join(f"`{item}`" for item in items))
    else:
        st.markdown("\n".join(f"- {item}" for item in items))
    return True
