"""
Library page: stats, recent words, sync status, import/export.
"""

from __future__ import annotations

from datetime import datetime

import pandas as pd
import streamlit as st

from app.state import get_services
from core.errors import ImportValidationError
from core.stats import compute_stats, notion_page_url
from core.sync import SyncState

_STATUS_RENDERERS = {
    SyncState.SUCCEEDED: st.success,
    SyncState.FAILED: st.error,
    SyncState.OFFLINE: st.warning,
    SyncState.RETRYING: st.warning,
}


def render_library_page() -> None:
    services = get_services()

    _render_sync_status(services.merger)
    st.divider()

    stats = compute_stats(services.store.load())
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Words", stats.total)
    col2.metric("Due", stats.due)
    col3.metric("Remembered", stats.ok)
    col4.metric("Forgot", stats.bad)

    st.markdown("### Recent Words")
    if stats.recent:
        st.dataframe(
            _recent_frame(stats.recent),
            use_container_width=True,
            hide_index=True,
            column_config={
                "notion": st.column_config.LinkColumn("Notion", display_text="open"),
            },
        )
    else:
        st.caption("No words yet.")

    st.divider()
    _render_backup(services.store)


def _recent_frame(records: list[dict]) -> pd.DataFrame:
    rows = [
        {
            "word": r.get("word", ""),
            "box": r.get("box", 1),
            "due": r.get("nextDueISO", ""),
            "remembered": r.get("success", 0),
            "forgot": r.get("fail", 0),
            "notion": notion_page_url(r.get("notionId")),
        }
        for r in records
    ]
    return pd.DataFrame(rows)


def _render_sync_status(merger) -> None:
    status = merger.last_status
    col1, col2 = st.columns([4, 1])
    with col1:
        if status is None:
            st.info("Waiting for the first sync...")
        else:
            render = _STATUS_RENDERERS.get(status.state, st.info)
            render(status.message)
    with col2:
        if st.button("Sync now", use_container_width=True, disabled=not merger.configured):
            with st.spinner("Syncing..."):
                merger.auto_sync()
            st.rerun()


def _render_backup(store) -> None:
    st.markdown("### Backup")
    col1, col2 = st.columns(2)

    with col1:
        stamp = datetime.now().strftime("%Y%m%d")
        st.download_button(
            "Export JSON",
            data=store.export_json(),
            file_name=f"wordcards-{stamp}.json",
            mime="application/json",
            use_container_width=True,
        )

    with col2:
        upload = st.file_uploader("Import JSON", type=["json"], label_visibility="collapsed")
        if upload is not None and st.button("Replace library", use_container_width=True):
            try:
                count = store.import_json(upload.getvalue())
            except ImportValidationError as exc:
                st.session_state.import_message = ("error", f"Import failed: {exc}")
            else:
                st.session_state.import_message = ("success", f"Imported {count} words.")
            st.rerun()

    if st.session_state.import_message:
        level, message = st.session_state.import_message
        (st.error if level == "error" else st.success)(message)
        st.session_state.import_message = None
