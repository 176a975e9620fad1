"""
Streamlit session state and shared service initialization.
"""

from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from core.blob_store import SqliteBlobStore
from core.config import get_db_path
from core.log import get_logger
from core.record_store import RecordStore
from core.sync import SyncMerger, build_default_fetcher

logger = get_logger(__name__)


@dataclass
class Services:
    store: RecordStore
    merger: SyncMerger


@st.cache_resource
def get_services() -> Services:
    """
    Build the store and sync merger (once per server process).

    Kicks off the first sync on the retry timer's worker thread so the
    page renders without waiting on the network.
    """
    blob_store = SqliteBlobStore(get_db_path())
    store = RecordStore(blob_store)
    merger = SyncMerger(store, fetcher=build_default_fetcher())
    if merger.configured:
        merger.schedule_retry(delay=0)
    else:
        merger.auto_sync()
    logger.info("[STORE] Using %s", blob_store.db_path)
    return Services(store=store, merger=merger)


def ensure_session_state() -> None:
    """
    Populate Streamlit session_state with defaults.
    """
    if "review_session" not in st.session_state:
        st.session_state.review_session = None
    if "last_summary" not in st.session_state:
        st.session_state.last_summary = None
    if "import_message" not in st.session_state:
        st.session_state.import_message = None
