"""
Configuration for the word card trainer.

All settings come from environment variables (optionally loaded from a
local .env file). Fixed protocol constants live here too so every
component reads them from one place.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

# Load environment
load_dotenv()


# ---- Remote Sync ----

NOTION_ENDPOINT = os.getenv("NOTION_ENDPOINT", "")
NOTION_DB_ID = os.getenv("NOTION_DB_ID", "")

# Direct Notion access (skips the proxy when a token is configured)
NOTION_TOKEN = os.getenv("NOTION_TOKEN", "")
NOTION_FIELDS_JSON = os.getenv("NOTION_FIELDS_JSON", "")
NOTION_DB_ALLOWLIST = os.getenv("NOTION_DB_ALLOWLIST", "")

SYNC_TIMEOUT_SECONDS: Final[float] = 12.0
SYNC_MAX_RETRIES: Final[int] = 2
SYNC_RETRY_BASE_DELAY_SECONDS: Final[float] = 0.6
AUTO_RETRY_DELAY_SECONDS: Final[float] = 60.0


# ---- Local Storage ----

STORE_KEY: Final[str] = "wordcards.v1"
DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "wordcards.db"


def get_db_path() -> Path:
    """
    Get the SQLite file holding the local key-value store.

    Uses WORDCARDS_DB_PATH when set, otherwise data/wordcards.db
    next to the project.
    """
    raw = os.getenv("WORDCARDS_DB_PATH")
    return Path(raw) if raw else DEFAULT_DB_PATH


# ---- Review ----

FALLBACK_SESSION_SIZE: Final[int] = 20
RECENT_LIST_LIMIT: Final[int] = 200
FINISH_DISPLAY_DELAY_SECONDS: Final[float] = 0.3


# ---- Logging ----

def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_format() -> str:
    return os.getenv("LOG_FORMAT", "text").lower()
