"""
One-shot sync of the remote word list into the local store.

Uses NOTION_TOKEN (direct Notion query) when set, otherwise the
NOTION_ENDPOINT proxy.

Usage:
    python -m scripts.sync_notion [--db-path PATH]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from core.blob_store import SqliteBlobStore
from core.config import get_db_path
from core.errors import OfflineError, SyncError
from core.record_store import RecordStore
from core.sync import SyncMerger, build_default_fetcher


def run_sync(db_path: Path) -> int:
    """
    Pull remote records and merge them into the store at db_path.

    Returns:
        Process exit code
    """
    fetcher = build_default_fetcher()
    if fetcher is None:
        print("✗ No remote configured (set NOTION_TOKEN or NOTION_ENDPOINT)")
        return 2

    blob_store = SqliteBlobStore(db_path)
    store = RecordStore(blob_store)
    merger = SyncMerger(store, fetcher=fetcher, observer=lambda status: print(f"… {status.message}"))

    try:
        if not merger.connectivity():
            raise OfflineError()
        result = merger.sync_from_remote()
    except SyncError as exc:
        print(f"✗ Sync failed ({exc.kind}): {exc}")
        return 1

    print(f"✓ Sync complete: created {result.created}, updated {result.updated}")
    print(f"  Store now holds {len(store.load())} words ({db_path})")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Sync the Notion word list into the local store"
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        default=None,
        help="SQLite file to write (default: WORDCARDS_DB_PATH or data/wordcards.db)"
    )
    args = parser.parse_args(argv)
    return run_sync(args.db_path or get_db_path())


if __name__ == "__main__":
    sys.exit(main())
