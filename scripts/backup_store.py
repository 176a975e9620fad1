"""
Export or import the local word store as a JSON document.

Usage:
    # Write the store to a file (or stdout with "-")
    python -m scripts.backup_store export backup.json

    # Replace the store with a previously exported file
    python -m scripts.backup_store import backup.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from core.blob_store import SqliteBlobStore
from core.config import get_db_path
from core.errors import ImportValidationError
from core.record_store import RecordStore


def open_store(db_path: Path) -> RecordStore:
    blob_store = SqliteBlobStore(db_path)
    return RecordStore(blob_store)


def export_store(store: RecordStore, target: str) -> int:
    text = store.export_json()
    if target == "-":
        sys.stdout.write(text + "\n")
    else:
        Path(target).write_text(text, encoding="utf-8")
        print(f"✓ Exported {len(store.load())} words to {target}")
    return 0


def import_store(store: RecordStore, source: str) -> int:
    path = Path(source)
    if not path.exists():
        print(f"✗ File not found: {source}")
        return 1
    try:
        count = store.import_json(path.read_bytes())
    except ImportValidationError as exc:
        print(f"✗ Import failed, store unchanged: {exc}")
        return 1
    print(f"✓ Imported {count} words from {source}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Back up or restore the local word store"
    )
    parser.add_argument(
        "action",
        choices=["export", "import"],
        help="export the store to a file, or replace it from one"
    )
    parser.add_argument(
        "path",
        help="JSON file to write/read (\"-\" exports to stdout)"
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        default=None,
        help="SQLite file (default: WORDCARDS_DB_PATH or data/wordcards.db)"
    )
    args = parser.parse_args(argv)

    store = open_store(args.db_path or get_db_path())
    if args.action == "export":
        return export_store(store, args.path)
    return import_store(store, args.path)


if __name__ == "__main__":
    sys.exit(main())
