"""
Record store: the in-process holder of the full word list.

Keeps a cached copy of the list so repeated reads don't re-parse the
blob. The cache is only refreshed on explicit load(force=True).

Every mutating operation is a whole-store read-modify-write that ends
with a single save(). The lock serializes writers (Streamlit script
thread and the sync retry thread).
"""

from __future__ import annotations

import json
import threading
from typing import Callable, Optional, TypeVar

from core.blob_store import BlobStore
from core.config import STORE_KEY
from core.errors import ImportValidationError
from core.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class RecordStore:
    """
    Word list persistence with corruption fallback.

    Records are plain dicts in the persisted camelCase layout
    (see core.schemas.WordRecord).
    """

    def __init__(self, blob_store: BlobStore, key: str = STORE_KEY):
        self.blob_store = blob_store
        self.key = key
        self.lock = threading.RLock()
        self._cache: Optional[list[dict]] = None

    # ---- Load / Save ----

    def load(self, force: bool = False) -> list[dict]:
        """
        Get the full word list.

        Missing, unparsable or non-list data degrades to an empty list;
        entries that are not objects are dropped.

        Args:
            force: Re-read the blob even if a cached list exists

        Returns:
            The cached list (mutations must go through save/update)
        """
        with self.lock:
            if not force and self._cache is not None:
                return self._cache

            raw = self.blob_store.get(self.key)
            records: list[dict] = []
            if raw:
                try:
                    parsed = json.loads(raw)
                except (json.JSONDecodeError, TypeError) as exc:
                    logger.warning("[STORE] Stored word list is corrupt, starting empty: %s", exc)
                else:
                    if isinstance(parsed, list):
                        records = [r for r in parsed if isinstance(r, dict)]
                        if len(records) != len(parsed):
                            logger.warning("[STORE] Dropped %d stored entries that are not objects",
                                           len(parsed) - len(records))
                    else:
                        logger.warning("[STORE] Stored word list is not an array, starting empty")

            self._cache = records
            return self._cache

    def save(self, records: list[dict]) -> None:
        """Replace the whole list and persist it in one write."""
        with self.lock:
            self._cache = records if isinstance(records, list) else []
            self.blob_store.set(self.key, json.dumps(self._cache, ensure_ascii=False))

    def update(self, mutator: Callable[[list[dict]], T]) -> T:
        """
        Run a whole-store read-modify-write.

        The mutator receives the current list, edits it in place and may
        return a value; the list is persisted afterwards.
        """
        with self.lock:
            records = self.load()
            result = mutator(records)
            self.save(records)
            return result

    # ---- Record Access ----

    def get(self, record_id: str) -> Optional[dict]:
        return next((r for r in self.load() if r.get("id") == record_id), None)

    def apply_patch(self, record_id: str, patch: dict) -> bool:
        """
        Merge a patch into the record with the given id and persist.

        Returns:
            True if the record existed, False otherwise (nothing written)
        """
        with self.lock:
            records = self.load()
            idx = next((i for i, r in enumerate(records) if r.get("id") == record_id), -1)
            if idx < 0:
                logger.warning("[STORE] No record with id %s, patch dropped", record_id)
                return False
            records[idx] = {**records[idx], **patch}
            self.save(records)
            return True

    # ---- Import / Export ----

    def export_json(self) -> str:
        """Serialize the full store as a pretty-printed JSON document."""
        return json.dumps(self.load(), ensure_ascii=False, indent=2)

    def import_json(self, text: str | bytes) -> int:
        """
        Replace the whole store with an imported JSON array.

        Args:
            text: JSON document (str or UTF-8 bytes)

        Returns:
            Number of records imported

        Raises:
            ImportValidationError: payload is not UTF-8, not valid JSON, not an
                array, or holds non-object entries; the store is left unchanged
        """
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8-sig")
            except UnicodeDecodeError as exc:
                raise ImportValidationError(f"Import failed: file is not UTF-8 text ({exc.reason})") from exc
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ImportValidationError(f"Import failed: {exc}") from exc

        if not isinstance(parsed, list):
            raise ImportValidationError("Import failed: JSON document must be an array of words")
        if not all(isinstance(r, dict) for r in parsed):
            raise ImportValidationError("Import failed: every entry must be a word object")

        self.save(parsed)
        logger.info("[STORE] Imported %d records", len(parsed))
        return len(parsed)
