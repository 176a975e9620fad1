"""
Direct Notion database source.

Pulls every page of a Notion database through the query API and flattens
typed properties (title / rich_text / multi_select) into the same record
shape the /sync proxy returns:

    {notionId, edited, word, pron, senses, ety, same, coll, conf, beans}
"""

from __future__ import annotations

import json
import time
from typing import Any, Callable, Optional

import httpx

from core.config import (
    NOTION_DB_ALLOWLIST,
    NOTION_DB_ID,
    NOTION_FIELDS_JSON,
    NOTION_TOKEN,
    SYNC_TIMEOUT_SECONDS,
)
from core.errors import ProtocolError, SourceError
from core.log import get_logger
from core.schemas import nl_split
from core.sync.fetcher import decode_json_body, request_with_deadline

logger = get_logger(__name__)


NOTION_API_BASE = "https://api.notion.com/v1"
NOTION_API_VERSION = "2022-06-28"
PAGE_SIZE = 100

# Record key -> Notion property name and type
DEFAULT_FIELDS: dict[str, dict] = {
    "word": {"name": "Word", "type": "title"},
    "pron": {"name": "Pron", "type": "rich_text"},
    "senses": {"name": "Senses", "type": "rich_text"},
    "ety": {"name": "Etymology", "type": "rich_text"},
    "same": {"name": "Same", "type": "multi_select"},
    "coll": {"name": "Collocations", "type": "multi_select"},
    "conf": {"name": "Confusions", "type": "multi_select"},
    "beans": {"name": "Beans", "type": "multi_select"},
}

LIST_KEYS = ("pron", "senses", "same", "coll", "conf", "beans")


# ---- Configuration Helpers ----

def parse_fields_config(json_text: str) -> dict[str, dict]:
    """
    Overlay a JSON field mapping on DEFAULT_FIELDS.

    Invalid JSON falls back to the default mapping.
    """
    if not json_text:
        return DEFAULT_FIELDS
    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as exc:
        logger.warning("[NOTION] Failed to parse NOTION_FIELDS_JSON, using default mapping: %s", exc)
        return DEFAULT_FIELDS
    if not isinstance(parsed, dict):
        logger.warning("[NOTION] NOTION_FIELDS_JSON is not an object, using default mapping")
        return DEFAULT_FIELDS
    return {**DEFAULT_FIELDS, **parsed}


def parse_allow_list(raw: str) -> set[str]:
    """Comma-separated allow-list to a set (empty entries dropped)."""
    if not raw:
        return set()
    return {item.strip() for item in raw.split(",") if item.strip()}


def resolve_database_id(
    configured: str,
    requested: str = "",
    allow_list: Optional[set[str]] = None
) -> str:
    """
    Decide which database to query.

    The configured id wins over the requested one and is always allowed.

    Raises:
        SourceError(400): no database id at all
        SourceError(403): id not in a non-empty allow-list (without "*")
    """
    allowed = set(allow_list or set())
    configured = (configured or "").strip()
    if configured:
        allowed.add(configured)
    db_id = configured or (requested or "").strip()

    if not db_id:
        raise SourceError(400, "missing db")
    if allowed and "*" not in allowed and db_id not in allowed:
        raise SourceError(403, "db not allowed")
    return db_id


# ---- Page Mapping ----

def _plain_text(blocks: Any) -> list[str]:
    return [(block or {}).get("plain_text") or "" for block in (blocks or [])]


def get_property_value(properties: dict, config: dict) -> Any:
    """
    Flatten one typed Notion property according to its field config.
    """
    prop_type = config.get("type")
    prop = properties.get(config.get("name"))
    if not prop:
        if "default" in config:
            return config["default"]
        return [] if prop_type == "multi_select" else ""

    if prop_type == "title":
        return "".join(_plain_text(prop.get("title"))).strip()
    if prop_type == "rich_text":
        return "\n".join(_plain_text(prop.get("rich_text"))).strip()
    if prop_type == "multi_select":
        return [option.get("name") for option in (prop.get("multi_select") or [])]
    return config.get("default", "")


def map_page(page: dict, fields: dict[str, dict] = DEFAULT_FIELDS) -> dict:
    """
    Map a Notion page object to a flat remote word record.
    """
    properties = page.get("properties") or {}

    def field_value(key: str) -> Any:
        config = fields.get(key)
        if not config:
            return None
        return get_property_value(properties, config)

    record = {
        "notionId": page.get("id"),
        "edited": page.get("last_edited_time"),
        "word": field_value("word") or "",
        "ety": field_value("ety") or "",
    }
    for key in LIST_KEYS:
        record[key] = nl_split(field_value(key))
    return record


# ---- Source ----

class NotionSource:
    """
    Paginated reader for one Notion database.

    One pull (all pages) must finish within `timeout` seconds.
    """

    def __init__(
        self,
        token: str,
        database_id: str,
        fields: Optional[dict[str, dict]] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = SYNC_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.token = token
        self.database_id = database_id
        self.fields = fields or DEFAULT_FIELDS
        self.client = client
        self.timeout = timeout
        self.clock = clock

    @classmethod
    def from_config(cls, requested_db: str = "") -> "NotionSource":
        """Build a source from environment configuration."""
        db_id = resolve_database_id(
            NOTION_DB_ID,
            requested_db,
            parse_allow_list(NOTION_DB_ALLOWLIST),
        )
        return cls(
            token=NOTION_TOKEN,
            database_id=db_id,
            fields=parse_fields_config(NOTION_FIELDS_JSON),
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Notion-Version": NOTION_API_VERSION,
        }

    def _query(self, client: httpx.Client, cursor: Optional[str], deadline: float) -> dict:
        body: dict[str, Any] = {"page_size": PAGE_SIZE}
        if cursor:
            body["start_cursor"] = cursor

        response, content = request_with_deadline(
            client,
            "POST",
            f"{NOTION_API_BASE}/databases/{self.database_id}/query",
            deadline,
            clock=self.clock,
            headers=self._headers(),
            json=body,
        )

        if not response.is_success:
            text = content.decode("utf-8", errors="replace")
            raise SourceError(
                response.status_code,
                f"Notion responded with {response.status_code}: {text}",
            )

        payload = decode_json_body(content, source="Notion")
        if not isinstance(payload, dict):
            raise ProtocolError("Notion query response is not an object")
        return payload

    def pull_database(self) -> list[dict]:
        """
        Fetch and map every page of the database.

        Raises:
            SourceError: missing token or a non-2xx Notion response
            ProtocolError: malformed query response
            RequestTimeout: the whole pull ran past `timeout`
        """
        if not self.token:
            raise SourceError(500, "Missing NOTION_TOKEN")

        deadline = self.clock() + self.timeout
        if self.client is not None:
            return self._pull(self.client, deadline)
        with httpx.Client(timeout=self.timeout) as client:
            return self._pull(client, deadline)

    def _pull(self, client: httpx.Client, deadline: float) -> list[dict]:
        items: list[dict] = []
        cursor: Optional[str] = None
        has_more = True

        while has_more:
            payload = self._query(client, cursor, deadline)
            results = payload.get("results") or []
            if not isinstance(results, list):
                raise ProtocolError("Notion query results are not an array")
            items.extend(map_page(page, self.fields) for page in results if isinstance(page, dict))
            cursor = payload.get("next_cursor")
            has_more = bool(payload.get("has_more")) and bool(cursor)

        logger.info("[NOTION] Pulled %d pages from database %s", len(items), self.database_id)
        return items

    def as_fetcher(self):
        """Zero-argument fetcher for SyncMerger."""
        return self.pull_database
