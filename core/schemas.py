"""
Pydantic models for word records.

Three shapes are involved:
- RemoteWord: one element of the proxy's /sync response (flat Notion row)
- WordMeta: the read-only content block stored on each local record
- WordRecord: the persisted local record (content + review progress)

Local records are persisted and passed around as plain dicts with
camelCase keys; WordRecord documents and builds that layout.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.srs.constants import MAX_BOX, MIN_BOX


# Remote keys that carry multi-value content (list or newline-delimited string)
MULTI_VALUE_FIELDS = ("pron", "senses", "same", "coll", "conf", "beans")
META_FIELDS = ("pron", "senses", "ety", "same", "coll", "conf", "beans")


class PartOfSpeech(str, Enum):
    """Part of speech categories (guessed, cosmetic only)."""
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adj"
    ADVERB = "adverb"
    UNKNOWN = "unknown"


def nl_split(value: Any) -> list[str]:
    """
    Normalize a multi-value field.

    Sequences are used as-is; anything else is stringified, split on
    newlines, trimmed, and empty lines are dropped.
    """
    if isinstance(value, (list, tuple)):
        return list(value)
    if not value:
        return []
    return [line.strip() for line in str(value).split("\n") if line.strip()]


def generate_record_id() -> str:
    """Generate a unique local record ID (UUID)."""
    return str(uuid.uuid4())


# ---- Content ----

class WordMeta(BaseModel):
    """Auxiliary read-only content supplied by the remote source."""
    pron: list[str] = Field(default_factory=list, description="Pronunciations")
    senses: list[str] = Field(default_factory=list, description="Ordered senses")
    ety: str = Field(default="", description="Etymology text")
    same: list[str] = Field(default_factory=list, description="Same-origin words")
    coll: list[str] = Field(default_factory=list, description="Collocations")
    conf: list[str] = Field(default_factory=list, description="Confusable words")
    beans: list[str] = Field(default_factory=list, description="Free tags")


class RemoteWord(BaseModel):
    """
    One record from the remote /sync endpoint.

    Multi-value fields may arrive as a list of strings or a single
    newline-delimited string; both are normalized to lists.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    notion_id: Optional[str] = Field(default=None, alias="notionId")
    edited: Optional[str] = None
    word: str = ""
    pron: list[str] = Field(default_factory=list)
    senses: list[str] = Field(default_factory=list)
    ety: str = ""
    same: list[str] = Field(default_factory=list)
    coll: list[str] = Field(default_factory=list)
    conf: list[str] = Field(default_factory=list)
    beans: list[str] = Field(default_factory=list)

    @field_validator("word", mode="before")
    @classmethod
    def _strip_word(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator(*MULTI_VALUE_FIELDS, mode="before")
    @classmethod
    def _split_multi_value(cls, value: Any) -> list[str]:
        return [str(item) for item in nl_split(value)]

    @field_validator("ety", mode="before")
    @classmethod
    def _ety_text(cls, value: Any) -> str:
        return str(value) if value else ""

    @field_validator("notion_id", "edited", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    def full_meta(self) -> dict:
        """All meta fields, with defaults for anything the payload omitted."""
        return WordMeta(**{key: getattr(self, key) for key in META_FIELDS}).model_dump()

    def present_meta(self) -> dict:
        """Only the meta fields the payload actually carried."""
        return {
            key: getattr(self, key)
            for key in META_FIELDS
            if key in self.model_fields_set
        }


# ---- Local Record ----

class WordRecord(BaseModel):
    """
    A single locally stored word with its review progress.

    The persisted layout uses camelCase keys (see aliases).
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_record_id)
    word: str
    note: str = ""
    box: int = Field(default=MIN_BOX, ge=MIN_BOX, le=MAX_BOX)
    next_due_iso: str = Field(alias="nextDueISO")
    created_at_iso: str = Field(alias="createdAtISO")
    success: int = Field(default=0, ge=0)
    fail: int = Field(default=0, ge=0)
    meta: WordMeta = Field(default_factory=WordMeta)
    notion_id: Optional[str] = Field(default=None, alias="notionId")
    notion_edited: Optional[str] = Field(default=None, alias="notionEdited")

    @field_validator("next_due_iso")
    @classmethod
    def _valid_calendar_date(cls, value: str) -> str:
        date.fromisoformat(value)
        if len(value) != 10:
            raise ValueError("nextDueISO must be YYYY-MM-DD")
        return value

    @classmethod
    def from_remote(
        cls,
        remote: RemoteWord,
        today: date,
        now: Optional[datetime] = None,
        record_id: Optional[str] = None
    ) -> "WordRecord":
        """
        Build a brand-new record for a remote word that matched nothing locally.
        """
        now = now or datetime.now(timezone.utc)
        return cls(
            id=record_id or generate_record_id(),
            word=remote.word,
            box=MIN_BOX,
            next_due_iso=today.isoformat(),
            created_at_iso=now.isoformat(),
            meta=WordMeta(**remote.full_meta()),
            notion_id=remote.notion_id,
            notion_edited=remote.edited,
        )

    def to_store_dict(self) -> dict:
        """Serialize to the persisted camelCase layout."""
        return self.model_dump(by_alias=True)
