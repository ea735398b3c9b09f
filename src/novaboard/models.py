import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from novaboard.config import PREVIEW_LENGTH
from novaboard.utils import truncate_text


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Entry:
    text: str
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text:
            raise ValueError("entry text must be a non-empty string")

    @classmethod
    def create(cls, text: str) -> "Entry":
        return cls(text=text)

    @property
    def preview(self) -> str:
        return truncate_text(self.text, PREVIEW_LENGTH)

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "text": self.text,
            "timestamp": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        entry_id = data["id"]
        timestamp = data["timestamp"]
        if not isinstance(entry_id, str) or not entry_id:
            raise ValueError("entry id must be a non-empty string")
        if not isinstance(timestamp, str):
            raise TypeError("entry timestamp must be an ISO-8601 string")
        return cls(text=data["text"], id=entry_id, created_at=datetime.fromisoformat(timestamp))
