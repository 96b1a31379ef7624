"""Messages exchanged between administrators and applicants."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from recruitapi.common import MESSAGE_LETTER_PREFIX, SK_SEPARATOR, ValidationError


def _meta(attr: str, json_name: str) -> dict[str, Any]:
    return {"dynamodb": attr, "json": json_name}


def _now_rfc3339() -> str:
    text = datetime.now().astimezone().replace(microsecond=0).isoformat()
    return text[:-6] + "Z" if text.endswith("+00:00") else text


class MessageAuthor(str, enum.Enum):
    """Who wrote a message."""

    ADMIN = "admin"
    USER = "user"


def create_message_sk() -> str:
    """Return a fresh sort key for a message."""
    return f"{MESSAGE_LETTER_PREFIX}{SK_SEPARATOR}{uuid.uuid4()}"


@dataclass
class Message:
    """A message attached to a parent entity."""

    pk: str = field(default="", metadata=_meta("PK", "id"))
    sk: str = field(default="", metadata=_meta("SK", "-"))
    author: MessageAuthor | str = field(default="", metadata=_meta("Author", "author"))
    is_read: bool | None = field(default=None, metadata=_meta("IsRead", "isRead"))
    content: str = field(default="", metadata=_meta("Content", "content"))
    created_at: str = field(default="", metadata=_meta("CreatedAt", "createdAt"))

    def generate_keys(self, parent_pk: str) -> None:
        """Key the message under its parent entity with a fresh identifier."""
        self.pk = parent_pk
        self.sk = create_message_sk()

    def generate_attributes(self, author: MessageAuthor | str) -> None:
        """Set the author and mark the message as new and unread."""
        self.author = author
        self.created_at = _now_rfc3339()
        self.is_read = False

    def validate(self) -> None:
        """Raise ValidationError if a required field is missing."""
        checks = (
            ("PK", bool(self.pk)),
            ("SK", bool(self.sk)),
            ("Author", bool(self.author)),
            ("IsRead", self.is_read is not None),
            ("Content", bool(self.content)),
            ("CreatedAt", bool(self.created_at)),
        )
        missing = [label for label, present in checks if not present]
        if missing:
            raise ValidationError(
                f"message validation failed: missing or invalid fields: {', '.join(missing)}"
            )