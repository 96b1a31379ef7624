"""Published posts."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from recruitapi.common import (
    PK_POST_PREFIX,
    SK_POST_SEPARATOR,
    LanguageCode,
    ValidationError,
    is_valid_language,
)
from recruitapi.documents import Document, DocumentType


def _meta(attr: str, json_name: str) -> dict[str, Any]:
    return {"dynamodb": attr, "json": json_name}


def _now_rfc3339() -> str:
    text = datetime.now().astimezone().replace(microsecond=0).isoformat()
    return text[:-6] + "Z" if text.endswith("+00:00") else text


def _code(language: LanguageCode | str) -> str:
    return language.value if isinstance(language, LanguageCode) else language


def post_gsi_pk(prefix: str, language: LanguageCode | str) -> str:
    """Return the index key under which posts in ``language`` are listed.

    The key always starts with the post prefix; ``prefix`` is ignored.
    """
    return PK_POST_PREFIX + _code(language) + SK_POST_SEPARATOR


@dataclass
class Post:
    """A post published in one language."""

    pk: str = field(default="", metadata=_meta("PK", "id"))
    sk: str = field(default="", metadata=_meta("SK", "-"))
    gsi_pk: str = field(default="", metadata=_meta("GSI_PK", "-"))
    created_at: str = field(default="", metadata=_meta("CreatedAt", "createdAt"))
    title: str = field(default="", metadata=_meta("Title", "title"))
    content: str = field(default="", metadata=_meta("Content", "content"))

    def generate_keys(self, language: LanguageCode | str) -> None:
        """Assign a fresh identifier and the language index key."""
        if not is_valid_language(language):
            raise ValidationError("validation error: invalid language")
        self.pk = f"{PK_POST_PREFIX}{uuid.uuid4()}"
        self.sk = self.pk
        self.gsi_pk = post_gsi_pk(PK_POST_PREFIX, language)

    def generate_attributes(self) -> None:
        """Stamp the creation time."""
        self.created_at = _now_rfc3339()

    def validate(self, docs: Iterable[Document]) -> None:
        """Check required fields and that every mandatory document is present."""
        checks = (
            ("PK", bool(self.pk)),
            ("SK", bool(self.sk)),
            ("CreatedAt", bool(self.created_at)),
            ("Title", bool(self.title)),
            ("Content", bool(self.content)),
        )
        missing = [label for label, present in checks if not present]
        if missing:
            raise ValidationError(
                f"validation failed -> missing or invalid fields: {', '.join(missing)}"
            )
        mandatory = self.mandatory_documents()
        count = sum(1 for doc in docs if doc.sk in mandatory)
        if count != len(mandatory):
            raise ValidationError("wrong number of documents")

    def mandatory_documents(self) -> list[str]:
        """Return the document types every post must include."""
        return [DocumentType.THUMBNAIL.value]