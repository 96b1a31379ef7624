"""Applications submitted by candidates."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from recruitapi.common import (
    DOCUMENT_LETTER_PREFIX,
    PK_APP_PREFIX,
    PK_SEPARATOR,
    ValidationError,
    is_valid_email,
)
from recruitapi.documents import Document, DocumentType


def _meta(attr: str, json_name: str) -> dict[str, Any]:
    return {"dynamodb": attr, "json": json_name}


def _now_rfc3339() -> str:
    text = datetime.now().astimezone().replace(microsecond=0).isoformat()
    return text[:-6] + "Z" if text.endswith("+00:00") else text


class PreScreeningStatus(str, enum.Enum):
    """Outcome of the pre-screening of an application."""

    PQ = "PQ"
    PA = "PA"
    PFA = "PFA"
    DGKP = "DGKP"
    NQ = "NQ"


@dataclass
class Accommodation:
    """Where and when an employer houses the candidate."""

    location: str = field(default="", metadata=_meta("Location", "location"))
    from_: str = field(default="", metadata=_meta("From", "from"))
    to: str = field(default="", metadata=_meta("To", "to"))


@dataclass
class EmployerInfo:
    """The employer a candidate has been placed with."""

    name: str = field(default="", metadata=_meta("Name", "name"))
    accommodation: Accommodation = field(
        default_factory=Accommodation, metadata=_meta("Accommodation", "accommodation")
    )


@dataclass
class GermanTrainingInfo:
    """Progress of the candidate's language training."""

    exam_date: str = field(default="", metadata=_meta("ExamDate", "examDate"))


@dataclass
class Application:
    """A candidate's application."""

    pk: str = field(default="", metadata=_meta("PK", "id"))
    sk: str = field(default="", metadata=_meta("SK", "-"))
    gsi_pk: str = field(default="", metadata=_meta("GSI_PK", "-"))
    created_at: str = field(default="", metadata=_meta("CreatedAt", "createdAt"))
    name: str = field(default="", metadata=_meta("Name", "name"))
    email: str = field(default="", metadata=_meta("Email", "email"))
    message: str = field(default="", metadata=_meta("Message", "message"))
    analysed: bool | None = field(default=None, metadata=_meta("Analysed", "analysed"))
    pre_screening_status: PreScreeningStatus | str = field(
        default="", metadata=_meta("PreScreeningStatus", "preScreeningStatus")
    )
    cognito_id: str | None = field(default=None, metadata=_meta("CognitoID", "-"))
    german_training_info: GermanTrainingInfo | None = field(
        default=None, metadata=_meta("GermanTrainingInfo", "germanTrainingInfo")
    )
    employer_info: EmployerInfo | None = field(
        default=None, metadata=_meta("EmployerInfo", "employerInfo")
    )

    def generate_keys(self) -> None:
        """Assign a fresh identifier and the index key."""
        self.pk = f"{PK_APP_PREFIX}{PK_SEPARATOR}{uuid.uuid4()}"
        self.sk = self.pk
        self.gsi_pk = PK_APP_PREFIX
        self.cognito_id = "NA"

    def generate_attributes(self) -> None:
        """Set the initial state of a new application."""
        self.analysed = False
        self.pre_screening_status = PreScreeningStatus.PQ
        self.created_at = _now_rfc3339()

    def validate(self, docs: Iterable[Document]) -> None:
        """Check required fields and that every mandatory document is present."""
        missing = []
        if not self.name:
            missing.append("Name")
        if not is_valid_email(self.email):
            missing.append("Email")
        if missing:
            raise ValidationError(
                f"application validation failed: missing or invalid fields: {', '.join(missing)}"
            )

        prefix = DOCUMENT_LETTER_PREFIX + "-"
        mandatory = self.mandatory_documents()
        count = 0
        for doc in docs:
            if not doc.sk.startswith(prefix):
                raise ValidationError("wrong document prefix")
            if doc.sk[len(prefix):] in mandatory:
                count += 1
        if count != len(mandatory):
            raise ValidationError("wrong number of documents")

    def mandatory_documents(self) -> list[str]:
        """Return the document types every application must include."""
        return [DocumentType.CV.value, DocumentType.CONSENT.value]

    def email_data(self) -> tuple[str, str, str]:
        """Return the name, e-mail address and message for notifications."""
        return self.name, self.email, self.message