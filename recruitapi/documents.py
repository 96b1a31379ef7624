"""Documents requested from and uploaded by applicants."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from recruitapi.common import (
    DOCUMENT_LETTER_PREFIX,
    SK_SEPARATOR,
    ValidationError,
    content_type_from_extension,
    document_extension,
)

_MIB = 1024 * 1024


def _meta(attr: str, json_name: str) -> dict[str, Any]:
    return {"dynamodb": attr, "json": json_name}


def _now_rfc3339() -> str:
    text = datetime.now().astimezone().replace(microsecond=0).isoformat()
    return text[:-6] + "Z" if text.endswith("+00:00") else text


class DocStatus(enum.IntEnum):
    """Review state of a document."""

    REQUESTED = 0
    APPROVED = 1
    REJECTED = 2
    UNDER_ANALYSIS = 3
    NOT_APPLICABLE = 4

    def __str__(self) -> str:
        return self.name


class DocumentType(str, enum.Enum):
    """Kinds of documents an applicant or post can carry."""

    # Pre-screening
    CONSENT = "Consent"
    CV = "CV"
    # Companies
    JOB_ADVERTISEMENT = "JobAd"
    # German training
    GLTEP = "GLTEP"
    B2EC = "B2EC"
    # Employer
    EMPLOYERS_DECLARATION = "EmpDecl"
    # School documents
    HSD = "HSD"
    F137 = "Form137"
    CMI_ENGLISH = "CMIEnglish"
    CGHS = "CGHS"
    CD = "CD"
    TOR = "TOR"
    TOR_CTC = "TORCTC"
    RLE = "RLE"
    RLE_CTC = "RLECTC"
    CGC = "CGC"
    CMI = "CMI"
    F137_CTC = "Form137CTC"
    HSD_CTC = "HSDCTC"
    # Professional documents
    PRC_ID = "PRCID"
    PRC_ID_CTC = "PRCIDCTC"
    CGS = "CGS"
    PRC_BC_RATING = "PRCBCRating"
    PRC_BC_PASSER = "PRCBCPasser"
    CE = "CE"
    # Personal documents
    PASSPORT_CTC = "PassportCTC"
    MARRIAGE_CERTIFICATE = "MarriageCert"
    NBI_CLEARANCE = "NBIClearance"
    PICTURE = "Picture"
    CV_GERMAN = "CVGerman"
    AFN = "AFN"
    POAN = "POAN"
    POARWR = "POARWR"
    AFRWR = "AFRWR"
    CERTIFICATE_ENGLISH = "CertEnglish"

    THUMBNAIL = "Thumbnail"
    AUDIO_REC = "PostAudioRec"


_FIVE_MIB_TYPES = (
    DocumentType.CONSENT,
    DocumentType.CV,
    DocumentType.JOB_ADVERTISEMENT,
    DocumentType.GLTEP,
    DocumentType.B2EC,
    DocumentType.EMPLOYERS_DECLARATION,
    DocumentType.CMI_ENGLISH,
    DocumentType.CGHS,
    DocumentType.CD,
    DocumentType.TOR,
    DocumentType.RLE,
    DocumentType.CGC,
    DocumentType.CMI,
    DocumentType.RLE_CTC,
    DocumentType.TOR_CTC,
    DocumentType.F137_CTC,
    DocumentType.HSD_CTC,
    DocumentType.PRC_ID,
    DocumentType.PRC_ID_CTC,
    DocumentType.CGS,
    DocumentType.PRC_BC_RATING,
    DocumentType.PRC_BC_PASSER,
    DocumentType.CE,
    DocumentType.PASSPORT_CTC,
    DocumentType.MARRIAGE_CERTIFICATE,
    DocumentType.NBI_CLEARANCE,
    DocumentType.CV_GERMAN,
    DocumentType.AFN,
    DocumentType.POAN,
    DocumentType.POARWR,
    DocumentType.AFRWR,
    DocumentType.CERTIFICATE_ENGLISH,
)

_MAX_SIZES: dict[str, int] = {
    **{doc_type.value: 5 * _MIB for doc_type in _FIVE_MIB_TYPES},
    DocumentType.THUMBNAIL.value: 1 * _MIB,
    DocumentType.PICTURE.value: 1 * _MIB,
    DocumentType.AUDIO_REC.value: 40 * _MIB,
}


def _type_value(document_type: DocumentType | str) -> str:
    return document_type.value if isinstance(document_type, DocumentType) else document_type


def create_document_sk(document_type: DocumentType | str) -> str:
    """Return the sort key for a document of ``document_type``."""
    return DOCUMENT_LETTER_PREFIX + SK_SEPARATOR + _type_value(document_type)


@dataclass
class Document:
    """A document belonging to a parent entity such as an application."""

    pk: str = field(default="", metadata=_meta("PK", "id"))
    sk: str = field(default="", metadata=_meta("SK", "documentType"))
    name: str | None = field(default=None, metadata=_meta("Name", "name"))
    content_type: str | None = field(default=None, metadata=_meta("ContentType", "contentType"))
    size_bytes: int | None = field(default=None, metadata=_meta("SizeBytes", "sizeBytes"))
    requested_at: str = field(default="", metadata=_meta("RequestedAt", "requestedAt"))
    uploaded_at: str | None = field(default=None, metadata=_meta("uploadedAt", "uploadedAt"))
    status: DocStatus = field(default=DocStatus.REQUESTED, metadata=_meta("Status", "status"))
    notes: str = field(default="", metadata=_meta("Notes", "Notes"))

    def generate_keys(self, parent_pk: str, document_type: DocumentType | str) -> None:
        """Key the document under its parent entity."""
        self.pk = parent_pk
        self.sk = create_document_sk(document_type)

    def generate_attributes_for_request(self, application_id: str, note: str) -> None:
        """Mark the document as requested now, with ``note`` for the applicant."""
        self.status = DocStatus.REQUESTED
        self.requested_at = _now_rfc3339()
        self.notes = note

    def generate_attributes_for_upload(self, file_name: str, size_bytes: int) -> None:
        """Fill in the attributes of an uploaded file and mark it under analysis."""
        try:
            extension = document_extension(file_name)
        except ValidationError as err:
            raise ValidationError(f"failed to get extension from document: {err}") from err
        try:
            content_type = content_type_from_extension(extension)
        except ValueError as err:
            raise ValidationError(f"failed to get content type from extension: {err}") from err
        self.content_type = content_type
        self.size_bytes = size_bytes
        self.uploaded_at = _now_rfc3339()
        self.status = DocStatus.UNDER_ANALYSIS
        self.name = f"{self.pk}{SK_SEPARATOR}{self.sk}{extension}"

    def validate(self) -> None:
        """Raise ValidationError if fields are missing or the file is too large."""
        checks = (
            ("PK", bool(self.pk)),
            ("SK", bool(self.sk)),
            ("Name", self.name is not None),
            ("ContentType", self.content_type is not None),
            ("SizeBytes", self.size_bytes is not None),
            ("RequestedAt", bool(self.requested_at)),
            ("UploadedAt", self.uploaded_at is not None),
            ("Status", bool(self.status)),
        )
        missing = [label for label, present in checks if not present]
        if missing:
            raise ValidationError(
                f"document validation failed: missing or invalid fields: {', '.join(missing)}"
            )
        max_size = self.max_file_size()
        if self.size_bytes > max_size:
            raise ValidationError(
                f"document validation failed: document size exceeds maximum allowed size: {max_size}"
            )

    def max_file_size(self) -> int:
        """Return the largest allowed size in bytes for this document's type, or -1."""
        suffix = self.sk.removeprefix(DOCUMENT_LETTER_PREFIX + SK_SEPARATOR)
        return _MAX_SIZES.get(suffix, -1)