"""Shared constants, error types and small helpers used across the API."""

from __future__ import annotations

import dataclasses
import enum
import json
import logging
import re
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

PK_SEPARATOR = "#"

# Environment variable names
ENV_BUCKET_NAME = "BUCKET_NAME"
ENV_TABLE_NAME = "TABLE_NAME"
ENV_GSI_NAME = "GSI_NAME"
ENV_SQS_QUEUE_URL = "SQS_QUEUE_URL"

# Path parameter names
PATH_PARAM_ID = "id"
PATH_PARAM_EMAIL = "email"

# Query parameter names
QUERY_PARAM_LANGUAGE = "lang"

# Documents
SK_SEPARATOR = "-"
DOCUMENT_LETTER_PREFIX = "Document"

# Messages
MESSAGE_LETTER_PREFIX = "Message"

# Authorization
AUTH_SCOPE = "scope"

# Applications
PK_APP_PREFIX = "APP"

# Posts
PK_POST_PREFIX = "Post"
SK_POST_SEPARATOR = "#"


class LanguageCode(str, enum.Enum):
    """Languages that content may be published in."""

    EN = "en"
    DE = "de"
    TL = "tl"
    AT = "at"


_ALLOWED_LANGUAGES = (LanguageCode.EN, LanguageCode.AT, LanguageCode.DE, LanguageCode.TL)

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
    ".png": "image/png",
    ".mp3": "audio/mpeg",
}

_EMAIL_RE = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*"
)


class ValidationError(ValueError):
    """Raised when input data fails validation."""


class RequestError(Exception):
    """An error that maps onto an HTTP error response."""

    def __init__(self, message: str, status_code: int, response: HttpResponse | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        return self.message


class SQSBatchItemFailureError(Exception):
    """Failure of a single message within a queue batch."""

    def __init__(self, message: str, message_id: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.message_id = message_id
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


@dataclass
class HttpResponse:
    """An HTTP response as returned to the API gateway."""

    status_code: int
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)


def is_valid_language(lang: Any) -> bool:
    """Return True if ``lang`` is one of the supported language codes."""
    return isinstance(lang, str) and lang in _ALLOWED_LANGUAGES


def is_valid_email(value: Any) -> bool:
    """Return True if ``value`` looks like an e-mail address."""
    return isinstance(value, str) and _EMAIL_RE.fullmatch(value) is not None


def _marshal_indent(payload: dict[str, Any]) -> str:
    text = json.dumps(payload, indent="\t", ensure_ascii=False)
    for char, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escaped)
    return text


def request_error_response(status_code: int, message: str, logger: Any, *args: Any) -> HttpResponse:
    """Log ``message`` and build a JSON error response.

    For server errors (status 500 and above) a :class:`RequestError` carrying
    the response is raised instead of returning it.
    """
    status_code = int(status_code)
    body = _marshal_indent({"message": message, "statusCode": status_code})
    logger.log(message, logging.ERROR, "StatusCode", status_code, *args)
    response = HttpResponse(
        status_code=status_code,
        body=body,
        headers={"Content-Type": "application/json"},
    )
    if status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        raise RequestError(message, status_code, response)
    return response


def content_type_from_extension(extension: str) -> str:
    """Return the MIME type for a supported file extension."""
    try:
        return _CONTENT_TYPES[extension]
    except KeyError:
        raise ValueError("unknown extension") from None


def document_extension(file_name: str) -> str:
    """Return the extension of ``file_name`` if it is an allowed document type."""
    base = file_name.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    extension = base[dot:] if dot >= 0 else ""
    if extension not in _CONTENT_TYPES:
        raise ValidationError("validation Error - invalid file extension")
    return extension


def fetch_file_content(url: str) -> bytes:
    """Download and return the body found at ``url``."""
    try:
        with urllib.request.urlopen(url) as response:
            return response.read()
    except urllib.error.HTTPError as err:
        with err:
            return err.read()
    except (urllib.error.URLError, OSError, ValueError) as err:
        raise ConnectionError(f"failed to perform get request: {err}") from err


def field_value(obj: Any, field_name: str) -> Any:
    """Return the value of the public dataclass field ``field_name`` of ``obj``."""
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"item must be a dataclass instance, got {type(obj).__name__}")
    if field_name not in {f.name for f in dataclasses.fields(obj)}:
        raise AttributeError(f"item does not have a field named {field_name}")
    if field_name.startswith("_"):
        raise ValueError(f"field {field_name} is not exportable")
    return getattr(obj, field_name)


def create_pk(prefix: str, identifier: str) -> str:
    """Join a key prefix and an identifier with the key separator."""
    return f"{prefix}{PK_SEPARATOR}{identifier}"