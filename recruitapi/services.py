"""Interfaces for the external services the API depends on, and their data types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol, TypeVar, runtime_checkable

T_contra = TypeVar("T_contra", contravariant=True)


@dataclass
class AuthProviderAccessParams:
    """Identifies a user within an identity provider's user pool."""

    userpool_id: str | None = None
    email: str | None = None


@runtime_checkable
class AuthProvider(Protocol):
    """Creates and removes users at an identity provider."""

    def create_user(self, params: AuthProviderAccessParams) -> Any:
        """Create the user and return the provider's identifier for it."""

    def delete_user(self, params: AuthProviderAccessParams) -> None:
        """Delete the user."""


@runtime_checkable
class DatabaseClient(Protocol):
    """Key-value document store client using the DynamoDB request shapes."""

    def get_item(self, **kwargs: Any) -> dict[str, Any]:
        """Fetch one item by key."""

    def put_item(self, **kwargs: Any) -> dict[str, Any]:
        """Store one item."""

    def delete_item(self, **kwargs: Any) -> dict[str, Any]:
        """Delete one item by key."""

    def query(self, **kwargs: Any) -> dict[str, Any]:
        """Query items by key condition."""

    def update_item(self, **kwargs: Any) -> dict[str, Any]:
        """Update attributes of one item."""

    def transact_write_items(self, **kwargs: Any) -> dict[str, Any]:
        """Apply several writes atomically."""

    def batch_write_item(self, **kwargs: Any) -> dict[str, Any]:
        """Apply several writes in one request."""


class EmailType(enum.IntEnum):
    """Kinds of e-mail the API sends."""

    JOB_ADVERTISEMENT_ADMIN = 0
    JOB_ADVERTISEMENT_USER = 1
    APPLICATION_ADMIN = 2
    APPLICATION_USER = 3
    EMPLOYERS_DECLARATION = 4
    NEW_MESSAGE_RECEIVED_ADMIN = 5
    NEW_MESSAGE_RECEIVED_USER = 6


@dataclass
class Attachment:
    """A stored file to attach to an e-mail."""

    name: str
    content_type: str


@dataclass
class EmailerInputParams:
    """Everything needed to render and send one e-mail."""

    template: str = ""
    subject: str = ""
    source: str = ""
    destination: str = ""
    data: dict[str, str] | None = None
    attachments: list[Attachment] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the message as a JSON-ready mapping with the wire field names."""
        return {
            "Template": self.template,
            "Subject": self.subject,
            "Source": self.source,
            "Destination": self.destination,
            "Data": None if self.data is None else dict(self.data),
            "Attachments": None
            if self.attachments is None
            else [{"Name": a.name, "ContentType": a.content_type} for a in self.attachments],
        }


@runtime_checkable
class Emailer(Protocol):
    """Sends e-mail."""

    def email(self, params: EmailerInputParams) -> None:
        """Send the e-mail described by ``params``."""


@dataclass
class PresignedRequest:
    """A pre-signed HTTP request granting temporary access to a stored object."""

    url: str
    method: str
    signed_header: dict[str, list[str]] = field(default_factory=dict)


@runtime_checkable
class FileStorage(Protocol):
    """Object storage for uploaded files."""

    def grant_read_access(self, key: str) -> PresignedRequest:
        """Return a pre-signed request for reading ``key``."""

    def grant_write_access(self, key: str) -> PresignedRequest:
        """Return a pre-signed request for writing ``key``."""

    def save(self, key: str) -> None:
        """Store the object ``key``."""

    def delete(self, key: str) -> None:
        """Delete the object ``key``."""

    def batch_delete(self, keys: Iterable[str]) -> None:
        """Delete all objects in ``keys``."""


@runtime_checkable
class Logger(Protocol):
    """Structured logger taking alternating key/value arguments."""

    def log(self, message: str, level: int, *args: Any) -> None:
        """Log ``message`` at ``level`` with key/value attributes."""


@runtime_checkable
class MessageQueue(Protocol[T_contra]):
    """Publishes messages to a queue."""

    def send_message(self, params: T_contra) -> None:
        """Enqueue one message."""