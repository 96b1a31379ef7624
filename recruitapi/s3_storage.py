"""File storage backed by an object store bucket."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Iterable

from recruitapi.services import PresignedRequest

_READ_EXPIRY = timedelta(minutes=60)
_WRITE_EXPIRY = timedelta(seconds=30)


class S3FileStorage:
    """Stores files in ``bucket``.

    ``client`` provides ``delete_object`` and ``delete_objects``; the optional
    ``presigner`` provides ``presign_get_object`` and ``presign_put_object``
    returning :class:`PresignedRequest` objects.
    """

    def __init__(self, client: Any, bucket: str, presigner: Any = None):
        self._client = client
        self.bucket = bucket
        self._presigner = presigner

    def _delete_one(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket, Key=key)
        except Exception as err:
            raise RuntimeError(f"failed to get delete object: {err}") from err

    def save(self, key: str) -> None:
        """Issue the store's object request for ``key``.

        Uploads happen through pre-signed requests, so this removes the object.
        """
        self._delete_one(key)

    def delete(self, key: str) -> None:
        """Delete the object ``key``."""
        self._delete_one(key)

    def batch_delete(self, keys: Iterable[str]) -> None:
        """Delete all objects in ``keys`` with one request; nothing happens if empty."""
        objects = [{"Key": key} for key in keys]
        if not objects:
            return
        try:
            self._client.delete_objects(Bucket=self.bucket, Delete={"Objects": objects})
        except Exception as err:
            raise RuntimeError(f"failed to get delete object: {err}") from err

    def _require_presigner(self) -> Any:
        if self._presigner is None:
            raise RuntimeError("client does not have presign client initialized")
        return self._presigner

    def grant_read_access(self, key: str) -> PresignedRequest:
        """Return a request that reads ``key``, valid for one hour."""
        presigner = self._require_presigner()
        try:
            return presigner.presign_get_object(
                Bucket=self.bucket, Key=key, ExpiresIn=int(_READ_EXPIRY.total_seconds())
            )
        except Exception as err:
            raise RuntimeError(f"failed to generate signed url: {err}") from err

    def grant_write_access(self, key: str) -> PresignedRequest:
        """Return a request that writes ``key``, valid for thirty seconds."""
        presigner = self._require_presigner()
        try:
            return presigner.presign_put_object(
                Bucket=self.bucket, Key=key, ExpiresIn=int(_WRITE_EXPIRY.total_seconds())
            )
        except Exception as err:
            raise RuntimeError(f"failed to presign put object: {err}") from err