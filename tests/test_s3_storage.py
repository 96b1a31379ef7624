import pytest

from recruitapi.s3_storage import S3FileStorage
from recruitapi.services import PresignedRequest


class FakeS3Client:
    def __init__(self, error=None):
        self.delete_object_calls = []
        self.delete_objects_calls = []
        self.error = error

    def delete_object(self, **kwargs):
        self.delete_object_calls.append(kwargs)
        if self.error:
            raise self.error
        return {}

    def delete_objects(self, **kwargs):
        self.delete_objects_calls.append(kwargs)
        if self.error:
            raise self.error
        return {}


class FakePresigner:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def _presign(self, method, kwargs):
        self.calls.append((method, kwargs))
        if self.error:
            raise self.error
        return PresignedRequest(url="test-url.com", method=method)

    def presign_get_object(self, **kwargs):
        return self._presign("GET", kwargs)

    def presign_put_object(self, **kwargs):
        return self._presign("PUT", kwargs)


def test_grant_read_access_happy_path():
    presigner = FakePresigner()
    storage = S3FileStorage(FakeS3Client(), "test-bucket", presigner)
    request = storage.grant_read_access("example-key")
    assert request.url == "test-url.com"
    assert presigner.calls == [
        ("GET", {"Bucket": "test-bucket", "Key": "example-key", "ExpiresIn": 3600})
    ]


def test_grant_read_access_presign_error():
    presigner = FakePresigner(error=ValueError("test this error!"))
    storage = S3FileStorage(FakeS3Client(), "test-bucket", presigner)
    with pytest.raises(RuntimeError, match="failed to generate signed url"):
        storage.grant_read_access("example-key")
    assert len(presigner.calls) == 1


def test_grant_access_without_presigner():
    storage = S3FileStorage(FakeS3Client(), "test-bucket")
    with pytest.raises(RuntimeError, match="presign client"):
        storage.grant_read_access("k")
    with pytest.raises(RuntimeError, match="presign client"):
        storage.grant_write_access("k")


def test_grant_write_access_expiry():
    presigner = FakePresigner()
    storage = S3FileStorage(FakeS3Client(), "bucket", presigner)
    request = storage.grant_write_access("upload")
    assert request.method == "PUT"
    assert presigner.calls[0][1] == {"Bucket": "bucket", "Key": "upload", "ExpiresIn": 30}


def test_grant_write_access_error():
    storage = S3FileStorage(FakeS3Client(), "bucket", FakePresigner(error=ValueError("x")))
    with pytest.raises(RuntimeError, match="failed to presign put object"):
        storage.grant_write_access("upload")


def test_delete_and_save_issue_delete_object():
    client = FakeS3Client()
    storage = S3FileStorage(client, "bucket")
    storage.delete("a")
    storage.save("b")
    assert client.delete_object_calls == [
        {"Bucket": "bucket", "Key": "a"},
        {"Bucket": "bucket", "Key": "b"},
    ]


def test_delete_error():
    storage = S3FileStorage(FakeS3Client(error=ValueError("denied")), "bucket")
    with pytest.raises(RuntimeError, match="failed to get delete object"):
        storage.delete("a")


def test_batch_delete_empty_makes_no_request():
    client = FakeS3Client()
    S3FileStorage(client, "bucket").batch_delete([])
    assert client.delete_objects_calls == []


def test_batch_delete_objects():
    client = FakeS3Client()
    S3FileStorage(client, "bucket").batch_delete(["a", "b"])
    assert client.delete_objects_calls == [
        {"Bucket": "bucket", "Delete": {"Objects": [{"Key": "a"}, {"Key": "b"}]}}
    ]


def test_batch_delete_error():
    storage = S3FileStorage(FakeS3Client(error=ValueError("denied")), "bucket")
    with pytest.raises(RuntimeError):
        storage.batch_delete(["a"])