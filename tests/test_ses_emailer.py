from email import message_from_bytes, policy

import pytest

from recruitapi.services import Attachment, EmailerInputParams, PresignedRequest
from recruitapi.ses_emailer import SesEmailer, render_template

TEMPLATE = "<html><body><p>Hello {{.Name}}!</p><p>{{.Missing}}</p></body></html>"


class FakeSesClient:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def send_raw_email(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return {}


class FakeStorage:
    def __init__(self, urls):
        self.urls = urls
        self.read_keys = []

    def grant_read_access(self, key):
        self.read_keys.append(key)
        return PresignedRequest(url=self.urls[key], method="GET")


def make_params(**overrides):
    values = dict(
        template=TEMPLATE,
        subject="Test Email",
        source="sender@example.com",
        destination="receiver@example.com",
        data={"Name": "Upwigo"},
        attachments=None,
    )
    values.update(overrides)
    return EmailerInputParams(**values)


def parse(call):
    return message_from_bytes(call["RawMessage"]["Data"], policy=policy.default)


def test_render_template():
    assert render_template("Hi {{.Name}}, {{.Other}}.", {"Name": "Ana"}) == "Hi Ana, ."
    assert render_template("{{.X}}", None) == ""
    assert render_template("plain", {"X": "y"}) == "plain"


def test_email_happy_path():
    client = FakeSesClient()
    SesEmailer(client).email(make_params())
    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["Destinations"] == ["receiver@example.com"]
    assert call["Source"] == "sender@example.com"
    message = parse(call)
    assert message["Subject"] == "Test Email"
    assert message["From"] == "sender@example.com"
    assert message["To"] == "receiver@example.com"
    assert message.get_content_type() == "text/html"
    content = message.get_content()
    assert "Hello Upwigo!" in content
    assert "{{" not in content


def test_email_with_attachment(tmp_path):
    path = tmp_path / "cv.pdf"
    path.write_bytes(b"%PDF-1.4 data")
    storage = FakeStorage({"cv.pdf": path.as_uri()})
    client = FakeSesClient()
    params = make_params(attachments=[Attachment(name="cv.pdf", content_type="application/pdf")])
    SesEmailer(client, storage).email(params)
    assert storage.read_keys == ["cv.pdf"]
    message = parse(client.calls[0])
    attachments = list(message.iter_attachments())
    assert len(attachments) == 1
    assert attachments[0].get_filename() == "cv.pdf"
    assert attachments[0].get_content_type() == "application/pdf"
    assert attachments[0].get_content() == b"%PDF-1.4 data"


def test_email_attachment_fetch_failure(tmp_path):
    storage = FakeStorage({"a.pdf": (tmp_path / "missing.pdf").as_uri()})
    client = FakeSesClient()
    params = make_params(attachments=[Attachment(name="a.pdf", content_type="application/pdf")])
    with pytest.raises(RuntimeError, match="failed to get file content"):
        SesEmailer(client, storage).email(params)
    assert client.calls == []


def test_email_attachment_without_storage():
    client = FakeSesClient()
    params = make_params(attachments=[Attachment(name="a.pdf", content_type="application/pdf")])
    with pytest.raises(RuntimeError):
        SesEmailer(client).email(params)
    assert client.calls == []


def test_email_send_failure():
    client = FakeSesClient(error=ValueError("throttled"))
    with pytest.raises(RuntimeError, match="failed to send email"):
        SesEmailer(client).email(make_params())