import json
import logging
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from recruitapi.common import (
    LanguageCode,
    RequestError,
    ValidationError,
    content_type_from_extension,
    create_pk,
    document_extension,
    fetch_file_content,
    field_value,
    is_valid_email,
    is_valid_language,
    request_error_response,
)


class RecordingLogger:
    def __init__(self):
        self.calls = []

    def log(self, message, level, *args):
        self.calls.append((message, level, args))


def test_request_error_response_bad_request():
    logger = RecordingLogger()
    message = "Invalid request: invalid input provided"
    response = request_error_response(400, message, logger)
    assert response.status_code == 400
    assert json.loads(response.body) == {"message": message, "statusCode": 400}
    assert response.body.startswith('{\n\t"message": "Invalid request: invalid input provided"')
    assert response.headers == {"Content-Type": "application/json"}
    assert len(logger.calls) == 1
    assert logger.calls[0][0] == message
    assert logger.calls[0][1] == logging.ERROR


def test_request_error_response_server_error_raises():
    logger = RecordingLogger()
    message = "Ups! Something went wrong..."
    with pytest.raises(RequestError) as info:
        request_error_response(500, message, logger)
    assert str(info.value) == message
    assert info.value.status_code == 500
    assert info.value.response.status_code == 500
    assert json.loads(info.value.response.body)["message"] == message
    assert len(logger.calls) == 1


def test_request_error_response_passes_extra_args_to_logger():
    logger = RecordingLogger()
    request_error_response(404, "missing", logger, "extra", 1)
    assert logger.calls[0][2] == ("StatusCode", 404, "extra", 1)


def test_request_error_response_escapes_html():
    response = request_error_response(400, "<b>&", RecordingLogger())
    assert "\\u003cb\\u003e\\u0026" in response.body
    assert json.loads(response.body)["message"] == "<b>&"


@pytest.mark.parametrize(
    "extension, expected",
    [
        (".pdf", "application/pdf"),
        (".docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        (".doc", "application/msword"),
        (".png", "image/png"),
        (".mp3", "audio/mpeg"),
    ],
)
def test_content_type_from_extension(extension, expected):
    assert content_type_from_extension(extension) == expected


def test_content_type_unknown_extension():
    with pytest.raises(ValueError, match="unknown extension"):
        content_type_from_extension(".exe")


@pytest.mark.parametrize(
    "file_name, expected",
    [("report.pdf", ".pdf"), ("dir/a.b.docx", ".docx"), ("voice.mp3", ".mp3")],
)
def test_document_extension(file_name, expected):
    assert document_extension(file_name) == expected


@pytest.mark.parametrize("file_name", ["noext", "file.txt", "dir.pdf/file", ""])
def test_document_extension_invalid(file_name):
    with pytest.raises(ValidationError):
        document_extension(file_name)


def test_create_pk():
    assert create_pk("APP", "123") == "APP#123"


@pytest.mark.parametrize(
    "lang, expected",
    [("en", True), ("de", True), (LanguageCode.TL, True), (LanguageCode.AT, True), ("fr", False), ("", False)],
)
def test_is_valid_language(lang, expected):
    assert is_valid_language(lang) is expected


@pytest.mark.parametrize(
    "value, expected",
    [("test@example.com", True), ("first.last@mail.example.com", True), ("not-an-email", False), ("", False), ("a b@example.com", False)],
)
def test_is_valid_email(value, expected):
    assert is_valid_email(value) is expected


@dataclass
class _Item:
    SK: str
    _hidden: str = "x"


def test_field_value_returns_value():
    assert field_value(_Item(SK="Document-CV"), "SK") == "Document-CV"


def test_field_value_missing_field():
    with pytest.raises(AttributeError):
        field_value(_Item(SK="a"), "PK")


def test_field_value_requires_dataclass_instance():
    with pytest.raises(TypeError):
        field_value({"SK": "a"}, "SK")
    with pytest.raises(TypeError):
        field_value(_Item, "SK")


def test_field_value_private_field():
    with pytest.raises(ValueError):
        field_value(_Item(SK="a"), "_hidden")


@pytest.fixture
def http_server():
    payload = b"%PDF-1.4 sample"

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            missing = self.path == "/missing"
            body = b"not found" if missing else payload
            self.send_response(404 if missing else 200)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    server = HTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}", payload
    server.shutdown()
    server.server_close()


def test_fetch_file_content(http_server):
    base, payload = http_server
    assert fetch_file_content(f"{base}/file.pdf") == payload


def test_fetch_file_content_returns_error_body(http_server):
    base, _ = http_server
    assert fetch_file_content(f"{base}/missing") == b"not found"


def test_fetch_file_content_bad_url():
    with pytest.raises(ConnectionError):
        fetch_file_content("not-a-url")