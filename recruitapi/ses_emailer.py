"""E-mail delivery through a raw-message sending service."""

from __future__ import annotations

import logging
import re
from email import policy
from email.message import EmailMessage
from typing import Any, Mapping

from recruitapi.common import fetch_file_content
from recruitapi.services import EmailerInputParams, FileStorage

_log = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{\{\.([^}]+)\}\}")


def render_template(template: str, data: Mapping[str, str] | None) -> str:
    """Replace every ``{{.Key}}`` in ``template`` with ``data[Key]``, or with nothing."""
    values = data or {}
    return _PLACEHOLDER.sub(lambda match: values.get(match.group(1), ""), template)


class SesEmailer:
    """Sends HTML e-mail, fetching attachments from file storage.

    ``client`` provides ``send_raw_email``.
    """

    def __init__(self, client: Any, file_storage: FileStorage | None = None):
        self._client = client
        self._file_storage = file_storage

    def _attach(self, message: EmailMessage, name: str, content_type: str) -> None:
        if self._file_storage is None:
            raise RuntimeError("no file storage configured for attachments")
        try:
            request = self._file_storage.grant_read_access(name)
        except Exception as err:
            raise RuntimeError(f"failed to grant file write access: {err}") from err
        try:
            content = fetch_file_content(request.url)
        except ConnectionError as err:
            raise RuntimeError(f"failed to get file content: {err}") from err
        _log.info("Fetched file content for attachment '%s'. Length: %d bytes.", name, len(content))
        maintype, _, subtype = (content_type or "").partition("/")
        if not maintype or not subtype:
            maintype, subtype = "application", "octet-stream"
        message.add_attachment(content, maintype=maintype, subtype=subtype, filename=name)

    def email(self, params: EmailerInputParams) -> None:
        """Render the template with ``params.data`` and send the message."""
        body = render_template(params.template, params.data)

        message = EmailMessage(policy=policy.SMTP)
        message["From"] = params.source
        message["To"] = params.destination
        message["Subject"] = params.subject
        message.set_content(body, subtype="html")

        for attachment in params.attachments or ():
            self._attach(message, attachment.name, attachment.content_type)

        try:
            raw = message.as_bytes()
        except Exception as err:
            raise RuntimeError(f"failed to write raw email message: {err}") from err

        try:
            self._client.send_raw_email(
                Destinations=[params.destination],
                Source=params.source,
                RawMessage={"Data": raw},
            )
        except Exception as err:
            raise RuntimeError(f"failed to send email: {err}") from err