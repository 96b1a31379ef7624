"""Message publishing to a queue service."""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Mapping

from recruitapi.services import EmailerInputParams

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _sort_nested(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _sort_nested(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sort_nested(element) for element in value]
    return value


def _payload(params: Any) -> dict[str, Any]:
    if hasattr(params, "to_dict"):
        payload = params.to_dict()
    elif dataclasses.is_dataclass(params) and not isinstance(params, type):
        payload = dataclasses.asdict(params)
    elif isinstance(params, Mapping):
        payload = dict(params)
    else:
        raise TypeError(f"cannot serialise {type(params).__name__} as a message")
    return {key: _sort_nested(value) for key, value in payload.items()}


def _encode(payload: Mapping[str, Any]) -> str:
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in _HTML_ESCAPES:
        text = text.replace(char, escaped)
    return text


class SQSMessageQueue:
    """Sends JSON messages to the queue at ``queue_url``.

    ``client`` provides ``send_message``.
    """

    def __init__(self, client: Any, queue_url: str):
        self._client = client
        self.queue_url = queue_url

    def send_message(self, params: Any) -> None:
        """Serialise ``params`` as JSON and enqueue it.

        E-mail parameters must have a template, destination, source and subject.
        """
        if params is None:
            raise ValueError("params cannot be nil or empty")
        if isinstance(params, EmailerInputParams) and not (
            params.template and params.destination and params.source and params.subject
        ):
            raise ValueError("params cannot be nil or empty")
        try:
            body = _encode(_payload(params))
        except (TypeError, ValueError) as err:
            raise ValueError(f"failed to marshal email; reason: {err}") from err
        try:
            self._client.send_message(MessageBody=body, QueueUrl=self.queue_url)
        except Exception as err:
            raise RuntimeError(f"failed to send message to sqs; reason: {err}") from err