"""Helpers around the AI backend's request and response text.

The chat backend is an external webhook whose response shape is not fixed:
different workflow tools put the reply under different field names.  These
helpers turn whatever came back into one plain-text reply for ``render``.
The field search order is best effort, not a contract.
"""

import json
import logging

from wellness_chat.config import CONNECTION_TROUBLE_REPLY, MAX_MESSAGE_LENGTH, TOO_LARGE_REPLY

logger = logging.getLogger(__name__)

# Top-level fields that may carry the reply, most likely first
REPLY_FIELDS = ("response", "message", "output", "text", "reply", "answer", "ai_response", "result")

# Fields searched inside a nested "data" object
NESTED_REPLY_FIELDS = ("response", "message", "output", "text")

# Error-body fragments that indicate the message exceeded the model's limits
TOO_LARGE_MARKERS = ("Request too large", "token")


def _as_text(value) -> str:
    """Return strings unchanged and JSON-encode anything else."""
    return value if isinstance(value, str) else json.dumps(value)


def _first_field(data: dict, fields: tuple[str, ...]):
    """Return the first truthy value among *fields*, or None."""
    for field in fields:
        value = data.get(field)
        if value:
            return value
    return None


def extract_reply(body: str) -> str:
    """Pull the AI's reply out of a raw webhook response body.

    JSON objects are searched for a reply field (then a nested ``data`` object);
    if nothing is found the whole document is returned pretty-printed so its
    structure is visible.  A JSON string is returned as is, and a non-JSON
    body is returned verbatim.
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        logger.debug("Response is not JSON; using it as plain text")
        return body

    if isinstance(data, str):
        return data
    if not isinstance(data, dict):
        return json.dumps(data, indent=2)

    value = _first_field(data, REPLY_FIELDS)
    if value:
        return _as_text(value)

    # A nested "data" object is searched before being used wholesale
    nested = data.get("data")
    if isinstance(nested, dict):
        value = _first_field(nested, NESTED_REPLY_FIELDS)
        if value:
            return _as_text(value)
    if nested:
        return _as_text(nested)

    logger.warning("Could not find a reply field in %s; returning full response", sorted(data))
    return json.dumps(data, indent=2)


def error_reply(status: int, body: str) -> str:
    """Return the friendly reply shown when the backend answered with an error."""
    logger.error("Backend error %d: %s", status, body[:200])
    if any(marker in body for marker in TOO_LARGE_MARKERS):
        return TOO_LARGE_REPLY
    return CONNECTION_TROUBLE_REPLY


def reply_text(status: int, body: str) -> str:
    """Reply text for a backend response: extracted on 2xx, a canned reply otherwise."""
    if 200 <= status < 300:
        return extract_reply(body)
    return error_reply(status, body)


def truncate_message(message: str, limit: int = MAX_MESSAGE_LENGTH) -> tuple[str, bool]:
    """Cut *message* to *limit* characters plus '...'; return (message, was_truncated)."""
    if len(message) <= limit:
        return message, False
    logger.warning("Message truncated from %d to %d characters to fit token limits", len(message), limit)
    return message[:limit] + "...", True
