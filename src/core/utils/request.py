"""Helpers for reading API Gateway proxy events."""

import base64
import binascii
from typing import Any
from urllib.parse import urlencode

from core.models.errors import ValidationError

Event = dict[str, Any]


def get_header(event: Event, name: str) -> str | None:
    """Return a request header value, matching the name case-insensitively."""
    headers = event.get("headers") or {}
    wanted = name.lower()

    for key, value in headers.items():
        if key.lower() == wanted:
            return value

    return None


def get_query_params(event: Event) -> dict[str, str]:
    return dict(event.get("queryStringParameters") or {})


def get_body_bytes(event: Event) -> bytes:
    """Return the raw request body, decoding it when API Gateway base64-encoded it.

    Raises:
        ValidationError: If a base64 body cannot be decoded
    """
    body = event.get("body")
    if body is None:
        return b""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(
                message="Invalid request body encoding",
                details={"encoding": "base64"},
            ) from exc

    if isinstance(body, bytes):
        return body

    return body.encode("utf-8")


def request_url(event: Event) -> str:
    """Rebuild the full request URL (host, path and sorted query string)."""
    host = get_header(event, "Host") or ""
    scheme = get_header(event, "X-Forwarded-Proto") or "https"
    path = event.get("path") or "/"

    url = f"{scheme}://{host}{path}" if host else path

    query = get_query_params(event)
    if query:
        url = f"{url}?{urlencode(sorted(query.items()))}"

    return url
