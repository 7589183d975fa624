"""Internal module for decoding JSON response bodies.

Shared by the sync and async fetchers. Some endpoints guard their JSON
against script inclusion by prepending an infinite loop; the guard is
stripped before parsing.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from ifetch._defaults import JSON_HIJACK_PREFIX
from ifetch.exceptions import ParseError


def strip_hijack_prefix(text: str) -> str:
    """Remove a leading ``for (;;);\\r\\n`` guard, if present."""
    if text.startswith(JSON_HIJACK_PREFIX):
        return text[len(JSON_HIJACK_PREFIX) :]
    return text


def _loads(text: str) -> Any:
    body = strip_hijack_prefix(text)
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ParseError("Failed to parse response as JSON", body, e) from e


def parse_json(value: httpx.Response | str | bytes) -> Any:
    """
    Parse a JSON body, tolerating the anti-hijacking prefix.

    Args:
        value: A response whose body has been read, or the body itself.

    Returns:
        The decoded JSON value.

    Raises:
        ParseError: If the body is not valid JSON after prefix stripping.
    """
    if isinstance(value, httpx.Response):
        return _loads(value.text)
    if isinstance(value, bytes):
        return _loads(value.decode("utf-8", errors="replace"))
    return _loads(value)


async def aparse_json(value: httpx.Response | str | bytes) -> Any:
    """Async variant of parse_json that reads a response body first."""
    if isinstance(value, httpx.Response):
        await value.aread()
    return parse_json(value)
