"""Internal module for turning request options into a prepared request."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import BaseModel

from ifetch._defaults import (
    DEFAULT_OPTIONS,
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    TRANSPORT_KWARGS,
)
from ifetch.exceptions import InvalidOptionError, SerializationError
from ifetch.merge import is_plain_object, merge
from ifetch.types import UNSET, HTTPMethod, Options, Unset, URLTypes
from ifetch.urls import append_search_params, http_build_query, to_url

logger = logging.getLogger(__name__)

REDIRECT_MODES = frozenset({"follow", "manual", "error"})


@dataclass
class PreparedRequest:
    """
    A request ready for the transport.

    Transport fields (method, URL, headers, body, passthrough keyword
    arguments) are kept apart from what the library itself acts on after
    the response arrives (``redirect`` checks and JSON decoding).

    Attributes:
        method: Upper-case HTTP method.
        url: Final absolute URL, query parameters included.
        headers: Request headers.
        body: Encoded body, or None.
        redirect: Redirect mode: "follow", "manual" or "error".
        referer: The final URL as a string.
        json_intent: Whether a ``json`` directive was given.
        decode_json: Whether the response should be decoded as JSON.
        transport_kwargs: Extra keyword arguments for httpx's request().
        extensions: Metadata forwarded as httpx request extensions.
    """

    method: str
    url: httpx.URL
    headers: httpx.Headers
    body: str | bytes | None = None
    redirect: str = "follow"
    referer: str = ""
    json_intent: bool = False
    decode_json: bool = False
    transport_kwargs: dict[str, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def follow_redirects(self) -> bool:
        return self.redirect == "follow"

    def to_httpx_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.Client.request`` after method and URL."""
        return {
            "headers": self.headers,
            "content": self.body,
            "follow_redirects": self.follow_redirects,
            "extensions": self.extensions,
            **self.transport_kwargs,
        }


def convert_method_to_string(method: HTTPMethod | str) -> str:
    """Convert HTTPMethod enum to string."""
    return method.value if isinstance(method, HTTPMethod) else method


def _header_value(value: Any) -> str | bytes:
    if isinstance(value, (str, bytes)):
        return value
    return str(value)


def _collect_headers(layers: Iterable[Mapping[str, Any]]) -> httpx.Headers:
    # Header names fold case-insensitively, the last layer wins. A None
    # header value removes the header, a None table removes all of them.
    folded: dict[str, tuple[str, str | bytes]] = {}
    for layer in layers:
        headers = layer.get("headers", UNSET)
        if headers is None:
            folded.clear()
            continue
        if not isinstance(headers, Mapping):
            continue
        for key, value in headers.items():
            if isinstance(value, Unset):
                continue
            name = str(key)
            folded.pop(name.lower(), None)
            if value is not None:
                folded[name.lower()] = (name, _header_value(value))
    return httpx.Headers(list(folded.values()))


def _dump_model(value: Any, *, exclude_none: bool) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=exclude_none)
    return value


def _encode_json(payload: Any) -> str:
    try:
        return json.dumps(
            payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise SerializationError("Cannot encode request body as JSON", e) from e


def _split_passthrough(options: Options) -> tuple[dict[str, Any], dict[str, Any]]:
    transport_kwargs: dict[str, Any] = {}
    extensions: dict[str, Any] = {}
    for key, value in options.items():
        if key in TRANSPORT_KWARGS:
            transport_kwargs[key] = value
        else:
            extensions[key] = value
    return transport_kwargs, extensions


def prepare_request(
    url: URLTypes, *layers: Mapping[str, Any] | None
) -> PreparedRequest:
    """
    Build a PreparedRequest from the library defaults and option layers.

    Layers are deep-merged over ``DEFAULT_OPTIONS`` left to right, so later
    layers win. Header names are compared case-insensitively, so a
    ``user-agent`` layer replaces the default ``User-Agent``; a None header
    value drops the header. The directives ``qs``, ``json``, ``data`` and
    ``no_parse_json`` are then consumed:

    - ``qs`` is appended to the URL as bracket-notation query parameters.
    - ``json`` asks for a JSON response and, for methods other than GET,
      becomes a JSON body unless an explicit ``body`` is set.
    - ``data``, when it is a plain mapping and no ``json`` was given, becomes
      a form-encoded body unless an explicit ``body`` is set. Any other
      ``data`` value is left alone and never becomes a body.
    - ``no_parse_json`` turns off JSON decoding of the response.

    Args:
        url: Absolute request URL.
        *layers: Option mappings, lowest precedence first. None is skipped.

    Returns:
        The prepared request.

    Raises:
        InvalidURL: If ``url`` is not a valid absolute URL.
        SerializationError: If the body cannot be encoded.
        InvalidOptionError: If ``redirect`` is not a known mode.
    """
    target = to_url(url)
    present = [DEFAULT_OPTIONS, *(layer for layer in layers if layer)]
    options: Options = merge({}, *present)

    method = convert_method_to_string(options.pop("method", None) or "get")
    options.pop("headers", None)
    headers = _collect_headers(present)
    explicit_body = options.get("body") is not None

    qs = _dump_model(options.pop("qs", None), exclude_none=True)
    if qs:
        target = append_search_params(target, qs)

    decode_opt_out = False
    if "no_parse_json" in options:
        decode_opt_out = bool(options.pop("no_parse_json"))

    json_intent = False
    if "json" in options:
        payload = _dump_model(options.pop("json"), exclude_none=False)
        headers["Accept"] = JSON_CONTENT_TYPE
        if method.lower() != "get":
            headers["Content-Type"] = JSON_CONTENT_TYPE
            if not explicit_body:
                options["body"] = _encode_json(payload)
        json_intent = True
    elif "data" in options:
        data = _dump_model(options["data"], exclude_none=True)
        if is_plain_object(data):
            headers["Content-Type"] = FORM_CONTENT_TYPE
            if not explicit_body:
                options["body"] = http_build_query(data)
            del options["data"]

    body = options.pop("body", None)
    if body is not None and not isinstance(body, (str, bytes)):
        raise SerializationError(
            f"Request body must be str or bytes, got {type(body).__name__}"
        )

    redirect = options.pop("redirect", None) or "follow"
    if redirect not in REDIRECT_MODES:
        raise InvalidOptionError("redirect", redirect)

    referer = str(target)
    options["referer"] = referer
    transport_kwargs, extensions = _split_passthrough(options)

    logger.debug(
        "Prepared %s %s (json_intent=%s, body=%s)",
        method.upper(),
        referer,
        json_intent,
        "none" if body is None else type(body).__name__,
    )

    return PreparedRequest(
        method=method.upper(),
        url=target,
        headers=headers,
        body=body,
        redirect=redirect,
        referer=referer,
        json_intent=json_intent,
        decode_json=json_intent and not decode_opt_out,
        transport_kwargs=transport_kwargs,
        extensions=extensions,
    )
