"""URL resolution and query-string helpers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import quote

import httpx

from ifetch.exceptions import InvalidURL, SerializationError
from ifetch.types import Unset, URLTypes

# Characters encodeURIComponent leaves alone, besides ASCII letters and digits.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def to_url(value: URLTypes) -> httpx.URL:
    """
    Coerce a string or httpx.URL into an absolute httpx.URL.

    Raises:
        InvalidURL: If the value cannot be parsed or is not absolute.
    """
    if isinstance(value, httpx.URL):
        url = value
    elif isinstance(value, str):
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise InvalidURL(f"Invalid URL {value!r}", value, e) from e
    else:
        raise InvalidURL(
            f"Expected a str or httpx.URL, got {type(value).__name__}", value
        )

    if not url.is_absolute_url:
        raise InvalidURL(f"Invalid URL {str(url)!r}: not an absolute URL", value)
    return url


def merge_url(path: URLTypes, base_url: URLTypes) -> httpx.URL:
    """
    Resolve ``path`` against ``base_url``.

    ``path`` may be absolute, in which case it replaces the base, or a
    relative reference resolved per RFC 3986.

    Example:
        >>> merge_url("b?x=1", "http://x.com/a/")
        URL('http://x.com/a/b?x=1')
        >>> merge_url("/root", "http://x.com/a/")
        URL('http://x.com/root')

    Raises:
        InvalidURL: If either side is unparseable or the result is not absolute.
    """
    base = to_url(base_url)
    if not isinstance(path, (str, httpx.URL)):
        raise InvalidURL(
            f"Expected a str or httpx.URL path, got {type(path).__name__}", path
        )

    try:
        resolved = base.join(path)
    except httpx.InvalidURL as e:
        raise InvalidURL(f"Cannot resolve {str(path)!r} against {base}", path, e) from e

    if not resolved.is_absolute_url:
        raise InvalidURL(f"Invalid URL {str(resolved)!r}: not an absolute URL", path)
    return resolved


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _iter_entries(container: Any) -> Iterator[tuple[Any, Any]]:
    if isinstance(container, Mapping):
        yield from container.items()
    else:
        yield from enumerate(container)


def _search_param_value(value: Any) -> str:
    # Same rendering URLSearchParams applies to non-string values.
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


def _search_param_pairs(
    params: Any, prefix: str | None, seen: set[int]
) -> Iterator[tuple[str, str]]:
    if id(params) in seen:
        raise SerializationError("Cannot encode query: circular reference detected")
    seen.add(id(params))

    for key, value in _iter_entries(params):
        if isinstance(value, Unset):
            continue
        name = f"{prefix}[{key}]" if prefix else str(key)
        if _is_container(value):
            yield from _search_param_pairs(value, name, seen)
        else:
            yield name, _search_param_value(value)

    seen.discard(id(params))


def append_search_params(
    url: URLTypes,
    params: Mapping[str, Any] | list[Any] | tuple[Any, ...],
    prefix: str | None = None,
) -> httpx.URL:
    """
    Append ``params`` to the query string of ``url``.

    Nested mappings and sequences produce bracket-notation keys, PHP style:
    ``{"a": {"b": 1}}`` becomes ``a[b]=1`` and ``{"a": [1, 2]}`` becomes
    ``a[0]=1&a[1]=2``. Existing query parameters are kept and new ones are
    appended in iteration order.

    httpx.URL is immutable, so a new URL is returned.

    Example:
        >>> url = append_search_params("http://x.com", {"a": {"b": 1, "c": 2}})
        >>> url.params.multi_items()
        [('a[b]', '1'), ('a[c]', '2')]

    Raises:
        SerializationError: If ``params`` contains a circular reference.
    """
    result = httpx.URL(url)
    for name, value in _search_param_pairs(params, prefix, set()):
        result = result.copy_add_param(name, value)
    return result


def _encode_component(value: str | bytes) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _form_value(value: Any) -> str | bytes:
    if value is True:
        return "1"
    if value is False:
        return "0"
    if isinstance(value, bytes):
        return value
    return str(value)


def _flatten_query(
    data: Any, prefix: str | None, seen: set[int]
) -> Iterator[tuple[str, str | bytes]]:
    if id(data) in seen:
        raise SerializationError("Cannot encode query: circular reference detected")
    seen.add(id(data))

    for key, value in _iter_entries(data):
        if value is None or isinstance(value, Unset):
            continue
        name = f"{prefix}[{key}]" if prefix is not None else str(key)
        if _is_container(value):
            yield from _flatten_query(value, name, seen)
        else:
            yield name, _form_value(value)

    seen.discard(id(data))


def http_build_query(data: Mapping[str, Any] | list[Any] | tuple[Any, ...]) -> str:
    """
    Encode ``data`` as an ``application/x-www-form-urlencoded`` string.

    Mirrors PHP's ``http_build_query``: nested mappings and sequences use
    bracket keys, ``None`` values are left out and booleans become ``1`` and
    ``0``. Keys and values are percent-encoded the way ``encodeURIComponent``
    does it, so spaces become ``%20`` and brackets are escaped.

    Example:
        >>> http_build_query({"name": "Jo Doe", "tags": ["a", "b"]})
        'name=Jo%20Doe&tags%5B0%5D=a&tags%5B1%5D=b'

    Raises:
        SerializationError: If ``data`` contains a circular reference.
    """
    return "&".join(
        f"{_encode_component(name)}={_encode_component(value)}"
        for name, value in _flatten_query(data, None, set())
    )
