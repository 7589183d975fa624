"""Type definitions and protocols for ifetch."""

from __future__ import annotations

from enum import Enum
from typing import Any, Final, Protocol, TypeAlias, runtime_checkable

import httpx


class HTTPMethod(str, Enum):
    """HTTP method enumeration."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


VALID_HTTP_METHODS: set[str] = {method.value for method in HTTPMethod}


class ValueKind(Enum):
    """
    Closed set of value shapes the option merger distinguishes.

    PLAIN_MAP values are deep-merged, SEQUENCE values are deep-copied into a
    fresh list, URL values resolve overrides against themselves and SCALAR
    values (numbers, strings, callables, class instances) are assigned by
    reference.
    """

    PLAIN_MAP = "plain_map"
    SEQUENCE = "sequence"
    URL = "url"
    SCALAR = "scalar"


class Unset(Enum):
    """Sentinel type for "no value given", distinct from an explicit None."""

    UNSET = "UNSET"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = Unset.UNSET

URLTypes: TypeAlias = str | httpx.URL
Headers: TypeAlias = dict[str, str]
QueryParams: TypeAlias = dict[str, Any]
Options: TypeAlias = dict[str, Any]


@runtime_checkable
class DefaultsProvider(Protocol):
    """
    Source of default request options for a bound fetcher.

    A provider is asked for a fresh snapshot on every request, so it can
    hand out values that change between calls (for example an auth token
    that gets refreshed).

    Example:
        >>> class TokenDefaults:
        >>>     def __init__(self, store):
        >>>         self.store = store
        >>>
        >>>     def snapshot(self):
        >>>         return {"headers": {"Authorization": f"Bearer {self.store.token}"}}
        >>>
        >>> api = ifetch.defaults(
        >>>     {"url": "https://api.example.com/", "options": TokenDefaults(store)}
        >>> )
    """

    def snapshot(self) -> Options:
        """Return the default options to apply to the next request."""
        ...
