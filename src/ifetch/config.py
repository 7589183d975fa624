"""Configuration TypedDicts for requests and bound fetchers."""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Literal, TypedDict

if sys.version_info >= (3, 11):
    from typing import NotRequired
else:
    from typing_extensions import NotRequired

if TYPE_CHECKING:
    import httpx
    from pydantic import BaseModel

    from ifetch.types import DefaultsProvider, HTTPMethod

RedirectMode = Literal["follow", "manual", "error"]
CredentialsMode = Literal["omit", "same-origin", "include"]


class RequestConfig(TypedDict, total=False):
    """
    Options accepted by a single request.

    All fields are optional; missing ones fall back to the library defaults
    (see ``ifetch._defaults.DEFAULT_OPTIONS``). Keys not listed here are
    passed through to the transport.

    ``qs``, ``json``, ``data`` and ``no_parse_json`` are library directives:
    they are consumed while the request is prepared and never reach httpx
    under their own names.

    Option names are snake_case: the flag that keeps a ``json`` response
    undecoded is ``no_parse_json``. A camelCase ``noParseJSON`` is not
    recognised and travels to the transport like any unknown key.

    Example:
        >>> options: RequestConfig = {
        >>>     "method": "post",
        >>>     "qs": {"page": 2},
        >>>     "json": {"name": "Alice"},
        >>> }
        >>> user = await ifetch("https://api.example.com/users", options)
    """

    method: str | HTTPMethod
    headers: dict[str, str]
    body: NotRequired[str | bytes | None]
    credentials: CredentialsMode | str
    cache: str
    redirect: RedirectMode
    qs: NotRequired[Mapping[str, Any] | BaseModel | None]
    json: Any
    data: NotRequired[Mapping[str, Any] | BaseModel | Any]
    no_parse_json: bool
    cookies: NotRequired[dict[str, str] | None]
    auth: NotRequired[httpx.Auth | tuple[str, str] | None]
    timeout: NotRequired[float | httpx.Timeout | None]
    params: NotRequired[dict[str, Any] | None]
    files: NotRequired[dict[str, Any] | None]


class BaseConfig(RequestConfig, total=False):
    """
    Configuration captured by ``.defaults()``.

    ``url`` is the absolute base every request URL resolves against.
    ``options`` supplies defaults evaluated on every call: a mapping, a
    zero-argument callable returning a mapping, or a ``DefaultsProvider``.
    Every other key is a static request default.

    Example:
        >>> api = ifetch.defaults(
        >>>     BaseConfig(
        >>>         url="https://api.example.com/v1/",
        >>>         headers={"X-Client": "reports"},
        >>>         options=lambda: {"headers": {"Authorization": token()}},
        >>>     )
        >>> )
    """

    url: str | httpx.URL
    options: NotRequired[
        Mapping[str, Any] | Callable[[], Mapping[str, Any]] | DefaultsProvider | None
    ]
