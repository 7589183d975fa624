"""Async fetch function on top of httpx.AsyncClient."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ifetch._base import BaseFetcher
from ifetch._request_builder import PreparedRequest
from ifetch._response_parser import aparse_json
from ifetch.config import RequestConfig
from ifetch.exceptions import TransportError, TransportTimeoutError
from ifetch.types import URLTypes

logger = logging.getLogger(__name__)


class AsyncFetcher(BaseFetcher[httpx.AsyncClient]):
    """
    Async request function with browser-like defaults.

    Calling the fetcher returns a coroutine. Every failure, including an
    invalid URL or an unencodable body, is raised when the coroutine is
    awaited, never at call time. Defaults providers are queried at that
    point too, so a coroutine created before a token refresh sends the
    refreshed token.

    Without a client, each request runs on a short-lived
    httpx.AsyncClient. Pass a client to share connections; it is closed by
    ``aclose()`` or when leaving ``async with``.

    Example:
        >>> from ifetch import ifetch
        >>>
        >>> response = await ifetch("https://example.com/", {"qs": {"q": "term"}})
        >>> user = await ifetch(
        >>>     "https://api.example.com/users",
        >>>     {"method": "post", "json": {"name": "Alice"}},
        >>> )
        >>>
        >>> api = ifetch.defaults({"url": "https://api.example.com/"})
        >>> users = await api("users", {"json": None})
    """

    async def __call__(
        self, url: URLTypes, options: RequestConfig | None = None
    ) -> httpx.Response | Any:
        """
        Send a request and return the response, or its JSON when asked for.

        Args:
            url: Absolute URL, or a relative one when a base URL is bound.
            options: Per-request options, see RequestConfig.

        Returns:
            The decoded JSON body for requests with a ``json`` option (unless
            ``no_parse_json`` is set), the httpx.Response otherwise.

        Raises:
            InvalidURL: If the URL is invalid.
            SerializationError: If the body cannot be encoded.
            TransportError: If the transport fails or a redirect is rejected.
            ParseError: If the JSON response body cannot be parsed.
        """
        prepared = self._prepare(url, options)
        response = await self._send(prepared)
        if prepared.decode_json:
            return await aparse_json(response)
        return response

    async def _send(self, prepared: PreparedRequest) -> httpx.Response:
        logger.debug("ifetch %s %s", prepared.method, prepared.url)
        try:
            if self._client is not None:
                response = await self._client.request(
                    prepared.method, prepared.url, **prepared.to_httpx_kwargs()
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.request(
                        prepared.method, prepared.url, **prepared.to_httpx_kwargs()
                    )
        except httpx.TimeoutException as e:
            raise TransportTimeoutError("Request timeout", e) from e
        except httpx.RequestError as e:
            raise TransportError("Request failed", e) from e

        logger.debug(
            "ifetch %s %s -> %s", prepared.method, prepared.url, response.status_code
        )
        self._check_redirect(prepared, response)
        return response

    async def __aenter__(self) -> AsyncFetcher:
        """Support async context manager protocol."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Close the client when exiting async context."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the httpx client passed to this fetcher, if any."""
        if self._client is not None:
            await self._client.aclose()
