"""Blocking fetch function on top of httpx.Client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ifetch._base import BaseFetcher
from ifetch._request_builder import PreparedRequest
from ifetch._response_parser import parse_json
from ifetch.config import RequestConfig
from ifetch.exceptions import TransportError, TransportTimeoutError
from ifetch.types import URLTypes

logger = logging.getLogger(__name__)


class Fetcher(BaseFetcher[httpx.Client]):
    """
    Blocking counterpart of AsyncFetcher.

    Options, defaults and return values are the same; errors are raised
    directly from the call.

    Example:
        >>> from ifetch import fetch
        >>>
        >>> page = fetch("https://example.com/", {"qs": {"page": 2}})
        >>> api = fetch.defaults({"url": "https://api.example.com/"})
        >>> created = api("users", {"method": "post", "json": {"name": "Alice"}})
    """

    def __call__(
        self, url: URLTypes, options: RequestConfig | None = None
    ) -> httpx.Response | Any:
        """Send a request and return the response, or its JSON when asked for."""
        prepared = self._prepare(url, options)
        response = self._send(prepared)
        if prepared.decode_json:
            return parse_json(response)
        return response

    def _send(self, prepared: PreparedRequest) -> httpx.Response:
        logger.debug("fetch %s %s", prepared.method, prepared.url)
        try:
            if self._client is not None:
                response = self._client.request(
                    prepared.method, prepared.url, **prepared.to_httpx_kwargs()
                )
            else:
                with httpx.Client() as client:
                    response = client.request(
                        prepared.method, prepared.url, **prepared.to_httpx_kwargs()
                    )
        except httpx.TimeoutException as e:
            raise TransportTimeoutError("Request timeout", e) from e
        except httpx.RequestError as e:
            raise TransportError("Request failed", e) from e

        logger.debug(
            "fetch %s %s -> %s", prepared.method, prepared.url, response.status_code
        )
        self._check_redirect(prepared, response)
        return response

    def __enter__(self) -> Fetcher:
        """Support context manager protocol."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Close client when exiting context."""
        self.close()

    def close(self) -> None:
        """Close the httpx client passed to this fetcher, if any."""
        if self._client is not None:
            self._client.close()
