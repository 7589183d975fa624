"""Behaviour shared by the sync and async fetchers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

import httpx
from typing_extensions import Self

from ifetch._request_builder import PreparedRequest, prepare_request
from ifetch.config import BaseConfig, RequestConfig
from ifetch.exceptions import TransportError
from ifetch.merge import merge
from ifetch.providers import as_provider
from ifetch.types import DefaultsProvider, URLTypes
from ifetch.urls import merge_url, to_url

logger = logging.getLogger(__name__)

ClientT = TypeVar("ClientT", httpx.Client, httpx.AsyncClient)


class BaseFetcher(Generic[ClientT]):
    """
    Holds the configuration a fetcher applies to every request.

    Attributes:
        base_url: URL relative request URLs resolve against, if any.
    """

    def __init__(
        self,
        client: ClientT | None = None,
        *,
        base_url: URLTypes | None = None,
        static_options: Mapping[str, Any] | None = None,
        providers: Iterable[DefaultsProvider] = (),
    ) -> None:
        self._client = client
        self.base_url = to_url(base_url) if base_url is not None else None
        self._static_options: dict[str, Any] = merge({}, static_options or {})
        self._providers: tuple[DefaultsProvider, ...] = tuple(providers)

    def defaults(self, base_config: BaseConfig) -> Self:
        """
        Return a fetcher bound to ``base_config``.

        ``url`` becomes the base for relative request URLs, ``options`` is
        turned into a DefaultsProvider queried on every call, and the
        remaining keys are static defaults. ``base_config`` itself is not
        modified.

        Calling ``defaults`` on a bound fetcher stacks the configurations: a
        relative ``url`` resolves against the current base, static defaults
        deep-merge and providers accumulate.

        Example:
            >>> api = ifetch.defaults({"url": "https://api.example.com/v1/"})
            >>> users = await api("users", {"json": None})

        Raises:
            InvalidURL: If ``url`` is not a valid absolute URL.
            TypeError: If ``options`` is not a mapping, callable or provider.
        """
        config: dict[str, Any] = dict(base_config)

        base_url = self.base_url
        url = config.pop("url", None)
        if url:
            base_url = merge_url(url, base_url) if base_url is not None else to_url(url)

        providers = self._providers
        options = config.pop("options", None)
        if options is not None:
            providers = (*providers, as_provider(options))

        logger.debug(
            "Bound defaults: base_url=%s, %d provider(s)", base_url, len(providers)
        )
        return type(self)(
            self._client,
            base_url=base_url,
            static_options=merge({}, self._static_options, config),
            providers=providers,
        )

    def _prepare(
        self, url: URLTypes, options: RequestConfig | Mapping[str, Any] | None
    ) -> PreparedRequest:
        if self.base_url is not None:
            url = merge_url(url, self.base_url)
        snapshots = [provider.snapshot() for provider in self._providers]
        return prepare_request(url, self._static_options, *snapshots, options)

    def _check_redirect(
        self, prepared: PreparedRequest, response: httpx.Response
    ) -> None:
        if prepared.redirect == "error" and response.is_redirect:
            raise TransportError(
                f"Redirect rejected: {response.status_code} "
                f"{prepared.url} -> {response.headers.get('location')}"
            )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r})"
