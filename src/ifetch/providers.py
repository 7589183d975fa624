"""DefaultsProvider implementations for bound fetchers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ifetch.merge import merge
from ifetch.types import DefaultsProvider, Options


class StaticDefaults:
    """Provider that returns the same options on every call."""

    def __init__(self, options: Mapping[str, Any]) -> None:
        self._options = merge({}, options)

    def snapshot(self) -> Options:
        return merge({}, self._options)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._options!r})"


class CallableDefaults:
    """
    Provider that calls a zero-argument function on every request.

    Useful when a default changes between calls, such as a bearer token
    read from a store that refreshes it.

    Example:
        >>> provider = CallableDefaults(
        >>>     lambda: {"headers": {"Authorization": f"Bearer {store.token}"}}
        >>> )
    """

    def __init__(self, factory: Callable[[], Mapping[str, Any] | None]) -> None:
        self._factory = factory

    def snapshot(self) -> Options:
        return merge({}, self._factory() or {})

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._factory!r})"


def as_provider(
    value: Mapping[str, Any] | Callable[[], Mapping[str, Any]] | DefaultsProvider,
) -> DefaultsProvider:
    """
    Wrap ``value`` as a DefaultsProvider.

    Raises:
        TypeError: If ``value`` is neither a mapping, a callable nor a provider.
    """
    if isinstance(value, DefaultsProvider):
        return value
    if isinstance(value, Mapping):
        return StaticDefaults(value)
    if callable(value):
        return CallableDefaults(value)
    raise TypeError(
        f"options must be a mapping, a callable or a DefaultsProvider, "
        f"got {type(value).__name__}"
    )
