"""Deep merge of option mappings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

import httpx

from ifetch.exceptions import SerializationError
from ifetch.types import Unset, ValueKind
from ifetch.urls import merge_url

M = TypeVar("M", bound=dict[str, Any])


def classify(value: Any) -> ValueKind:
    """
    Tell which merge rule applies to ``value``.

    Only exact dicts (and read-only views of them) count as plain maps:
    dict subclasses, pydantic models and other class instances are opaque
    and get assigned by reference.
    """
    if type(value) is dict or type(value) is MappingProxyType:
        return ValueKind.PLAIN_MAP
    if type(value) is list or type(value) is tuple:
        return ValueKind.SEQUENCE
    if isinstance(value, httpx.URL):
        return ValueKind.URL
    return ValueKind.SCALAR


def is_plain_object(value: Any) -> bool:
    """Check whether ``value`` is a data-only mapping."""
    return classify(value) is ValueKind.PLAIN_MAP


def _merge_into(
    target: M, sources: Iterable[Mapping[str, Any]], active: set[int]
) -> M:
    for source in sources:
        for key, source_value in source.items():
            if isinstance(source_value, Unset):
                continue
            target[key] = _merged_value(target.get(key), source_value, active)
    return target


def _merged_value(target_value: Any, source_value: Any, active: set[int]) -> Any:
    if classify(target_value) is ValueKind.URL:
        return merge_url(source_value, target_value)

    kind = classify(source_value)
    if kind is ValueKind.SCALAR or kind is ValueKind.URL:
        return source_value

    # active holds the containers on the current path only
    if id(source_value) in active:
        raise SerializationError("Cannot merge options: circular reference detected")
    active.add(id(source_value))
    try:
        if kind is ValueKind.SEQUENCE:
            return [
                _merged_value(None, item, active)
                for item in source_value
                if not isinstance(item, Unset)
            ]
        if classify(target_value) is ValueKind.PLAIN_MAP:
            return _merge_into({}, (target_value, source_value), active)
        return _merge_into({}, (source_value,), active)
    finally:
        active.discard(id(source_value))


def merge(target: M, *sources: Mapping[str, Any]) -> M:
    """
    Deep-merge ``sources`` into ``target``, left to right, and return it.

    Rules for every key of every source:

    - ``UNSET`` values are skipped, so they never overwrite anything.
      ``None`` is a real value and does overwrite.
    - If the current target value is an httpx.URL, the source value is
      resolved against it as a relative reference.
    - Plain maps merge recursively into a copy of the target value when that
      is a plain map too, otherwise into a fresh dict.
    - Lists and tuples are deep-copied into a fresh list, replacing whatever
      was there. They are never concatenated.
    - Anything else is assigned as-is.

    Sources are never modified and the result shares no dicts or lists with
    them.

    Example:
        >>> merge({}, {"a": 1, "b": {"c": 1}}, {"b": {"d": 2}, "a": UNSET})
        {'a': 1, 'b': {'c': 1, 'd': 2}}
        >>> merge({}, {"a": [1, 2]}, {"a": [3]})
        {'a': [3]}

    Raises:
        SerializationError: If a source contains a circular reference.
        InvalidURL: If a value merged over a URL cannot be resolved.
    """
    return _merge_into(target, sources, set())
