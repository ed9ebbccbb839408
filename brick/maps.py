"""Helpers for extracting keys and values of mappings."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def keys(source: Mapping[K, V]) -> list[K]:
    """Return the keys of the mapping as a new list."""
    return list(source)


def values(source: Mapping[K, V]) -> list[V]:
    """Return the values of the mapping as a new list."""
    return list(source.values())