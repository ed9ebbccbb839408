"""Set helpers: a thread-safe set and functions over plain sets."""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


class SafeSet(Generic[T]):
    """A set whose operations are guarded by a lock."""

    def __init__(self, *items: T) -> None:
        self._lock = threading.Lock()
        self._items: set[T] = set(items)

    def add(self, *items: T) -> None:
        """Add the given items."""
        if not items:
            return
        with self._lock:
            self._items.update(items)

    def delete(self, *items: T) -> None:
        """Remove the given items; missing items are ignored."""
        if not items:
            return
        with self._lock:
            self._items.difference_update(items)

    def has(self, item: T) -> bool:
        """Report whether the item is present."""
        with self._lock:
            return item in self._items

    def contains(self, *items: T) -> tuple[SafeSet[T] | None, bool]:
        """Return the set of the given items that are present, and whether any were.

        With no items at all, returns ``(None, False)``.
        """
        if not items:
            return None, False
        with self._lock:
            hits = [item for item in items if item in self._items]
        found = SafeSet(*hits)
        return found, bool(hits)

    def clear(self) -> None:
        """Remove every item."""
        with self._lock:
            self._items = set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, item: object) -> bool:
        with self._lock:
            return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self.to_list())

    def __repr__(self) -> str:
        return f"SafeSet({self.to_list()!r})"

    def is_empty(self) -> bool:
        """Report whether the set holds no items."""
        return len(self) == 0

    def to_list(self) -> list[T]:
        """Return the items as a new, unordered list."""
        with self._lock:
            return list(self._items)

    def clone(self) -> SafeSet[T]:
        """Return an independent copy."""
        return SafeSet(*self.to_list())

    def intersection_set(self, *others: Iterable[T]) -> SafeSet[T]:
        """Return the intersection of this set with all others.

        With no others, this set itself is returned.
        """
        if not others:
            return self
        result = self.clone()
        for other in others:
            result = SafeSet(*(item for item in other if result.has(item)))
        return result

    def union_set(self, *others: Iterable[T]) -> SafeSet[T]:
        """Return the union of this set with all others.

        With no others, an empty set is returned.
        """
        if not others:
            return SafeSet()
        result = self.clone()
        for other in others:
            result.add(*(item for item in other if not result.has(item)))
        return result

    def complement_set(self, other: Iterable[T] | None) -> SafeSet[T]:
        """Return the items of ``other`` that are not in this set.

        With ``None``, this set itself is returned.
        """
        if other is None:
            return self
        return SafeSet(*(item for item in other if not self.has(item)))


def clone(src: Iterable[T]) -> set[T]:
    """Return a copy of a set."""
    return set(src)


def from_list(src: Iterable[T]) -> set[T]:
    """Build a set from the items of a list."""
    return set(src)


def to_list(src: Iterable[T]) -> list[T]:
    """Return the items of a set as an unordered list."""
    return list(src)


def to_safe_set(src: Iterable[T]) -> SafeSet[T]:
    """Wrap the items of a set in a SafeSet."""
    return SafeSet(*to_list(src))


def intersection_set(*sources: Iterable[T]) -> set[T]:
    """Return the intersection of all sources; empty if none are given."""
    if not sources:
        return set()
    result = set(sources[0])
    for other in sources[1:]:
        result = {item for item in other if item in result}
    return result


def union_set(*sources: Iterable[T]) -> set[T]:
    """Return the union of all sources; empty if none are given."""
    result: set[T] = set()
    for source in sources:
        result.update(source)
    return result


def complement_set(a: Iterable[T] | None, b: Iterable[T] | None) -> set[T]:
    """Return the items of ``b`` that are not in ``a``; empty if either is None."""
    if a is None or b is None:
        return set()
    base = set(a)
    return {item for item in b if item not in base}