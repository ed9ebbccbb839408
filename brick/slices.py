"""List helpers: joining, de-duplication, sorting and integer casts."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from typing import TypeVar, Union

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)

Number = Union[int, float]
NumberT = TypeVar("NumberT", int, float)
StringT = TypeVar("StringT", bound=str)

_UINT64_MAX = (1 << 64) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def join(first: Sequence[T], second: Sequence[T]) -> list[T]:
    """Concatenate two sequences into a new list."""
    return [*first, *second]


def joins(*sources: Sequence[T]) -> list[T]:
    """Concatenate any number of sequences into a new list."""
    return [item for source in sources for item in source]


def combine(sources: Iterable[Sequence[T]]) -> list[T]:
    """Flatten a sequence of sequences into one list."""
    return [item for source in sources for item in source]


def remove_duplicates(src: Iterable[H]) -> list[H]:
    """Return the items with duplicates removed, keeping first occurrences in order."""
    return list(dict.fromkeys(src))


def sort_numbers(src: list[NumberT], desc: bool = False) -> list[NumberT]:
    """Sort a list of numbers in place and return it."""
    if src:
        src.sort(reverse=desc)
    return src


def sort_strings(src: list[StringT], desc: bool = False) -> list[StringT]:
    """Sort a list of strings in place and return it."""
    if src:
        src.sort(reverse=desc)
    return src


def _check_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    return value


def to_uint64(src: Iterable[int]) -> list[int]:
    """Return the unsigned integers as a new list, checking each fits in 64 bits."""
    result = []
    for value in src:
        number = _check_int(value)
        if not 0 <= number <= _UINT64_MAX:
            raise ValueError(f"value {number} is out of the unsigned 64-bit range")
        result.append(number)
    return result


def to_int64(src: Iterable[int]) -> list[int]:
    """Return the signed integers as a new list, checking each fits in 64 bits."""
    result = []
    for value in src:
        number = _check_int(value)
        if not _INT64_MIN <= number <= _INT64_MAX:
            raise ValueError(f"value {number} is out of the signed 64-bit range")
        result.append(number)
    return result