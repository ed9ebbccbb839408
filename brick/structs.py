"""Extraction of attribute values from lists of record objects."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class FieldAccessError(Exception):
    """Raised when a field cannot be read from the given objects."""


_NON_STRUCT_TYPES = (
    int, float, complex, str, bytes, bytearray, bool,
    list, tuple, dict, set, frozenset, type(None), type,
)


def _is_struct(obj: object) -> bool:
    if isinstance(obj, _NON_STRUCT_TYPES):
        return False
    return hasattr(obj, "__dict__") or any(
        "__slots__" in vars(klass) for klass in type(obj).__mro__
    )


def _has_field(obj: object, name: str) -> bool:
    if name in getattr(obj, "__dict__", {}):
        return True
    for klass in type(obj).__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        if name in slots:
            return hasattr(obj, name)
    return False


def _field_value(obj: object, name: str) -> Any:
    if not _is_struct(obj):
        raise FieldAccessError("source slice element is not a struct")
    if not _has_field(obj, name):
        raise FieldAccessError(f"source slice element has not field name '{name}'")
    return getattr(obj, name)


def _nested_field_value(obj: object, names: Sequence[str]) -> Any:
    for name in names:
        obj = _field_value(obj, name)
    return obj


def _matches(value: object, expected: type) -> bool:
    if isinstance(value, bool) and expected is int:
        return False
    return isinstance(value, expected)


def _check_convertible(src: Sequence[Any]) -> None:
    can_convert = getattr(src[0], "can_convert", None)
    if callable(can_convert) and not can_convert():
        raise FieldAccessError("source slice can not convert")


def get_field_map(src: Sequence[Any], field_name: str, key_type: type = object) -> dict[Any, list[Any]]:
    """Group the objects by the value of one of their fields.

    Every field value must be an instance of ``key_type``.
    """
    if not src or not field_name:
        return {}
    _check_convertible(src)
    result: dict[Any, list[Any]] = {}
    for elem in src:
        key = _field_value(elem, field_name)
        if not _matches(key, key_type):
            raise FieldAccessError(f"source slice element field should not be key for map '{key!r}'")
        result.setdefault(key, []).append(elem)
    return result


def _collect(src: Sequence[Any], names: Sequence[str], value_type: type) -> list[Any]:
    result = []
    for elem in src:
        value = _nested_field_value(elem, names)
        if not _matches(value, value_type):
            raise FieldAccessError(f"the field type is not match. now: '{type(value).__name__}'")
        result.append(value)
    return result


def get_field_values(src: Sequence[Any], field_name: str, value_type: type = object) -> list[Any]:
    """Return the value of one field from every object, in order.

    Every value must be an instance of ``value_type``.
    """
    if not src or not field_name:
        return []
    _check_convertible(src)
    return _collect(src, [field_name], value_type)


def get_field_values_ex(src: Sequence[Any], field_name: str, value_type: type = object) -> list[Any]:
    """Like get_field_values, but ``field_name`` may name nested fields separated by dots."""
    if not src or not field_name:
        return []
    _check_convertible(src)
    names = field_name.split(".")
    if len(names) == 1:
        return get_field_values(src, field_name, value_type)
    return _collect(src, names, value_type)