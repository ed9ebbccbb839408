"""JSON encoding and decoding with errors that carry the offending source."""

from __future__ import annotations

import json
from typing import Any

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class JSONError(ValueError):
    """Raised when a value cannot be encoded or a document cannot be decoded."""


def _escape(text: str) -> str:
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


def _dumps(src: Any, indent: int | None) -> str:
    separators = (",", ":") if indent is None else (",", ": ")
    try:
        text = json.dumps(
            src,
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=True,
            indent=indent,
            separators=separators,
        )
    except (TypeError, ValueError) as exc:
        raise JSONError(f"json marshal failed. err: {exc}, source: {src!r}") from exc
    return _escape(text)


def marshal_to_string(src: Any) -> str:
    """Encode a value as compact JSON text."""
    return _dumps(src, None)


def marshal(src: Any) -> bytes:
    """Encode a value as compact JSON bytes."""
    return _dumps(src, None).encode("utf-8")


def marshal_indent(src: Any, n: int) -> bytes:
    """Encode a value as JSON bytes indented by ``n`` spaces per level."""
    if n < 0:
        raise ValueError("indent must not be negative")
    return _dumps(src, n).encode("utf-8")


def _loads(src: str | bytes | bytearray) -> Any:
    try:
        return json.loads(src)
    except (TypeError, ValueError) as exc:
        raise JSONError(f"json unmarshal failed. err: {exc}, source: {src!r}") from exc


def unmarshal_from_string(src: str) -> Any:
    """Decode JSON text into Python values."""
    return _loads(src)


def unmarshal(src: bytes | bytearray) -> Any:
    """Decode JSON bytes into Python values."""
    return _loads(src)


def get(data: str | bytes | bytearray, *path: str | int) -> Any:
    """Return the value found by following ``path`` through a JSON document.

    Keys select members of objects and integers select items of arrays.
    Returns None if the document is invalid or the path leads nowhere.
    """
    try:
        node = json.loads(data)
    except (TypeError, ValueError):
        return None
    for step in path:
        if isinstance(node, dict) and isinstance(step, str):
            if step not in node:
                return None
            node = node[step]
        elif isinstance(node, list) and isinstance(step, int) and not isinstance(step, bool):
            if not 0 <= step < len(node):
                return None
            node = node[step]
        else:
            return None
    return node


def valid(data: str | bytes | bytearray) -> bool:
    """Report whether the input is a well-formed JSON document."""
    try:
        json.loads(data)
    except (TypeError, ValueError):
        return False
    return True