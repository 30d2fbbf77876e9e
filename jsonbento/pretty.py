"""Indented, human-readable rendering of JSON values."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import Any, TextIO


def _scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format(value, "g")
    if isinstance(value, str):
        return value
    raise TypeError(f"unsupported JSON value type: {type(value).__name__}")


def _render(value: Any, indent: str, indent_size: int, out: list[str]) -> None:
    if isinstance(value, (list, tuple)):
        inner = indent + " " * indent_size
        out.append("[\n")
        for position, item in enumerate(value):
            if position:
                out.append(",\n")
            out.append(inner)
            _render(item, inner, indent_size, out)
        out.append(f"\n{indent}]")
    elif isinstance(value, Mapping):
        inner = indent + " " * indent_size
        out.append("{\n")
        for position, (key, item) in enumerate(value.items()):
            if position:
                out.append(",\n")
            out.append(f"{inner}{key} : ")
            _render(item, inner, indent_size, out)
        out.append(f"\n{indent}}}")
    else:
        out.append(_scalar(value))


def pretty_format(value: Any, indent_size: int = 2) -> str:
    """Return ``value`` rendered with nested containers indented."""
    if indent_size < 0:
        raise ValueError("indent size must not be negative")
    parts: list[str] = []
    _render(value, "", indent_size, parts)
    return "".join(parts)


def pretty_print(
    value: Any,
    stream: TextIO | None = None,
    indent_size: int = 2,
    print_newline: bool = True,
) -> None:
    """Write ``value`` to ``stream`` (standard output by default)."""
    out = sys.stdout if stream is None else stream
    out.write(pretty_format(value, indent_size))
    if print_newline:
        out.write("\n")
        out.flush()