"""Conversion between plain JSON values and values held in a bento core."""

from __future__ import annotations

from typing import Any

from jsonbento.core_data import CoreData
from jsonbento.value_locator import ValueLocator


def value_to(core: CoreData, locator: ValueLocator) -> Any:
    """Rebuild the plain JSON value that ``locator`` points at inside ``core``."""
    if locator.is_null():
        return None
    if locator.is_bool():
        return locator.as_bool()
    if locator.is_int64():
        return locator.as_int64()
    if locator.is_uint64():
        return locator.as_uint64()
    if locator.is_double():
        return locator.as_double()
    if locator.is_string_index():
        return core.string_storage.at(locator.as_index())
    if locator.is_array_index():
        return [
            value_to(core, element)
            for element in core.array_storage.row(locator.as_index())
        ]
    if locator.is_object_index():
        return {
            core.key_storage.key_at(member.key): value_to(core, member.value)
            for member in core.object_storage.row(locator.as_index())
        }
    raise TypeError(f"locator holds an unknown kind of value: {locator!r}")


def value_from(value: Any, core: CoreData, locator: ValueLocator) -> None:
    """Store a plain JSON value in ``core`` and point ``locator`` at it."""
    core.add_value(value, locator)


def root_value_to(core: CoreData, index: int) -> Any:
    """Rebuild the root value stored at ``index``."""
    return value_to(core, core.root(index))