"""Tagged locator for a single JSON value held in a bento core."""

from __future__ import annotations

import operator
from enum import IntEnum

KeyLocator = int
"""Position of an object key inside a key store."""

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1
MAX_INDEX = UINT64_MAX


class Tag(IntEnum):
    """Kind of data a :class:`ValueLocator` holds."""

    NULL = 0
    BOOL = 1
    INT64 = 2
    UINT64 = 3
    DOUBLE = 4
    STRING_INDEX = 5
    ARRAY_INDEX = 6
    OBJECT_INDEX = 7


_PRIMITIVE_TAGS = frozenset({Tag.BOOL, Tag.INT64, Tag.UINT64, Tag.DOUBLE})
_INDEX_TAGS = frozenset({Tag.STRING_INDEX, Tag.ARRAY_INDEX, Tag.OBJECT_INDEX})


def _checked_int(value, low: int, high: int, what: str) -> int:
    number = operator.index(value)
    if not low <= number <= high:
        raise OverflowError(f"{number} does not fit in {what}")
    return number


class ValueLocator:
    """Holds a primitive JSON value directly, or an index into a storage."""

    __slots__ = ("_tag", "_data")

    def __init__(self) -> None:
        self._tag = Tag.NULL
        self._data: object = None

    @property
    def tag(self) -> Tag:
        return self._tag

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueLocator):
            return NotImplemented
        return self._tag == other._tag and self._data == other._data

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        if self._tag is Tag.NULL:
            return "ValueLocator(null)"
        return f"ValueLocator({self._tag.name.lower()}={self._data!r})"

    def is_null(self) -> bool:
        return self._tag is Tag.NULL

    def is_bool(self) -> bool:
        return self._tag is Tag.BOOL

    def is_int64(self) -> bool:
        return self._tag is Tag.INT64

    def is_uint64(self) -> bool:
        return self._tag is Tag.UINT64

    def is_double(self) -> bool:
        return self._tag is Tag.DOUBLE

    def is_string_index(self) -> bool:
        return self._tag is Tag.STRING_INDEX

    def is_array_index(self) -> bool:
        return self._tag is Tag.ARRAY_INDEX

    def is_object_index(self) -> bool:
        return self._tag is Tag.OBJECT_INDEX

    def is_primitive(self) -> bool:
        return self._tag in _PRIMITIVE_TAGS

    def is_index(self) -> bool:
        return self._tag in _INDEX_TAGS

    def _expect(self, allowed, wanted: str):
        if self._tag not in allowed:
            raise TypeError(
                f"locator holds {self._tag.name.lower()}, not {wanted}"
            )
        return self._data

    def as_bool(self) -> bool:
        return self._expect((Tag.BOOL,), "bool")

    def as_int64(self) -> int:
        return self._expect((Tag.INT64,), "int64")

    def as_uint64(self) -> int:
        return self._expect((Tag.UINT64,), "uint64")

    def as_double(self) -> float:
        return self._expect((Tag.DOUBLE,), "double")

    def as_index(self) -> int:
        return self._expect(_INDEX_TAGS, "an index")

    def emplace_null(self) -> None:
        self._tag = Tag.NULL
        self._data = None

    def emplace_bool(self, value) -> None:
        self._tag = Tag.BOOL
        self._data = bool(value)

    def emplace_int64(self, value) -> None:
        number = _checked_int(value, INT64_MIN, INT64_MAX, "int64")
        self._tag = Tag.INT64
        self._data = number

    def emplace_uint64(self, value) -> None:
        number = _checked_int(value, 0, UINT64_MAX, "uint64")
        self._tag = Tag.UINT64
        self._data = number

    def emplace_double(self, value) -> None:
        number = float(value)
        self._tag = Tag.DOUBLE
        self._data = number

    def _emplace_index(self, tag: Tag, index) -> None:
        number = _checked_int(index, 0, MAX_INDEX, "an index")
        self._tag = tag
        self._data = number

    def emplace_string_index(self, index) -> None:
        self._emplace_index(Tag.STRING_INDEX, index)

    def emplace_array_index(self, index) -> None:
        self._emplace_index(Tag.ARRAY_INDEX, index)

    def emplace_object_index(self, index) -> None:
        self._emplace_index(Tag.OBJECT_INDEX, index)

    def reset(self) -> None:
        self._tag = Tag.NULL
        self._data = None