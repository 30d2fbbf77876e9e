"""Compact storages that together hold many JSON values."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, NamedTuple

from jsonbento.value_locator import INT64_MAX, INT64_MIN, UINT64_MAX, KeyLocator, ValueLocator


class AdjacencyList:
    """A growable list of rows, each a growable list of items."""

    def __init__(self) -> None:
        self._rows: list[list[Any]] = []

    def __len__(self) -> int:
        return len(self._rows)

    def _row(self, row: int) -> list[Any]:
        if not 0 <= row < len(self._rows):
            raise IndexError(f"row {row} out of range")
        return self._rows[row]

    def add_row(self) -> int:
        """Append an empty row and return its index."""
        self._rows.append([])
        return len(self._rows) - 1

    def append(self, row: int, value: Any) -> int:
        """Append an item to a row, creating rows up to it; return its column."""
        if row < 0:
            raise IndexError(f"row {row} out of range")
        if row >= len(self._rows):
            self.resize(row + 1)
        items = self._rows[row]
        items.append(value)
        return len(items) - 1

    def at(self, row: int, col: int) -> Any:
        items = self._row(row)
        if not 0 <= col < len(items):
            raise IndexError(f"column {col} out of range in row {row}")
        return items[col]

    def set(self, row: int, col: int, value: Any) -> None:
        items = self._row(row)
        if not 0 <= col < len(items):
            raise IndexError(f"column {col} out of range in row {row}")
        items[col] = value

    def row_size(self, row: int) -> int:
        return len(self._row(row))

    def row(self, row: int) -> tuple[Any, ...]:
        return tuple(self._row(row))

    def resize(self, rows: int) -> None:
        if rows < 0:
            raise ValueError("row count must not be negative")
        if rows < len(self._rows):
            del self._rows[rows:]
        else:
            self._rows.extend([] for _ in range(rows - len(self._rows)))

    def clear(self) -> None:
        self._rows.clear()

    def clear_row(self, row: int) -> None:
        self._row(row).clear()


class StringStorage:
    """Stores strings under stable integer ids; erased ids are reused."""

    def __init__(self) -> None:
        self._slots: list[str | None] = []
        self._free: list[int] = []
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[str]:
        return (text for text in self._slots if text is not None)

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._slots) or self._slots[index] is None:
            raise IndexError(f"no string stored at {index}")

    def emplace(self, text: str) -> int:
        if not isinstance(text, str):
            raise TypeError("only strings can be stored")
        if self._free:
            index = self._free.pop()
            self._slots[index] = text
        else:
            index = len(self._slots)
            self._slots.append(text)
        self._count += 1
        return index

    def at(self, index: int) -> str:
        self._check(index)
        return self._slots[index]

    __getitem__ = at

    def erase(self, index: int) -> None:
        self._check(index)
        self._slots[index] = None
        self._free.append(index)
        self._count -= 1

    def clear(self) -> None:
        self._slots.clear()
        self._free.clear()
        self._count = 0


class KeyStore:
    """Interns object keys, mapping each distinct key to a locator."""

    def __init__(self) -> None:
        self._keys: list[str] = []
        self._locators: dict[str, KeyLocator] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._locators

    def find_or_add(self, key: str) -> KeyLocator:
        locator = self._locators.get(key)
        if locator is None:
            locator = len(self._keys)
            self._keys.append(key)
            self._locators[key] = locator
        return locator

    def find(self, key: str) -> KeyLocator | None:
        """Return the key's locator, or None if it was never added."""
        return self._locators.get(key)

    def key_at(self, locator: KeyLocator) -> str:
        if not 0 <= locator < len(self._keys):
            raise IndexError(f"no key at {locator}")
        return self._keys[locator]

    def clear(self) -> None:
        self._keys.clear()
        self._locators.clear()


class _Member(NamedTuple):
    key: KeyLocator
    value: ValueLocator


class CoreData:
    """All storages that back a collection of root JSON values."""

    def __init__(self) -> None:
        self.string_storage = StringStorage()
        self.root_values: list[ValueLocator] = []
        self.array_storage = AdjacencyList()
        self.object_storage = AdjacencyList()
        self.key_storage = KeyStore()

    def __len__(self) -> int:
        return len(self.root_values)

    def add_value(self, value: Any, locator: ValueLocator) -> None:
        """Store a plain JSON value, recording where it lives in ``locator``."""
        if value is None:
            locator.reset()
        elif isinstance(value, bool):
            locator.emplace_bool(value)
        elif isinstance(value, int):
            if INT64_MIN <= value <= INT64_MAX:
                locator.emplace_int64(value)
            elif INT64_MAX < value <= UINT64_MAX:
                locator.emplace_uint64(value)
            else:
                raise OverflowError(f"integer {value} is out of range")
        elif isinstance(value, float):
            locator.emplace_double(value)
        elif isinstance(value, str):
            locator.emplace_string_index(self.string_storage.emplace(value))
        elif isinstance(value, (list, tuple)):
            row = self.array_storage.add_row()
            for item in value:
                element = ValueLocator()
                self.array_storage.append(row, element)
                self.add_value(item, element)
            locator.emplace_array_index(row)
        elif isinstance(value, Mapping):
            row = self.object_storage.add_row()
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError("object keys must be strings")
                element = ValueLocator()
                self.object_storage.append(
                    row, _Member(self.key_storage.find_or_add(key), element)
                )
                self.add_value(item, element)
            locator.emplace_object_index(row)
        else:
            raise TypeError(f"unsupported JSON value type: {type(value).__name__}")

    def push_back_root_value(self, value: Any) -> int:
        """Add a value at the end as a root value and return its index."""
        index = len(self.root_values)
        locator = ValueLocator()
        self.root_values.append(locator)
        try:
            self.add_value(value, locator)
        except Exception:
            self.root_values.pop()
            raise
        return index

    def root(self, index: int) -> ValueLocator:
        if not 0 <= index < len(self.root_values):
            raise IndexError(f"root value {index} out of range")
        return self.root_values[index]

    def clear(self) -> None:
        self.string_storage.clear()
        self.root_values.clear()
        self.array_storage.clear()
        self.object_storage.clear()
        self.key_storage.clear()