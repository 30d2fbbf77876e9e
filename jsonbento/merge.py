"""Hash-partitioned inner join of two collections of JSON objects."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from jsonbento.hashing import compute_hash

OutputFn = Callable[[dict, Mapping], None]

_MISSING = object()


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "double"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    raise TypeError(f"unsupported JSON value type: {type(value).__name__}")


def _json_equal(lhs: Any, rhs: Any) -> bool:
    """Compare two JSON values, requiring the same kind at every level."""
    kind = _kind(lhs)
    if kind != _kind(rhs):
        return False
    if kind == "array":
        return len(lhs) == len(rhs) and all(
            _json_equal(a, b) for a, b in zip(lhs, rhs)
        )
    if kind == "object":
        return lhs.keys() == rhs.keys() and all(
            _json_equal(item, rhs[key]) for key, item in lhs.items()
        )
    return lhs == rhs


def _key_equal(lhs: Any, rhs: Any) -> bool:
    if lhs is _MISSING or rhs is _MISSING:
        return lhs is rhs
    return _json_equal(lhs, rhs)


def _require_object(value: Any) -> Mapping:
    if not isinstance(value, Mapping):
        raise TypeError("a row must be a JSON object")
    return value


class KeyUnifier:
    """Maps join keys, extracted from objects by column names, to small integers."""

    def __init__(self) -> None:
        self._keys: list[tuple[Any, ...]] = []

    @staticmethod
    def _extract(obj: Any, keycols: Iterable[str]) -> tuple[Any, ...]:
        row = _require_object(obj)
        return tuple(row.get(col, _MISSING) for col in keycols)

    def _position(self, key: tuple[Any, ...]) -> int:
        for position, known in enumerate(self._keys):
            if len(known) == len(key) and all(map(_key_equal, known, key)):
                return position
        return -1

    def __call__(self, obj: Any, keycols: Iterable[str]) -> int:
        """Return the index of the key of ``obj``, registering it if new."""
        key = self._extract(obj, keycols)
        position = self._position(key)
        if position >= 0:
            return position
        self._keys.append(key)
        return len(self._keys) - 1

    def find(self, obj: Any, keycols: Iterable[str]) -> int:
        """Return the index of the key of ``obj``, or -1 if it is unknown."""
        return self._position(self._extract(obj, keycols))

    def __len__(self) -> int:
        return len(self._keys)

    def clear(self) -> None:
        self._keys.clear()


def append_suffix(names: Iterable[str], suffix: str) -> list[str]:
    """Return the names with ``suffix`` appended to each."""
    return [name + suffix for name in names]


def add_join_columns_to_output(
    joincols: Iterable[str], output: Iterable[str]
) -> list[str]:
    """Return ``output`` extended by the join columns it lacks.

    An empty output list means every column is kept, so it stays empty.
    """
    result = list(output)
    if not result:
        return result
    for col in joincols:
        if col not in result:
            result.append(col)
    return result


def _scalar_copy(value: Any) -> Any:
    kind = _kind(value)
    if kind in ("array", "object"):
        raise TypeError("nested arrays and objects are not supported in merge output")
    return value


def make_output_function(projection: Iterable[str], suffix: str) -> OutputFn:
    """Build a function copying fields of a row into a record, renamed with ``suffix``.

    With an empty projection every field is copied; otherwise only the
    projected fields that the row has.
    """
    fields = list(projection)

    if not fields:

        def copy_all(record: dict, row: Mapping) -> None:
            for key, value in _require_object(row).items():
                record[key + suffix] = _scalar_copy(value)

        return copy_all

    renamed = append_suffix(fields, suffix)

    def copy_selected(record: dict, row: Mapping) -> None:
        source = _require_object(row)
        for field, out_name in zip(fields, renamed):
            if field in source:
                record[out_name] = _scalar_copy(source[field])

    return copy_selected


def _project(row: Mapping, columns: Sequence[str]) -> dict:
    source = _require_object(row)
    if not columns:
        return dict(source)
    return {col: source[col] for col in columns if col in source}


def _hash_index(rows: Sequence[Mapping], columns: Sequence[str]) -> dict[int, list[int]]:
    index: dict[int, list[int]] = {}
    for position, row in enumerate(rows):
        index.setdefault(compute_hash(row, columns), []).append(position)
    return index


def merge(
    lhs: Iterable[Mapping],
    rhs: Iterable[Mapping],
    lhs_on: Iterable[str],
    rhs_on: Iterable[str],
    lhs_proj: Iterable[str] = (),
    rhs_proj: Iterable[str] = (),
    lhs_suffix: str = "_l",
    rhs_suffix: str = "_r",
) -> list[dict]:
    """Inner-join two sequences of JSON objects on the given key columns.

    Each output record holds the (projected) left fields renamed with
    ``lhs_suffix`` and the (projected) right fields renamed with ``rhs_suffix``.
    """
    lhs_rows = list(lhs)
    rhs_rows = list(rhs)
    lhs_on = list(lhs_on)
    rhs_on = list(rhs_on)
    lhs_proj = list(lhs_proj)
    rhs_proj = list(rhs_proj)

    if len(lhs_on) != len(rhs_on):
        raise ValueError("left and right join columns differ in number")

    send_list_rhs = add_join_columns_to_output(rhs_on, rhs_proj)
    pack_list_lhs = add_join_columns_to_output(lhs_on, lhs_proj)

    lhs_index = _hash_index(lhs_rows, lhs_on)
    rhs_index = _hash_index(rhs_rows, rhs_on)

    lhs_out = make_output_function(lhs_proj, lhs_suffix)
    rhs_out = make_output_function(rhs_proj, rhs_suffix)
    unifier = KeyUnifier()
    results: list[dict] = []

    for hash_value in sorted(lhs_index.keys() & rhs_index.keys()):
        rhs_data = [_project(rhs_rows[i], send_list_rhs) for i in rhs_index[hash_value]]
        unifier.clear()
        rhs_keys = [unifier(row, rhs_on) for row in rhs_data]

        for lhs_position in lhs_index[hash_value]:
            lhs_obj = _project(lhs_rows[lhs_position], pack_list_lhs)
            key = unifier.find(lhs_obj, lhs_on)
            if key < 0:
                continue
            for rhs_obj, rhs_key in zip(rhs_data, rhs_keys):
                if rhs_key == key:
                    record: dict = {}
                    lhs_out(record, lhs_obj)
                    rhs_out(record, rhs_obj)
                    results.append(record)

    return results


__all__ = [
    "KeyUnifier",
    "append_suffix",
    "add_join_columns_to_output",
    "make_output_function",
    "merge",
]