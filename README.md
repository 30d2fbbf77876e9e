# jsonbento

`jsonbento` keeps many JSON documents in one shared, pooled layout.

- Strings, arrays and objects each live in their own pool.
- Object keys are interned once.
- Every value is reached through a small tagged `ValueLocator`.

The package also provides:

- conversion between plain Python JSON values (`None`, `bool`, `int`, `float`, `str`, lists, mappings) and the store;
- an indented pretty printer;
- stable unsigned 64-bit hashing of JSON values;
- an inner hash join (`merge`) over lists of JSON records.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Storing and reading values

```python
from jsonbento.core_data import CoreData
from jsonbento.convert import root_value_to

core = CoreData()
index = core.push_back_root_value({"name": "Alice", "scores": [1, 2, 3]})

assert len(core) == 1
assert root_value_to(core, index) == {"name": "Alice", "scores": [1, 2, 3]}
```

`CoreData` offers these methods:

- `core.root(index)` returns the `ValueLocator` of a stored document. An index out of range raises `IndexError`.
- `core.clear()` empties every pool.

### Integer ranges

- Integers in the signed 64-bit range are stored as int64.
- Larger integers, up to the unsigned 64-bit maximum, are stored as uint64.
- Anything beyond that raises `OverflowError`.

### Converting single values

Given a `CoreData` and a `ValueLocator`, two functions in `jsonbento.convert` move values in and out:

- `value_from(value, core, locator)` stores a Python value and points `locator` at it.
- `value_to(core, locator)` rebuilds the Python value.

## The building blocks

### `ValueLocator` (in `jsonbento.value_locator`)

A `ValueLocator` holds a `Tag` together with either a scalar or an index into a pool.

- `is_null()`, `is_bool()`, `is_int64()`, `is_uint64()`, `is_double()`, `is_string_index()`, `is_array_index()` and `is_object_index()` report what it holds.
- `is_primitive()` and `is_index()` report the two broader groups.
- The `emplace_*` methods set its content. Values out of range raise `OverflowError`.
- The `as_*` methods read its content back. Asking for the wrong kind raises `TypeError`.
- `reset()` returns it to null.

### Pools (in `jsonbento.core_data`)

`AdjacencyList` is a list of growable rows.

- `add_row()` adds a new row.
- `append(row, value)` creates any missing rows up to `row`, then appends `value` to it.
- Items are read and written with `at`, `set`, `row_size`, `row`, `resize`, `clear` and `clear_row`.

`StringStorage` holds strings under stable integer ids.

- It offers `emplace`, `at`, `erase`, `len()` and iteration.
- Ids freed by `erase` are reused.

`KeyStore` interns object keys.

- `find_or_add(key)` never stores the same key twice.
- `find(key)` returns the key's locator, or `None` if the key is unknown.
- `key_at(locator)` returns the key text.

## Pretty printing

```python
from jsonbento.pretty import pretty_format, pretty_print

print(pretty_format({"a": [1, 2]}, 2))
pretty_print({"a": True}, None, 4, True)
```

The output looks like JSON but is not strictly JSON:

- Containers are spread over several lines and indented by `indent_size` spaces per level.
- Keys are written as `key : value`.
- Strings and keys are written without quotes.
- Floats use `%g` formatting.

`pretty_print` writes to the given stream, or to standard output when the stream is `None`. It adds a trailing newline if `print_newline` is true.

## Hashing

`jsonbento.hashing` has these functions:

- `json_hash_code(value)` gives a deterministic unsigned 64-bit hash of a JSON value.
  - Object members and array elements are combined in iteration order with `combine_hash`.
- `compute_hash(row, columns)` hashes the listed columns of a record. Columns missing from the record are skipped.
- `boost_hash_combine`, `stable_hash_combine`, `stable_hash_distribute` and `xor_shift` are the 64-bit mixing helpers.

## Merging

```python
from jsonbento.merge import merge

left = [{"id": 1, "x": "a"}, {"id": 2, "x": "b"}]
right = [{"id": 1, "y": "c"}]

rows = merge(left, right, ["id"], ["id"], [], [], "_l", "_r")
# [{"id_l": 1, "x_l": "a", "id_r": 1, "y_r": "c"}]
```

How `merge` pairs records:

- It is an inner join.
- Rows are first grouped by `compute_hash` of their join columns.
- Within a group, rows are paired only when their join-key values are equal and of the same JSON kind.
- The two lists of join columns must have the same length, or `ValueError` is raised.

What goes into each output record:

- With an empty projection list, every field is copied.
- Otherwise only the listed fields that the row has are copied.
- The suffixes are appended to the output field names.
- Fields that hold arrays or objects cannot be copied into output records and raise `TypeError`.

Helpers used by `merge` are also available:

- `KeyUnifier` maps join keys to small integers.
- `append_suffix`, `add_join_columns_to_output` and `make_output_function` build the column lists and the copying functions.

## What this package does not do

- Everything is kept in memory. There is no persistent, on-disk storage for `CoreData`.
- `merge` works on in-process lists of records. It does not distribute work across processes or machines.
- There is no command-line tool.