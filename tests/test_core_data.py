import pytest

from jsonbento.core_data import AdjacencyList, CoreData, KeyStore, StringStorage


# -- AdjacencyList ---------------------------------------------------------


def test_adjacency_add_row():
    adj = AdjacencyList()
    assert len(adj) == 0
    assert adj.add_row() == 0
    assert len(adj) == 1
    assert adj.row_size(0) == 0


def test_adjacency_push_back():
    adj = AdjacencyList()
    adj.append(0, 1)
    assert len(adj) == 1
    assert adj.row_size(0) == 1
    assert adj.at(0, 0) == 1

    adj.append(0, 2)
    assert len(adj) == 1
    assert adj.row_size(0) == 2
    assert adj.at(0, 0) == 1
    assert adj.at(0, 1) == 2

    adj.append(0, 3)
    assert adj.row_size(0) == 3
    assert adj.row(0) == (1, 2, 3)

    adj.append(1, 4)
    assert len(adj) == 2
    assert adj.row_size(0) == 3
    assert adj.row_size(1) == 1
    assert adj.at(0, 2) == 3
    assert adj.at(1, 0) == 4


def test_adjacency_append_returns_column():
    adj = AdjacencyList()
    assert adj.append(2, "a") == 0
    assert adj.append(2, "b") == 1
    assert len(adj) == 3
    assert adj.row_size(1) == 0


def test_adjacency_clear():
    adj = AdjacencyList()
    for row, value in [(0, 1), (0, 2), (0, 3), (1, 4)]:
        adj.append(row, value)
    adj.clear()
    assert len(adj) == 0


def test_adjacency_clear_row():
    adj = AdjacencyList()
    for row, value in [(0, 1), (0, 2), (0, 3), (1, 4)]:
        adj.append(row, value)
    adj.clear_row(0)
    assert adj.row_size(0) == 0
    assert adj.row_size(1) == 1
    assert len(adj) == 2


def test_adjacency_resize():
    adj = AdjacencyList()
    adj.resize(1)
    assert len(adj) == 1
    assert adj.row_size(0) == 0
    adj.append(0, 10)

    adj.resize(4)
    assert len(adj) == 4
    assert adj.row_size(0) == 1
    assert [adj.row_size(r) for r in (1, 2, 3)] == [0, 0, 0]
    assert adj.at(0, 0) == 10

    adj.resize(1)
    assert len(adj) == 1
    assert adj.row_size(0) == 1
    assert adj.at(0, 0) == 10


def test_adjacency_set_and_errors():
    adj = AdjacencyList()
    adj.append(0, 1)
    adj.set(0, 0, 7)
    assert adj.at(0, 0) == 7
    with pytest.raises(IndexError):
        adj.at(0, 1)
    with pytest.raises(IndexError):
        adj.at(3, 0)
    with pytest.raises(IndexError):
        adj.append(-1, 0)
    with pytest.raises(ValueError):
        adj.resize(-1)


# -- StringStorage ---------------------------------------------------------

STRINGS = [
    "test",
    "long test string test test 0",
    "test",
    "long test string test test 1",
]


def _exercise_storage(storage):
    assert len(storage) == 0
    assert list(storage) == []

    ids = []
    for count, text in enumerate(STRINGS, start=1):
        ids.append(storage.emplace(text))
        assert len(storage) == count

    for text, index in zip(STRINGS, ids):
        assert storage.at(index) == text
        assert storage[index] == text
    assert sorted(storage) == sorted(STRINGS)

    remaining = len(STRINGS)
    for index in ids:
        storage.erase(index)
        remaining -= 1
        assert len(storage) == remaining


def test_string_storage_all():
    storage = StringStorage()
    _exercise_storage(storage)
    _exercise_storage(storage)


def test_string_storage_errors():
    storage = StringStorage()
    index = storage.emplace("x")
    storage.erase(index)
    with pytest.raises(IndexError):
        storage.at(index)
    with pytest.raises(IndexError):
        storage.erase(index)
    with pytest.raises(TypeError):
        storage.emplace(3)


def test_string_storage_ids_are_stable():
    storage = StringStorage()
    a = storage.emplace("a")
    b = storage.emplace("b")
    storage.erase(a)
    assert storage.at(b) == "b"
    assert storage.emplace("") != b
    assert "" in list(storage)


# -- KeyStore --------------------------------------------------------------


def test_key_store():
    store = KeyStore()
    loc0 = store.find_or_add("key0")
    assert store.find("key0") == loc0
    assert store.find_or_add("key0") == loc0
    assert len(store) == 1

    loc1 = store.find_or_add("key1")
    assert store.find("key0") == loc0
    assert store.find("key1") == loc1
    assert loc0 != loc1

    assert store.key_at(loc0) == "key0"
    assert store.key_at(loc1) == "key1"
    assert store.find("missing") is None
    with pytest.raises(IndexError):
        store.key_at(5)


# -- CoreData --------------------------------------------------------------


def test_core_data_scalar_roots():
    core = CoreData()
    assert core.push_back_root_value(True) == 0
    assert core.push_back_root_value(-5) == 1
    assert core.push_back_root_value(1 << 63) == 2
    assert core.push_back_root_value(2.5) == 3
    assert core.push_back_root_value(None) == 4
    assert core.push_back_root_value("hi") == 5
    assert len(core) == 6

    assert core.root(0).as_bool() is True
    assert core.root(1).as_int64() == -5
    assert core.root(2).as_uint64() == 1 << 63
    assert core.root(3).as_double() == 2.5
    assert core.root(4).is_null()
    assert core.string_storage.at(core.root(5).as_index()) == "hi"


def test_core_data_nested():
    core = CoreData()
    idx = core.push_back_root_value({"a": [1, "x"], "b": {"a": None}})
    root = core.root(idx)
    assert root.is_object_index()

    members = core.object_storage.row(root.as_index())
    assert [core.key_storage.key_at(m.key) for m in members] == ["a", "b"]

    arr = members[0].value
    assert arr.is_array_index()
    items = core.array_storage.row(arr.as_index())
    assert items[0].as_int64() == 1
    assert core.string_storage.at(items[1].as_index()) == "x"

    inner = members[1].value
    inner_members = core.object_storage.row(inner.as_index())
    assert inner_members[0].key == members[0].key
    assert inner_members[0].value.is_null()
    assert len(core.key_storage) == 2


def test_core_data_errors_and_clear():
    core = CoreData()
    with pytest.raises(OverflowError):
        core.push_back_root_value(1 << 64)
    with pytest.raises(TypeError):
        core.push_back_root_value({1: 2})
    with pytest.raises(TypeError):
        core.push_back_root_value(object())
    assert len(core) == 0

    core.push_back_root_value(["a"])
    core.clear()
    assert len(core) == 0
    assert len(core.string_storage) == 0
    assert len(core.array_storage) == 0
    with pytest.raises(IndexError):
        core.root(0)