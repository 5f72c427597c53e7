"""Tests for the JSON file store."""

import json
import os

import pytest

from src.services.storage.product_store import ProductStore

pytestmark = pytest.mark.unit


def _records():
    return [
        {"id": 1, "name": "Lamp", "price": 19.99, "inStock": True},
        {"id": 4, "name": "Desk", "price": 120, "inStock": False},
    ]


def test_missing_file_loads_as_empty(products_file):
    assert ProductStore(products_file).load() == []


@pytest.mark.parametrize("content", ["", "   \n", "{not json", '{"id": 1}', "42", "null"])
def test_corrupt_or_non_array_content_loads_as_empty(products_file, content):
    products_file.write_text(content, encoding="utf-8")

    assert ProductStore(products_file).load() == []


def test_binary_garbage_loads_as_empty(products_file):
    products_file.write_bytes(b"\xff\xfe garbage \x80")

    assert ProductStore(products_file).load() == []


def test_save_then_load_round_trips(products_file):
    store = ProductStore(products_file)
    store.save(_records())

    assert store.load() == _records()


def test_saved_file_is_indented_array_with_ordered_keys(products_file):
    ProductStore(products_file).save(_records())

    text = products_file.read_text(encoding="utf-8")
    records = json.loads(text)
    assert text.startswith("[\n  {\n")
    assert list(records[0]) == ["id", "name", "price", "inStock"]
    assert records[1] == {"id": 4, "name": "Desk", "price": 120, "inStock": False}


def test_save_leaves_no_temporary_file(products_file):
    store = ProductStore(products_file)
    store.save(_records())

    assert not store.temp_path.exists()
    assert store.temp_path.name == "products.json.tmp"


def test_unexpected_records_are_kept_as_is(write_records, products_file):
    records = [
        {"id": 1, "name": "Lamp", "price": 5, "inStock": True},
        {"id": 2, "name": "Truthy", "price": 5, "inStock": 1},
        "not a record",
        {"id": 3, "name": "Chair", "price": 7.5, "inStock": False, "sku": "CH-3"},
    ]
    write_records(records)
    store = ProductStore(products_file)

    loaded = store.load()
    store.save(loaded)

    assert loaded == records
    assert json.loads(products_file.read_text(encoding="utf-8")) == records


def test_unreadable_path_raises_os_error(tmp_path):
    directory = tmp_path / "products.json"
    directory.mkdir()

    with pytest.raises(OSError):
        ProductStore(directory).load()


def test_failed_rename_keeps_original_and_removes_temp_file(products_file, monkeypatch):
    store = ProductStore(products_file)
    store.save(_records()[:1])
    original = products_file.read_text(encoding="utf-8")

    def _fail_replace(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr(os, "replace", _fail_replace)

    with pytest.raises(OSError, match="rename failed"):
        store.save(_records())

    assert products_file.read_text(encoding="utf-8") == original
    assert not store.temp_path.exists()


def test_save_creates_missing_parent_directory(tmp_path):
    store = ProductStore(tmp_path / "nested" / "products.json")
    store.save(_records())

    assert len(store.load()) == 2


def test_separate_stores_on_one_file_are_last_writer_wins(products_file):
    # two stores stand in for two processes: each has its own lock
    first = ProductStore(products_file)
    second = ProductStore(products_file)
    first.save(_records()[:1])

    seen_by_first = first.load()
    seen_by_second = second.load()
    first.save(seen_by_first + [{"id": 2, "name": "A", "price": 1, "inStock": True}])
    second.save(seen_by_second + [{"id": 2, "name": "B", "price": 2, "inStock": True}])

    names = [record["name"] for record in first.load()]
    assert names == ["Lamp", "B"]


def test_next_id_is_one_past_current_maximum():
    assert ProductStore.next_id([]) == 1
    assert ProductStore.next_id(_records()) == 5


def test_next_id_ignores_non_integer_ids():
    records = [
        {"id": 3, "name": "A"},
        {"id": "9", "name": "B"},
        {"id": True, "name": "C"},
        {"id": 7.5, "name": "D"},
        None,
        ["id", 12],
    ]

    assert ProductStore.next_id(records) == 4
