import pytest

from objdir.engine.directory_storer import ArrayDirectoryValueStorageHandler
from objdir.engine.fluent import FluentHandler
from objdir.engine.key_extractor import index_key_extractor, property_key_extractor
from objdir.handlers.base import StorageTypeError

from mocks import MockDirectoryCreator, MockValueStorageHandler

DEST = "file:///tmp/list"


def test_key_extractors():
    assert index_key_extractor("anything", 3) == "3"

    by_id = property_key_extractor("id")
    assert by_id({"id": 7}, 0) == "7"
    assert by_id({"name": "x"}, 0) is None
    assert by_id("not an object", 0) is None


def test_only_stores_arrays():
    handler = ArrayDirectoryValueStorageHandler("arr", [], MockDirectoryCreator())
    assert handler.can_store_value("", DEST, [1])
    assert handler.can_store_value("", DEST, ())
    assert not handler.can_store_value("", DEST, {"a": 1})
    assert not handler.can_store_value("", DEST, "abc")

    with pytest.raises(StorageTypeError):
        handler.store_value("", DEST, {"a": 1})


def test_items_named_by_index():
    creator = MockDirectoryCreator()
    mock = MockValueStorageHandler("leaf")
    handler = ArrayDirectoryValueStorageHandler("arr", [mock], creator)

    handler.store_value("/list", DEST, ["a", "b"])

    assert [c.url for c in creator.calls] == [DEST]
    assert [c.path_in_source for c in mock.store_calls] == ["/list/0", "/list/1"]
    assert [c.destination_url for c in mock.store_calls] == [DEST + "/0", DEST + "/1"]


def test_object_items_fall_back_to_directories():
    creator = MockDirectoryCreator()
    leaf = MockValueStorageHandler("leaf")
    strings = FluentHandler(leaf).when_is_type_of("string")
    handler = ArrayDirectoryValueStorageHandler(
        "arr", [strings], creator, key_extractor=property_key_extractor("id")
    )

    handler.store_value("", DEST, [{"id": "cat", "sound": "meow"}, {"id": "dog", "sound": "woof"}])

    assert [c.url for c in creator.calls] == [DEST, DEST + "/cat", DEST + "/dog"]
    assert [c.path_in_source for c in leaf.store_calls] == [
        "/cat/id",
        "/cat/sound",
        "/dog/id",
        "/dog/sound",
    ]


def test_missing_key_fails_before_writing():
    creator = MockDirectoryCreator()
    mock = MockValueStorageHandler("leaf")
    handler = ArrayDirectoryValueStorageHandler(
        "arr", [mock], creator, key_extractor=property_key_extractor("id")
    )

    with pytest.raises(StorageTypeError):
        handler.store_value("/pets", DEST, [{"id": 1}, {"name": "no id"}])

    assert creator.calls == []
    assert mock.store_calls == []
