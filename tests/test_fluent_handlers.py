from objdir.engine.fluent import FluentHandler, compile_path_pattern, make_fluent
from objdir.runtime.platform import DirectoryCreator

from mocks import MockValueStorageHandler

SOME_URL = "http://localhost/somewhere"


def test_fluent_handler_names():
    inner = MockValueStorageHandler("foo")
    assert FluentHandler(inner, "FOO").name == "FOO"

    fluent = FluentHandler(inner)
    assert fluent.name == "foo"

    renamed = fluent.with_name("FOO")
    assert renamed.name == "FOO"
    assert fluent.name == "foo"


def test_store_value_is_delegated_without_rechecking():
    inner = MockValueStorageHandler("foo", can_store=False)
    fluent = FluentHandler(inner).when_path_matches("/nope")

    fluent.store_value("/x", "file:///tmp", {"a": "b"}, {"strict": True})

    assert inner.can_store_calls == []
    assert len(inner.store_calls) == 1
    call = inner.store_calls[0]
    assert call.path_in_source == "/x"
    assert call.destination_url == "file:///tmp"
    assert call.options == {"strict": True}


def test_path_pattern():
    inner = MockValueStorageHandler("foo")
    fluent = FluentHandler(inner)
    assert fluent.can_store_value("x/y/z", SOME_URL, 42)

    with_path = fluent.when_path_matches("a/*/c")
    assert not with_path.can_store_value("x/y/z", SOME_URL, 42)
    assert with_path.can_store_value("a/b/c", SOME_URL, 42)
    # single-level wildcard
    assert not with_path.can_store_value("a/b/b/c", SOME_URL, 42)
    # base handler unchanged
    assert fluent.can_store_value("x/y/z", SOME_URL, 42)

    inner.can_store = False
    assert not with_path.can_store_value("a/b/c", SOME_URL, 42)


def test_path_patterns_every():
    inner = MockValueStorageHandler("foo")
    fluent = FluentHandler(inner).when_path_matches_every(["a/*/*", "*/b/*", "*/*/c"])

    assert not fluent.can_store_value("donut", SOME_URL, 42)
    assert fluent.can_store_value("a/b/c", SOME_URL, 42)
    assert not fluent.can_store_value("a/y/z", SOME_URL, 42)
    assert not fluent.can_store_value("x/b/z", SOME_URL, 42)
    assert not fluent.can_store_value("x/y/c", SOME_URL, 42)

    inner.can_store = False
    assert not fluent.can_store_value("a/b/c", SOME_URL, 42)


def test_path_patterns_some():
    inner = MockValueStorageHandler("foo")
    fluent = FluentHandler(inner).when_path_matches_some(["a/*/c", "*/y/*"])

    assert not fluent.can_store_value("donut", SOME_URL, 42)
    assert fluent.can_store_value("a/b/c", SOME_URL, 42)
    assert fluent.can_store_value("x/y/z", SOME_URL, 42)

    inner.can_store = False
    assert not fluent.can_store_value("a/b/c", SOME_URL, 42)


def test_glob_translation():
    assert compile_path_pattern("/paths/*").fullmatch("/paths/%2Fpets")
    assert not compile_path_pattern("/paths/*").fullmatch("/paths/a/b")
    assert compile_path_pattern("/paths/**").fullmatch("/paths/a/b")
    assert compile_path_pattern("/item?").fullmatch("/item1")
    assert not compile_path_pattern("/item?").fullmatch("/item/")
    assert compile_path_pattern("/[ab]").fullmatch("/b")
    assert not compile_path_pattern("/[!ab]").fullmatch("/b")
    assert compile_path_pattern("/a.b").fullmatch("/a.b")
    assert not compile_path_pattern("/a.b").fullmatch("/axb")


def test_structural_checks():
    inner = MockValueStorageHandler("foo")
    arrays = FluentHandler(inner).when_is_array()
    objects = FluentHandler(inner).when_is_object()

    assert arrays.can_store_value("/a", SOME_URL, [1, 2])
    assert not arrays.can_store_value("/a", SOME_URL, {"a": 1})
    assert not arrays.can_store_value("/a", SOME_URL, "ab")

    assert objects.can_store_value("/a", SOME_URL, {"a": 1})
    assert not objects.can_store_value("/a", SOME_URL, [1, 2])
    assert not objects.can_store_value("/a", SOME_URL, None)


def test_type_tag_check():
    inner = MockValueStorageHandler("foo")
    strings = FluentHandler(inner).when_is_type_of("string")
    numbers = FluentHandler(inner).when_is_type_of("number")

    assert not strings.can_store_value("donut", SOME_URL, 42)
    assert strings.can_store_value("x/y/z", SOME_URL, "this is a string")
    assert numbers.can_store_value("x", SOME_URL, 4.2)
    assert not numbers.can_store_value("x", SOME_URL, True)

    inner.can_store = False
    assert not strings.can_store_value("x/y/z", SOME_URL, "this is a string")


def test_instance_check():
    inner = MockValueStorageHandler("foo")
    fluent = FluentHandler(inner).when_is_instance_of(DirectoryCreator)

    assert not fluent.can_store_value("donut", SOME_URL, 42)
    assert fluent.can_store_value("x/y/z", SOME_URL, DirectoryCreator())

    inner.can_store = False
    assert not fluent.can_store_value("x/y/z", SOME_URL, DirectoryCreator())


def test_make_fluent_does_not_rewrap():
    inner = MockValueStorageHandler("foo")
    fluent = make_fluent(inner)
    assert isinstance(fluent, FluentHandler)
    assert make_fluent(fluent) is fluent
