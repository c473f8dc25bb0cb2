import pytest

from objdir.engine.path_codec import decode_path_element, encode_path_element

TRICKY = [
    "",
    "plain",
    "/",
    "%",
    "%%",
    "//",
    "%/",
    "/%",
    "%2F",
    "%25",
    "a/b%c",
    "%252F",
    "../../etc/passwd",
    "naïve/ünïcode",
]


def test_trivial_encodings():
    assert encode_path_element("") == ""
    assert encode_path_element("%") == "%25"
    assert encode_path_element("/") == "%2F"
    assert encode_path_element("a/b") == "a%2Fb"


def test_trivial_decodings():
    assert decode_path_element("") == ""
    assert decode_path_element("%25") == "%"
    assert decode_path_element("%2F") == "/"


def test_percent_is_escaped_before_slash():
    # "/" -> "%2F" must not be escaped again to "%252F"
    assert encode_path_element("%/") == "%25%2F"


@pytest.mark.parametrize("s", TRICKY)
def test_encoded_never_contains_slash(s):
    assert "/" not in encode_path_element(s)


@pytest.mark.parametrize("s", TRICKY)
def test_round_trip(s):
    assert decode_path_element(encode_path_element(s)) == s
