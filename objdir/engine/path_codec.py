from __future__ import annotations


def encode_path_element(element: str) -> str:
    """
    Encode a path element so it never contains a forward slash.
    A tiny subset of URI component encoding: "%" first, then "/".
    """
    return element.replace("%", "%25").replace("/", "%2F")


def decode_path_element(element: str) -> str:
    return element.replace("%2F", "/").replace("%25", "%")
