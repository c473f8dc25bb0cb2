from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, TypedDict


class StoreCancelledError(RuntimeError):
    pass


class StoreOptions(TypedDict, total=False):
    """
    Options passed down through store_value calls.
    Any key may be absent; merge_options layers them key by key.
    """
    signal: threading.Event
    mode: int
    directory_mode: int
    strict: bool
    property_name_encoder: Callable[[str], str]


def merge_options(
    default_options: Optional[Mapping[str, Any]],
    options: Optional[Mapping[str, Any]],
) -> Optional[StoreOptions]:
    if not default_options:
        return options  # type: ignore[return-value]
    if not options:
        return default_options  # type: ignore[return-value]

    merged: Dict[str, Any] = dict(default_options)
    merged.update(options)
    return merged  # type: ignore[return-value]


def raise_if_cancelled(options: Optional[Mapping[str, Any]]) -> None:
    signal = options.get("signal") if options else None
    if signal is not None and signal.is_set():
        raise StoreCancelledError("Storage operation was cancelled.")


def is_object(value: object) -> bool:
    return isinstance(value, Mapping)


def is_array(value: object) -> bool:
    return isinstance(value, (list, tuple))


def is_binary(value: object) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


def value_type_tag(value: object) -> str:
    # bool before number: bool is an int subclass
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_binary(value):
        return "binary"
    if is_array(value):
        return "array"
    if is_object(value):
        return "object"
    return type(value).__name__
