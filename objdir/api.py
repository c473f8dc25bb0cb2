from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from objdir.engine.directory_storer import DirectoryValueStorageHandler
from objdir.engine.options import StoreOptions
from objdir.handlers.base import ValueStorageHandler
from objdir.runtime.platform import DirectoryCreator, local_directory_creator
from objdir.runtime.store_log import StoreLogger


def store_object_to_directory(
    destination_url: str,
    value: Mapping[str, Any],
    handlers: Iterable[ValueStorageHandler],
    options: Optional[StoreOptions] = None,
    *,
    directory_creator: Optional[DirectoryCreator] = None,
    store_log: Optional[StoreLogger] = None,
) -> None:
    """
    Store an object as a directory at destination_url, writing its properties
    with the given handlers. Unclaimed objects become subdirectories.
    """
    handler = DirectoryValueStorageHandler(
        "Object to directory storage handler",
        handlers,
        directory_creator or local_directory_creator(),
        store_log=store_log,
    )
    handler.store_value("", destination_url, value, options)
