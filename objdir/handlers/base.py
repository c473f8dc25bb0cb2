from __future__ import annotations

from typing import Any, Optional

from objdir.engine.options import StoreOptions


class StorageTypeError(TypeError):
    pass


class ValueStorageHandler:
    """
    Something that can decide whether it stores a value, and store it.

    path_in_source is the slash-separated (encoded) position of the value in the
    source tree; destination_url is where the value goes (without file extension).
    """
    name: str = "value storage handler"

    def can_store_value(self, path_in_source: str, destination_url: str, value: Any) -> bool:
        raise NotImplementedError

    def store_value(
        self,
        path_in_source: str,
        destination_url: str,
        value: Any,
        options: Optional[StoreOptions] = None,
    ) -> None:
        raise NotImplementedError
