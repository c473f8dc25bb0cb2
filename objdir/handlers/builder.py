from __future__ import annotations

from typing import Iterable, Optional

from objdir.engine.directory_storer import (
    ArrayDirectoryValueStorageHandler,
    DirectoryValueStorageHandler,
)
from objdir.engine.fluent import Condition, FluentHandler
from objdir.engine.key_extractor import property_key_extractor
from objdir.engine.options import StoreOptions
from objdir.handlers.base import ValueStorageHandler
from objdir.handlers.files import (
    Serializer,
    new_binary_file_handler,
    new_custom_file_handler,
    new_json_file_handler,
    new_text_file_handler,
    new_yaml_file_handler,
)
from objdir.runtime.platform import (
    DirectoryCreator,
    FileWriter,
    local_directory_creator,
    local_file_writer,
)
from objdir.runtime.store_log import StoreLogger


class HandlerBuilder:
    """
    Builds fluent handlers that share one file writer and one directory creator.
    Both default to the local file system.
    """

    def __init__(
        self,
        file_writer: Optional[FileWriter] = None,
        directory_creator: Optional[DirectoryCreator] = None,
        store_log: Optional[StoreLogger] = None,
    ):
        self._file_writer = file_writer or local_file_writer()
        self._directory_creator = directory_creator or local_directory_creator()
        self._store_log = store_log

    @property
    def directory_creator(self) -> DirectoryCreator:
        return self._directory_creator

    def text_file(self, extension: Optional[str] = None, name: Optional[str] = None) -> FluentHandler:
        return new_text_file_handler(self._file_writer, extension, name)

    def binary_file(self, extension: Optional[str] = None, name: Optional[str] = None) -> FluentHandler:
        return new_binary_file_handler(self._file_writer, extension, name)

    def json_file(
        self,
        compact: bool = False,
        extension: Optional[str] = None,
        name: Optional[str] = None,
    ) -> FluentHandler:
        return new_json_file_handler(self._file_writer, compact, extension, name)

    def yaml_file(self, extension: Optional[str] = None, name: Optional[str] = None) -> FluentHandler:
        return new_yaml_file_handler(self._file_writer, extension, name)

    def custom_file(
        self,
        serializer: Serializer,
        can_store: Optional[Condition] = None,
        extension: Optional[str] = None,
        name: Optional[str] = None,
    ) -> FluentHandler:
        return new_custom_file_handler(self._file_writer, serializer, can_store, extension, name)

    def object_to_directory(
        self,
        handlers: Iterable[ValueStorageHandler],
        name: Optional[str] = None,
        default_options: Optional[StoreOptions] = None,
    ) -> FluentHandler:
        return FluentHandler(
            DirectoryValueStorageHandler(
                name or "Object to directory storage handler",
                handlers,
                self._directory_creator,
                default_options,
                self._store_log,
            )
        )

    def array_to_directory(
        self,
        handlers: Iterable[ValueStorageHandler],
        key_property: Optional[str] = None,
        name: Optional[str] = None,
        default_options: Optional[StoreOptions] = None,
    ) -> FluentHandler:
        return FluentHandler(
            ArrayDirectoryValueStorageHandler(
                name or "Array to directory storage handler",
                handlers,
                self._directory_creator,
                default_options,
                self._store_log,
                key_extractor=property_key_extractor(key_property) if key_property else None,
            )
        )
