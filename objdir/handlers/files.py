from __future__ import annotations

import json
from typing import Any, Callable, Optional

import yaml

from objdir.engine.fluent import Condition, FluentHandler
from objdir.engine.options import (
    StoreOptions,
    is_binary,
    merge_options,
    raise_if_cancelled,
)
from objdir.handlers.base import StorageTypeError, ValueStorageHandler
from objdir.runtime.platform import FileWriter

Serializer = Callable[[Any], str]


class FileValueStorageHandler(ValueStorageHandler):
    """
    Serializes a value and writes it to the destination plus a file extension.
    Subclasses supply _write(); the default options sit below the caller's.
    """

    def __init__(
        self,
        name: str,
        file_writer: FileWriter,
        extension: str,
        default_options: Optional[StoreOptions] = None,
    ):
        self.name = name
        self._writer = file_writer
        self._extension = extension
        self._default_options = dict(default_options) if default_options else None

    def file_url(self, destination_url: str) -> str:
        return destination_url + self._extension

    def can_store_value(self, path_in_source: str, destination_url: str, value: Any) -> bool:
        return True

    def store_value(
        self,
        path_in_source: str,
        destination_url: str,
        value: Any,
        options: Optional[StoreOptions] = None,
    ) -> None:
        merged = merge_options(self._default_options, options)
        raise_if_cancelled(merged)
        self._write(path_in_source, self.file_url(destination_url), value, merged)

    def _write(
        self,
        path_in_source: str,
        file_url: str,
        value: Any,
        options: Optional[StoreOptions],
    ) -> None:
        raise NotImplementedError


class TextFileValueStorageHandler(FileValueStorageHandler):
    def can_store_value(self, path_in_source: str, destination_url: str, value: Any) -> bool:
        return isinstance(value, str)

    def _write(self, path_in_source, file_url, value, options) -> None:
        self._writer.write_text_to_file(file_url, str(value), options)


class BinaryFileValueStorageHandler(FileValueStorageHandler):
    def can_store_value(self, path_in_source: str, destination_url: str, value: Any) -> bool:
        return is_binary(value)

    def _write(self, path_in_source, file_url, value, options) -> None:
        if not is_binary(value):
            raise StorageTypeError(
                f'Value at path "{path_in_source}" is {type(value).__name__}, not binary data.'
            )
        self._writer.write_binary_to_file(file_url, bytes(value), options)


class SerializerFileValueStorageHandler(FileValueStorageHandler):
    """Text file handler over a caller-provided serializer."""

    def __init__(
        self,
        name: str,
        file_writer: FileWriter,
        extension: str,
        serializer: Serializer,
        can_store: Optional[Condition] = None,
        default_options: Optional[StoreOptions] = None,
    ):
        super().__init__(name, file_writer, extension, default_options)
        self._serializer = serializer
        self._can_store = can_store

    def can_store_value(self, path_in_source: str, destination_url: str, value: Any) -> bool:
        if self._can_store is None:
            return True
        return self._can_store(path_in_source, destination_url, value)

    def _write(self, path_in_source, file_url, value, options) -> None:
        self._writer.write_text_to_file(file_url, self._serializer(value), options)


def json_serializer(compact: bool = False) -> Serializer:
    if compact:
        return lambda value: json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return lambda value: json.dumps(value, ensure_ascii=False, indent=2)


def yaml_serializer(value: Any) -> str:
    return yaml.safe_dump(value, sort_keys=False, allow_unicode=True)


def new_text_file_handler(
    file_writer: FileWriter,
    extension: Optional[str] = None,
    name: Optional[str] = None,
    default_options: Optional[StoreOptions] = None,
) -> FluentHandler:
    return FluentHandler(
        TextFileValueStorageHandler(
            name or "Text file value storage handler",
            file_writer,
            extension if extension is not None else ".txt",
            default_options,
        )
    )


def new_binary_file_handler(
    file_writer: FileWriter,
    extension: Optional[str] = None,
    name: Optional[str] = None,
    default_options: Optional[StoreOptions] = None,
) -> FluentHandler:
    return FluentHandler(
        BinaryFileValueStorageHandler(
            name or "Binary file value storage handler",
            file_writer,
            extension if extension is not None else ".bin",
            default_options,
        )
    )


def new_json_file_handler(
    file_writer: FileWriter,
    compact: bool = False,
    extension: Optional[str] = None,
    name: Optional[str] = None,
    default_options: Optional[StoreOptions] = None,
) -> FluentHandler:
    return FluentHandler(
        SerializerFileValueStorageHandler(
            name or "JSON file value storage handler",
            file_writer,
            extension if extension is not None else ".json",
            json_serializer(compact),
            default_options=default_options,
        )
    )


def new_yaml_file_handler(
    file_writer: FileWriter,
    extension: Optional[str] = None,
    name: Optional[str] = None,
    default_options: Optional[StoreOptions] = None,
) -> FluentHandler:
    return FluentHandler(
        SerializerFileValueStorageHandler(
            name or "YAML file value storage handler",
            file_writer,
            extension if extension is not None else ".yaml",
            yaml_serializer,
            default_options=default_options,
        )
    )


def new_custom_file_handler(
    file_writer: FileWriter,
    serializer: Serializer,
    can_store: Optional[Condition] = None,
    extension: Optional[str] = None,
    name: Optional[str] = None,
    default_options: Optional[StoreOptions] = None,
) -> FluentHandler:
    return FluentHandler(
        SerializerFileValueStorageHandler(
            name or "Custom file value storage handler",
            file_writer,
            extension if extension is not None else "",
            serializer,
            can_store,
            default_options,
        )
    )
