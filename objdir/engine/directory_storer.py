from __future__ import annotations

from typing import Any, Dict, Iterable, Optional
from urllib.parse import quote

from objdir.engine.directory_reference import (
    DirectoryEscapeError,
    DirectoryReference,
    normalize_url_path,
)
from objdir.engine.key_extractor import KeyExtractor, index_key_extractor
from objdir.engine.options import (
    StoreOptions,
    is_array,
    is_object,
    merge_options,
    raise_if_cancelled,
)
from objdir.engine.path_codec import encode_path_element
from objdir.handlers.base import StorageTypeError, ValueStorageHandler
from objdir.runtime.platform import DirectoryCreator
from objdir.runtime.store_log import StoreLogger


class NoHandlerMatchedError(ValueError):
    def __init__(self, path_in_source: str):
        self.path_in_source = path_in_source
        super().__init__(
            f'Could not store value at path "{path_in_source}" -- no storage handler matches it'
        )


def _entry_name(directory: DirectoryReference, name: str) -> str:
    # An encoded name is exactly one path segment
    if "/" in name or name in (".", ".."):
        raise DirectoryEscapeError(
            name,
            normalize_url_path(f"{directory.canonical_path}/{name}"),
            directory.canonical_path,
        )
    return name


class _DirectoryStorageHandler(ValueStorageHandler):
    """
    Shared machinery of the directory handlers: create the directory, then
    dispatch every entry to the first candidate handler that accepts it.
    """

    def __init__(
        self,
        name: str,
        handlers: Iterable[ValueStorageHandler],
        directory_creator: DirectoryCreator,
        default_options: Optional[StoreOptions] = None,
        store_log: Optional[StoreLogger] = None,
    ):
        self.name = name
        # Snapshot: later changes to the caller's list are not observed
        self._handlers: tuple[ValueStorageHandler, ...] = tuple(handlers)
        self._directory_creator = directory_creator
        self._default_options = dict(default_options) if default_options else None
        self._store_log = store_log

    def _log(self, path_in_source: str, destination: str, action: str, message: Optional[str] = None) -> None:
        if self._store_log is None:
            return
        self._store_log.record(
            handler=self.name,
            path_in_source=path_in_source,
            destination=destination,
            action=action,
            message=message,
        )

    def _create_directory(
        self,
        path_in_source: str,
        directory: DirectoryReference,
        options: Optional[StoreOptions],
    ) -> None:
        creator_options: Dict[str, Any] = {"recursive": True}
        if options:
            if options.get("signal") is not None:
                creator_options["signal"] = options["signal"]
            if options.get("directory_mode") is not None:
                creator_options["mode"] = options["directory_mode"]

        self._directory_creator.create_directory(directory.canonical_url, creator_options)
        self._log(path_in_source, directory.canonical_url, "directory")

    def _fallback(
        self,
        path_in_source: str,
        destination_url: str,
        value: Any,
        options: Optional[StoreOptions],
    ) -> bool:
        raise NotImplementedError

    def _store_entry(
        self,
        parent_path: str,
        directory: DirectoryReference,
        key: str,
        value: Any,
        options: Optional[StoreOptions],
    ) -> None:
        raise_if_cancelled(options)
        encoder = (options or {}).get("property_name_encoder") or encode_path_element
        path_in_source = f"{parent_path}/{encode_path_element(key)}"
        destination_url = directory.contents_url(quote(_entry_name(directory, encoder(key)), safe=""))

        for candidate in self._handlers:
            if not candidate.can_store_value(path_in_source, destination_url, value):
                continue
            try:
                candidate.store_value(path_in_source, destination_url, value, options)
            except Exception as e:
                self._log(path_in_source, destination_url, "error", f"{type(e).__name__}: {e}")
                raise
            self._log(path_in_source, destination_url, "stored", candidate.name)
            return

        if self._fallback(path_in_source, destination_url, value, options):
            return

        if options and options.get("strict"):
            self._log(path_in_source, destination_url, "error", "no storage handler matches")
            raise NoHandlerMatchedError(path_in_source)

        self._log(path_in_source, destination_url, "skipped")


class DirectoryValueStorageHandler(_DirectoryStorageHandler):
    """
    Stores an object (mapping) as a directory, one entry per property.

    Each property goes to the first handler whose can_store_value accepts it.
    Unclaimed object-valued properties become subdirectories through this same
    handler. Anything else left over is skipped, or raises NoHandlerMatchedError
    when the "strict" option is set. Entries are stored one after the other and
    the first error stops the rest.
    """

    def can_store_value(self, path_in_source: str, destination_url: str, value: Any) -> bool:
        return is_object(value)

    def store_value(
        self,
        path_in_source: str,
        destination_url: str,
        value: Any,
        options: Optional[StoreOptions] = None,
    ) -> None:
        raise_if_cancelled(options)

        if not is_object(value):
            raise StorageTypeError(
                f'Attempting to store non-object value at path "{path_in_source}" as a directory.'
            )

        directory = DirectoryReference(destination_url)
        merged = merge_options(self._default_options, options)

        self._create_directory(path_in_source, directory, merged)

        for key, nested_value in value.items():
            self._store_entry(path_in_source, directory, str(key), nested_value, merged)

    def _fallback(
        self,
        path_in_source: str,
        destination_url: str,
        value: Any,
        options: Optional[StoreOptions],
    ) -> bool:
        if not self.can_store_value(path_in_source, destination_url, value):
            return False
        self._log(path_in_source, destination_url, "recursed")
        self.store_value(path_in_source, destination_url, value, options)
        return True


class ArrayDirectoryValueStorageHandler(_DirectoryStorageHandler):
    """
    Stores an array as a directory. Entry names come from the key extractor
    (the item index by default). Object items no handler claims are stored as
    directories using the same handlers.
    """

    def __init__(
        self,
        name: str,
        handlers: Iterable[ValueStorageHandler],
        directory_creator: DirectoryCreator,
        default_options: Optional[StoreOptions] = None,
        store_log: Optional[StoreLogger] = None,
        key_extractor: Optional[KeyExtractor] = None,
    ):
        super().__init__(name, handlers, directory_creator, default_options, store_log)
        self._key_extractor = key_extractor or index_key_extractor
        self._object_handler = DirectoryValueStorageHandler(
            name, self._handlers, directory_creator, default_options, store_log
        )

    def can_store_value(self, path_in_source: str, destination_url: str, value: Any) -> bool:
        return is_array(value)

    def store_value(
        self,
        path_in_source: str,
        destination_url: str,
        value: Any,
        options: Optional[StoreOptions] = None,
    ) -> None:
        raise_if_cancelled(options)

        if not is_array(value):
            raise StorageTypeError(
                f'Attempting to store non-array value at path "{path_in_source}" as a directory.'
            )

        directory = DirectoryReference(destination_url)
        merged = merge_options(self._default_options, options)

        # All names are resolved before the directory is created
        keys: list[str] = []
        for index, item in enumerate(value):
            key = self._key_extractor(item, index)
            if key is None:
                raise StorageTypeError(
                    f'Cannot name the array item at path "{path_in_source}/{index}": '
                    "no key could be extracted from it."
                )
            keys.append(key)

        self._create_directory(path_in_source, directory, merged)

        for key, item in zip(keys, value):
            self._store_entry(path_in_source, directory, key, item, merged)

    def _fallback(
        self,
        path_in_source: str,
        destination_url: str,
        value: Any,
        options: Optional[StoreOptions],
    ) -> bool:
        if not self._object_handler.can_store_value(path_in_source, destination_url, value):
            return False
        self._log(path_in_source, destination_url, "recursed")
        self._object_handler.store_value(path_in_source, destination_url, value, options)
        return True
