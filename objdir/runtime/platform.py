from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlsplit
from urllib.request import url2pathname

from objdir.engine.options import raise_if_cancelled


class UnsupportedLocatorError(ValueError):
    pass


def locator_from_path(path: Union[str, Path]) -> str:
    return Path(path).resolve().as_uri()


def path_from_locator(url: str) -> Path:
    parts = urlsplit(url)
    if parts.scheme != "file":
        raise UnsupportedLocatorError(f"Only file: URLs can be written locally, got: {url}")
    if parts.netloc not in ("", "localhost"):
        raise UnsupportedLocatorError(f"Remote file URLs are not supported: {url}")
    lowered = parts.path.lower()
    if "%2f" in lowered or "%5c" in lowered:
        raise UnsupportedLocatorError(f"File URL path must not contain encoded separators: {url}")
    return Path(url2pathname(parts.path))


class FileWriter:
    """Low-level writer; persists contents as-is, no interpretation."""
    name: str = "file writer"

    def write_text_to_file(
        self, url: str, contents: str, options: Optional[Mapping[str, Any]] = None
    ) -> None:
        raise NotImplementedError

    def write_binary_to_file(
        self, url: str, contents: bytes, options: Optional[Mapping[str, Any]] = None
    ) -> None:
        raise NotImplementedError


class DirectoryCreator:
    """
    Creates one directory. Options: recursive, mode, signal.
    With recursive set, an existing directory is not an error.
    """
    name: str = "directory creator"

    def create_directory(self, url: str, options: Optional[Mapping[str, Any]] = None) -> None:
        raise NotImplementedError


class LocalFileWriter(FileWriter):
    name = "pathlib.write"

    def _write(self, url: str, contents: Union[str, bytes], options: Optional[Mapping[str, Any]]) -> None:
        raise_if_cancelled(options)
        path = path_from_locator(url)
        created = not path.exists()

        if isinstance(contents, str):
            path.write_text(contents, encoding="utf-8")
        else:
            path.write_bytes(contents)

        mode = options.get("mode") if options else None
        if created and mode is not None:
            os.chmod(path, mode)

    def write_text_to_file(
        self, url: str, contents: str, options: Optional[Mapping[str, Any]] = None
    ) -> None:
        self._write(url, contents, options)

    def write_binary_to_file(
        self, url: str, contents: bytes, options: Optional[Mapping[str, Any]] = None
    ) -> None:
        self._write(url, bytes(contents), options)


class LocalDirectoryCreator(DirectoryCreator):
    name = "pathlib.mkdir"

    def create_directory(self, url: str, options: Optional[Mapping[str, Any]] = None) -> None:
        raise_if_cancelled(options)
        opts = options or {}
        recursive = bool(opts.get("recursive", False))
        mode = opts.get("mode")

        path = path_from_locator(url)
        path.mkdir(
            mode=mode if mode is not None else 0o777,
            parents=recursive,
            exist_ok=recursive,
        )


def local_file_writer() -> FileWriter:
    return LocalFileWriter()


def local_directory_creator() -> DirectoryCreator:
    return LocalDirectoryCreator()
