from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from objdir.config import StoreConfig, get_config
from objdir.engine.directory_storer import DirectoryValueStorageHandler
from objdir.engine.options import StoreOptions, merge_options
from objdir.handlers.builder import HandlerBuilder
from objdir.layout_loader import build_handlers, load_layout
from objdir.runtime.platform import DirectoryCreator, FileWriter
from objdir.runtime.store_log import StoreLogger


def store_with_layout(
    *,
    layout_path: Path,
    destination_url: str,
    value: Mapping[str, Any],
    options: Optional[StoreOptions] = None,
    config: Optional[StoreConfig] = None,
    file_writer: Optional[FileWriter] = None,
    directory_creator: Optional[DirectoryCreator] = None,
) -> Optional[Path]:
    """
    Store an object using the handlers declared in a YAML layout file.

    Options are layered: environment config < layout file < options argument.
    Returns the store log path when one was configured.
    """
    config = config or get_config()
    layout = load_layout(layout_path)

    store_log = StoreLogger(config.store_log_path) if config.store_log_path else None
    builder = HandlerBuilder(file_writer, directory_creator, store_log)

    defaults = merge_options(config.default_options(), layout.options())
    root = DirectoryValueStorageHandler(
        layout.name,
        build_handlers(layout.handlers, builder),
        builder.directory_creator,
        defaults,
        store_log,
    )
    root.store_value("", destination_url, value, options)

    return store_log.path if store_log else None
