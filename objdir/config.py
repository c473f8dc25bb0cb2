from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from objdir.engine.options import StoreOptions


load_dotenv()


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class StoreConfig:
    strict: bool = False
    file_mode: Optional[int] = None
    directory_mode: Optional[int] = None
    store_log_path: Optional[Path] = None

    def default_options(self) -> StoreOptions:
        options: StoreOptions = {}
        if self.strict:
            options["strict"] = True
        if self.file_mode is not None:
            options["mode"] = self.file_mode
        if self.directory_mode is not None:
            options["directory_mode"] = self.directory_mode
        return options


def _env_bool(key: str) -> bool:
    raw = os.getenv(key, "").strip().lower()
    if raw in ("", "0", "false", "no", "off"):
        return False
    if raw in ("1", "true", "yes", "on"):
        return True
    raise ConfigError(f"{key} must be a boolean (true/false), got '{raw}'.")


def _env_mode(key: str) -> Optional[int]:
    raw = os.getenv(key, "").strip()
    if not raw:
        return None
    try:
        # Permission bits are written in octal: "644", "0o644" and "0644" all work
        return int(raw.removeprefix("0o"), 8)
    except ValueError:
        raise ConfigError(f"{key} must be octal permission bits (e.g. 644), got '{raw}'.") from None


def get_config() -> StoreConfig:
    log_path = os.getenv("OBJDIR_STORE_LOG")
    return StoreConfig(
        strict=_env_bool("OBJDIR_STRICT"),
        file_mode=_env_mode("OBJDIR_FILE_MODE"),
        directory_mode=_env_mode("OBJDIR_DIRECTORY_MODE"),
        store_log_path=Path(log_path) if log_path else None,
    )
