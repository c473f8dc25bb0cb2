from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from objdir.engine.options import StoreOptions


def _parse_mode(value: object) -> Optional[int]:
    # Modes are octal digits whether written as 644, "644" or "0o644"
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"mode must be octal permission bits (e.g. 644), got {value!r}")
    digits = str(value).strip().removeprefix("0o")
    if not digits.isdigit():
        raise ValueError(f"mode must be octal permission bits (e.g. 644), got {value!r}")
    return int(digits, 8)


class HandlerSpec(BaseModel):
    type: Literal["text", "binary", "json", "yaml", "directory", "array_directory"]
    name: Optional[str] = None
    extension: Optional[str] = None
    compact: bool = False

    # directory / array_directory only
    key_property: Optional[str] = None
    handlers: List[HandlerSpec] = []

    when_path_matches: Optional[str] = None
    when_path_matches_every: List[str] = []
    when_path_matches_some: List[str] = []
    when_is_array: bool = False
    when_is_object: bool = False
    when_is_type_of: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class Layout(BaseModel):
    name: str = "layout"
    strict: Optional[bool] = None
    mode: Optional[int] = None
    directory_mode: Optional[int] = None
    handlers: List[HandlerSpec] = []

    model_config = ConfigDict(extra="forbid")

    @field_validator("mode", "directory_mode", mode="before")
    @classmethod
    def parse_octal_mode(cls, value: object) -> Optional[int]:
        return _parse_mode(value)

    def options(self) -> StoreOptions:
        options: StoreOptions = {}
        if self.strict is not None:
            options["strict"] = self.strict
        if self.mode is not None:
            options["mode"] = self.mode
        if self.directory_mode is not None:
            options["directory_mode"] = self.directory_mode
        return options


HandlerSpec.model_rebuild()
