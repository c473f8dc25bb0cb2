from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from objdir.engine.fluent import FluentHandler
from objdir.handlers.builder import HandlerBuilder
from objdir.models import HandlerSpec, Layout


class LayoutError(ValueError):
    pass


def load_layout(layout_path: str | Path) -> Layout:
    path = Path(layout_path)
    raw: Dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return Layout.model_validate(raw)


def build_handler(spec: HandlerSpec, builder: HandlerBuilder) -> FluentHandler:
    if spec.handlers and spec.type not in ("directory", "array_directory"):
        raise LayoutError(f"Handler type '{spec.type}' does not take nested handlers.")
    if spec.key_property and spec.type != "array_directory":
        raise LayoutError(f"key_property only applies to array_directory handlers, not '{spec.type}'.")

    if spec.type == "text":
        handler = builder.text_file(spec.extension, spec.name)
    elif spec.type == "binary":
        handler = builder.binary_file(spec.extension, spec.name)
    elif spec.type == "json":
        handler = builder.json_file(spec.compact, spec.extension, spec.name)
    elif spec.type == "yaml":
        handler = builder.yaml_file(spec.extension, spec.name)
    elif spec.type == "directory":
        handler = builder.object_to_directory(build_handlers(spec.handlers, builder), spec.name)
    else:
        handler = builder.array_to_directory(
            build_handlers(spec.handlers, builder), spec.key_property, spec.name
        )

    # Conditions are ANDed in a fixed order
    if spec.when_path_matches:
        handler = handler.when_path_matches(spec.when_path_matches)
    if spec.when_path_matches_every:
        handler = handler.when_path_matches_every(spec.when_path_matches_every)
    if spec.when_path_matches_some:
        handler = handler.when_path_matches_some(spec.when_path_matches_some)
    if spec.when_is_array:
        handler = handler.when_is_array()
    if spec.when_is_object:
        handler = handler.when_is_object()
    if spec.when_is_type_of:
        handler = handler.when_is_type_of(spec.when_is_type_of)
    return handler


def build_handlers(specs: List[HandlerSpec], builder: HandlerBuilder) -> List[FluentHandler]:
    return [build_handler(s, builder) for s in specs]
