from __future__ import annotations

from typing import Any, Callable, Optional

from objdir.engine.options import is_object

KeyExtractor = Callable[[Any, int], Optional[str]]


def index_key_extractor(_value: Any, index: int) -> str:
    return str(index)


def property_key_extractor(key_property: str) -> KeyExtractor:
    """
    Name array items after one of their own properties.
    Items that are not objects, or lack the property, get no key (None).
    """

    def extract(value: Any, _index: int) -> Optional[str]:
        if not is_object(value):
            return None
        key = value.get(key_property)
        return str(key) if key is not None else None

    return extract
