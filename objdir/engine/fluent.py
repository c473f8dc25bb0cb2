from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Optional

from objdir.engine.options import StoreOptions, is_array, is_object, value_type_tag
from objdir.handlers.base import ValueStorageHandler

Condition = Callable[[str, str, Any], bool]


def compile_path_pattern(pattern: str) -> re.Pattern[str]:
    """
    Translate a glob pattern over slash-separated paths into an anchored regex.
    "*" and "?" stay within one path segment, "**" spans segments.
    """
    out: list[str] = []
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                out.append(".*")
                i += 2
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = pattern[i + 1:end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append("[" + body.replace("\\", "\\\\") + "]")
                i = end + 1
                continue
        else:
            out.append(re.escape(c))
        i += 1
    return re.compile("".join(out), re.DOTALL)


class FluentHandler(ValueStorageHandler):
    """
    Wraps a handler and derives new handlers with extra applicability conditions.
    Derived handlers never mutate the one they were built from. Storage is always
    delegated to the inner handler, which is not asked again whether it applies.
    """

    def __init__(
        self,
        handler: ValueStorageHandler,
        name: Optional[str] = None,
        condition: Optional[Condition] = None,
    ):
        self._inner = handler
        self._name = name if name is not None else handler.name
        self._condition: Condition = condition or handler.can_store_value

    @property
    def name(self) -> str:
        return self._name

    def can_store_value(self, path_in_source: str, destination_url: str, value: Any) -> bool:
        return self._condition(path_in_source, destination_url, value)

    def store_value(
        self,
        path_in_source: str,
        destination_url: str,
        value: Any,
        options: Optional[StoreOptions] = None,
    ) -> None:
        self._inner.store_value(path_in_source, destination_url, value, options)

    def _derive(self, check: Condition) -> "FluentHandler":
        def condition(path_in_source: str, destination_url: str, value: Any) -> bool:
            return check(path_in_source, destination_url, value) and self.can_store_value(
                path_in_source, destination_url, value
            )

        return FluentHandler(self, condition=condition)

    def with_name(self, name: str) -> "FluentHandler":
        return FluentHandler(self, name=name)

    def when_path_matches(self, pattern: str) -> "FluentHandler":
        matcher = compile_path_pattern(pattern)
        return self._derive(lambda path, _url, _value: matcher.fullmatch(path) is not None)

    def when_path_matches_every(self, patterns: Iterable[str]) -> "FluentHandler":
        matchers = [compile_path_pattern(p) for p in patterns]
        return self._derive(
            lambda path, _url, _value: all(m.fullmatch(path) is not None for m in matchers)
        )

    def when_path_matches_some(self, patterns: Iterable[str]) -> "FluentHandler":
        matchers = [compile_path_pattern(p) for p in patterns]
        return self._derive(
            lambda path, _url, _value: any(m.fullmatch(path) is not None for m in matchers)
        )

    def when_is_array(self) -> "FluentHandler":
        return self._derive(lambda _path, _url, value: is_array(value))

    def when_is_object(self) -> "FluentHandler":
        return self._derive(lambda _path, _url, value: is_object(value))

    def when_is_type_of(self, type_name: str) -> "FluentHandler":
        return self._derive(lambda _path, _url, value: value_type_tag(value) == type_name)

    def when_is_instance_of(self, cls: type) -> "FluentHandler":
        return self._derive(lambda _path, _url, value: isinstance(value, cls))


def make_fluent(handler: ValueStorageHandler) -> FluentHandler:
    if isinstance(handler, FluentHandler):
        return handler
    return FluentHandler(handler)
