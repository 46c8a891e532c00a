"""In-memory configuration trees and detached sections."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .accessors import TypedAccessors
from .paths import iter_keys
from .paths import iter_leaves
from .paths import resolve


def plain_value(value: Any) -> Any:
    """Normalise a value into plain dict/list/scalar form.

    Mappings become dicts with string keys, tuples and lists become lists.
    The result never shares containers with the input.
    """
    if isinstance(value, Mapping):
        return {str(key): plain_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain_value(item) for item in value]
    return value


class MemoryTree(TypedAccessors):
    """Tree-of-dicts value store addressed by dotted paths.

    Setting a value to None removes the leaf instead of storing a null.
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = plain_value(data) if data is not None else {}

    def get(self, path: str, default: Any = None) -> Any:
        located = resolve(self._data, path)
        if located is None:
            return default
        container, key = located
        if key not in container:
            return default
        value = container[key]
        # sections and lists are handed out as copies
        return copy.deepcopy(value) if isinstance(value, (dict, list)) else value

    def set(self, path: str, value: Any) -> None:
        if value is None:
            self.remove(path)
            return
        container, key = resolve(self._data, path, create=True)
        container[key] = plain_value(value)

    def remove(self, path: str) -> None:
        located = resolve(self._data, path)
        if located is not None:
            container, key = located
            container.pop(key, None)

    def contains(self, path: str) -> bool:
        located = resolve(self._data, path)
        return located is not None and located[1] in located[0]

    def create_section(self, path: str) -> None:
        self.set(path, {})

    def remove_section(self, path: str) -> None:
        self.remove(path)

    def get_keys(self, deep: bool = False) -> set[str]:
        return set(iter_keys(self._data, deep=deep))

    def get_values(self, deep: bool = False) -> dict[str, Any]:
        """Map key paths to values.

        Shallow listings return copies of the immediate children, sections
        included. Deep listings return leaf values only: intermediate
        sections are left out, unlike ``get_keys(deep=True)``.
        """
        if deep:
            return {path: copy.deepcopy(value) for path, value in iter_leaves(self._data)}
        return copy.deepcopy(self._data)

    def get_configuration_section(self, path: str) -> "ConfigSection | None":
        node = self.get(path)
        if not isinstance(node, dict):
            return None
        return ConfigSection(node)


class ConfigSection(MemoryTree):
    """Detached, in-memory copy of a configuration subtree.

    Built from a snapshot of the subtree at retrieval time. It supports the
    full accessor surface but has no load/save and keeps no reference to the
    backend it came from: changes never flow back.

    Example:
        ```python
        config.set("a.b.c", "x")
        section = config.get_configuration_section("a.b")
        section.get_string("c")   # "x"
        section.set("c", "y")     # config.get_string("a.b.c") is still "x"
        ```
    """

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of the section contents."""
        return copy.deepcopy(self._data)

    def __repr__(self) -> str:
        return f"ConfigSection({self._data!r})"
