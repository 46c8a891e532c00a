"""Typed accessor contract shared by every backend and detached section."""

from __future__ import annotations

import copy
from abc import ABC
from abc import abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING
from typing import Any

from . import coercion
from .exceptions import MissingConfigValueError

if TYPE_CHECKING:
    from .section import ConfigSection


class TypedAccessors(ABC):
    """Path-addressed key/value accessors.

    Subclasses supply the raw store operations (``get``, ``set``,
    ``contains`` ...). The typed getters here layer coercion on top: they
    never raise, and return the supplied default (or the type's zero value)
    when a path is absent or its value cannot be converted. Call
    ``contains`` or ``require`` to tell "absent" apart from "zero".
    """

    # ===== Raw store operations =====

    @abstractmethod
    def get(self, path: str, default: Any = None) -> Any:
        """Get the raw value at ``path``, or ``default`` if absent."""

    @abstractmethod
    def set(self, path: str, value: Any) -> None:
        """Store ``value`` at ``path``, creating intermediate sections."""

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove the value at ``path`` if present."""

    @abstractmethod
    def contains(self, path: str) -> bool:
        """Check whether ``path`` holds a value (including a section)."""

    @abstractmethod
    def create_section(self, path: str) -> None:
        """Create an empty section at ``path``."""

    @abstractmethod
    def remove_section(self, path: str) -> None:
        """Remove the section at ``path``."""

    @abstractmethod
    def get_keys(self, deep: bool = False) -> set[str]:
        """List key paths; ``deep`` includes nested sections and leaves."""

    @abstractmethod
    def get_values(self, deep: bool = False) -> dict[str, Any]:
        """Map key paths to values; ``deep`` lists leaf values only."""

    @abstractmethod
    def get_configuration_section(self, path: str) -> "ConfigSection | None":
        """Detached copy of the section at ``path``, or None."""

    def _list_items(self, path: str) -> list[Any] | None:
        """Raw elements of the list at ``path``, or None when there is none."""
        value = self.get(path)
        return copy.deepcopy(value) if isinstance(value, list) else None

    # ===== Scalar getters =====

    def get_string(self, path: str, default: str | None = None) -> str | None:
        return coercion.coerce(self.get(path), coercion.as_string, default)

    def get_int(self, path: str, default: int = 0) -> int:
        return coercion.coerce(self.get(path), coercion.as_int, default)

    def get_long(self, path: str, default: int = 0) -> int:
        return coercion.coerce(self.get(path), coercion.as_long, default)

    def get_double(self, path: str, default: float = 0.0) -> float:
        return coercion.coerce(self.get(path), coercion.as_double, default)

    def get_boolean(self, path: str, default: bool = False) -> bool:
        return coercion.coerce(self.get(path), coercion.as_bool, default)

    def require(self, path: str) -> Any:
        """Get the raw value at ``path``, raising if it is absent.

        Args:
            path: Dotted path

        Returns:
            Stored value

        Raises:
            MissingConfigValueError: If nothing is stored at ``path``
        """
        if not self.contains(path):
            raise MissingConfigValueError(f"Missing required configuration value: '{path}'")
        return self.get(path)

    # ===== List getters =====

    def get_list(self, path: str, default: list[Any] | None = None) -> list[Any]:
        """Get the raw list at ``path``.

        Returns:
            The list elements, ``default`` when absent, or an empty list
            when absent and no default was given
        """
        items = self._list_items(path)
        if items is None:
            return default if default is not None else []
        return items

    def get_string_list(self, path: str) -> list[str]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_string)

    def get_integer_list(self, path: str) -> list[int]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_int)

    def get_boolean_list(self, path: str) -> list[bool]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_bool)

    def get_double_list(self, path: str) -> list[float]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_double)

    def get_float_list(self, path: str) -> list[float]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_float)

    def get_long_list(self, path: str) -> list[int]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_long)

    def get_byte_list(self, path: str) -> list[int]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_byte)

    def get_short_list(self, path: str) -> list[int]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_short)

    def get_character_list(self, path: str) -> list[str]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_char)

    def get_map_list(self, path: str) -> list[dict[str, Any]]:
        return coercion.coerce_list(self._list_items(path) or [], coercion.as_map)

    # ===== Defaults =====

    def add_default(self, path: str, value: Any) -> None:
        """Store ``value`` at ``path`` only if nothing is there yet."""
        if not self.contains(path):
            self.set(path, value)

    def set_defaults(self, defaults: Mapping[str, Any]) -> None:
        """Apply ``add_default`` for every entry, in mapping order."""
        for path, value in defaults.items():
            self.add_default(path, value)
