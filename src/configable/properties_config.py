"""Java-style ``.properties`` configuration backend."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import javaproperties

from .backend import ConfigBackend
from .coercion import parse_inline_map
from .coercion import stringify
from .exceptions import ConfigParseError
from .models import ConfigFormat
from .models import ConfigPolicy
from .models import ErrorPolicy
from .section import ConfigSection


class PropertiesConfig(ConfigBackend):
    """Configuration stored as flat ``key=value`` lines.

    The format has no nesting: a dotted path is the literal key, sections do
    not exist (``create_section`` does nothing, ``remove_section`` removes a
    single key) and ``get_keys``/``get_values`` ignore ``deep``. Every value
    is stored as text, including None which becomes ``"null"``; lists are
    comma-joined.

    This is the only thread-safe backend. Mutations and loads hold an
    internal lock, and reads are served from a cache that is rebuilt after
    every successful load. Failures raise by default.
    """

    format = ConfigFormat.PROPERTIES
    default_policy = ConfigPolicy(errors=ErrorPolicy.PROPAGATE, clear_on_delete=True)

    def __init__(self, path: Path | str | None = None, policy: ConfigPolicy | None = None):
        super().__init__(path, policy)
        self._lock = threading.RLock()
        self._properties: dict[str, str] = {}
        self._cache: dict[str, str] = {}

    # ===== Format hooks =====

    def _parse(self, text: str) -> dict[str, str]:
        try:
            return javaproperties.loads(text)
        except ValueError as e:
            raise ConfigParseError(f"Invalid properties: {e}") from e

    def _serialize(self) -> str:
        with self._lock:
            return javaproperties.dumps(self._properties, comments=self.header, timestamp=False)

    def _replace(self, store: dict[str, str]) -> None:
        with self._lock:
            self._properties = dict(store)
            self._refresh_cache()

    def _clear(self) -> None:
        with self._lock:
            self._properties = {}
            self._cache = {}

    # ===== Medium operations =====

    def load(self) -> None:
        with self._lock:
            super().load()

    def save(self) -> None:
        with self._lock:
            super().save()

    def load_from_string(self, contents: str) -> None:
        with self._lock:
            super().load_from_string(contents)

    # ===== Store operations =====

    def get(self, path: str, default: Any = None) -> Any:
        return self._cache.get(path, default)

    def set(self, path: str, value: Any) -> None:
        text = stringify(value)
        with self._lock:
            self._properties[path] = text
            self._cache[path] = text

    def remove(self, path: str) -> None:
        with self._lock:
            self._properties.pop(path, None)
            self._cache.pop(path, None)

    def contains(self, path: str) -> bool:
        return path in self._cache

    def add_default(self, path: str, value: Any) -> None:
        with self._lock:
            super().add_default(path, value)

    def create_section(self, path: str) -> None:
        pass

    def remove_section(self, path: str) -> None:
        self.remove(path)

    def get_keys(self, deep: bool = False) -> set[str]:
        with self._lock:
            return set(self._cache)

    def get_values(self, deep: bool = False) -> dict[str, Any]:
        with self._lock:
            return dict(self._cache)

    def get_configuration_section(self, path: str) -> ConfigSection | None:
        """Collect every ``path.*`` key into a detached section.

        Returns:
            Section keyed by the remainder of each key, or None if no key
            starts with ``path.``
        """
        prefix = f"{path}."
        with self._lock:
            matches = {key[len(prefix) :]: value for key, value in self._cache.items() if key.startswith(prefix)}
        if not matches:
            return None
        section = ConfigSection()
        for key, value in matches.items():
            section.set(key, value)
        return section

    # ===== Lists =====

    def _list_items(self, path: str) -> list[Any] | None:
        value = self.get(path)
        return value.split(",") if value is not None else None

    def get_map_list(self, path: str) -> list[dict[str, Any]]:
        return [parse_inline_map(item) for item in self._list_items(path) or []]

    # ===== Private Helpers =====

    def _refresh_cache(self) -> None:
        self._cache = dict(self._properties)
