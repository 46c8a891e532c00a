"""Base for formats whose native shape is a tree of mappings."""

from pathlib import Path
from typing import Any

from .backend import ConfigBackend
from .exceptions import ConfigParseError
from .models import ConfigPolicy
from .section import MemoryTree
from .section import plain_value


class TreeBackend(MemoryTree, ConfigBackend):
    """Backend keeping a nested dict tree (YAML, JSON, XML).

    Path segments map directly to nested mappings; ``set(path, None)``
    removes the leaf.
    """

    def __init__(self, path: Path | str | None = None, policy: ConfigPolicy | None = None):
        ConfigBackend.__init__(self, path, policy)
        MemoryTree.__init__(self)

    def _replace(self, store: dict[str, Any]) -> None:
        self._data = store

    def _clear(self) -> None:
        self._data = {}

    def _as_tree(self, data: Any) -> dict[str, Any]:
        """Validate a parsed document and normalise it into a tree.

        Raises:
            ConfigParseError: If the top level is not a mapping
        """
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigParseError(
                f"{self.format.value.upper()} configuration must be a mapping at the top level, "
                f"got {type(data).__name__}"
            )
        return plain_value(data)
