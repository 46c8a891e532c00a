"""YAML configuration backend."""

from typing import Any

import yaml

from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .models import ConfigFormat
from .models import ConfigPolicy
from .models import ErrorPolicy
from .tree import TreeBackend


class YamlConfig(TreeBackend):
    """Configuration stored as a YAML document.

    Load and save failures are logged and swallowed by default. A header set
    through ``options`` is written as ``#`` comment lines above the document.

    Example:
        ```python
        from pathlib import Path
        from configable import YamlConfig

        config = YamlConfig(Path("plugins") / "demo" / "config.yml")
        config.load()
        config.add_default("server.port", 25565)
        config.save()

        port = config.get_int("server.port")
        ```
    """

    format = ConfigFormat.YAML
    default_policy = ConfigPolicy(errors=ErrorPolicy.SUPPRESS, clear_on_delete=False)

    def _parse(self, text: str) -> dict[str, Any]:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML: {e}") from e
        return self._as_tree(data)

    def _serialize(self) -> str:
        try:
            body = yaml.safe_dump(self._data, default_flow_style=False, sort_keys=False, allow_unicode=True)
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Cannot represent configuration as YAML: {e}") from e

        lines = self._header_lines()
        if not lines:
            return body
        return "\n".join(lines) + "\n" + body
