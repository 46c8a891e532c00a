"""JSON configuration backend."""

import json
from typing import Any

from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .models import ConfigFormat
from .models import ConfigPolicy
from .models import ErrorPolicy
from .tree import TreeBackend


class JsonConfig(TreeBackend):
    """Configuration stored as a JSON object, pretty-printed with 2 spaces.

    Unlike the YAML and XML backends, load/save failures raise by default.
    JSON has no comments, so ``options`` headers are not written.
    """

    format = ConfigFormat.JSON
    default_policy = ConfigPolicy(errors=ErrorPolicy.PROPAGATE, clear_on_delete=False)

    def _parse(self, text: str) -> dict[str, Any]:
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"Invalid JSON: {e}") from e
        return self._as_tree(data)

    def _serialize(self) -> str:
        try:
            return json.dumps(self._data, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ConfigFileError(f"Cannot represent configuration as JSON: {e}") from e
