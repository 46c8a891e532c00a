"""INI configuration backend."""

from __future__ import annotations

import configparser
import io
from pathlib import Path
from typing import Any

from .backend import ConfigBackend
from .coercion import parse_inline_map
from .coercion import stringify
from .exceptions import ConfigParseError
from .exceptions import ConfigPathError
from .models import ConfigFormat
from .models import ConfigPolicy
from .models import ErrorPolicy
from .models import ShortPathPolicy
from .paths import SEPARATOR
from .section import ConfigSection


def new_parser() -> configparser.ConfigParser:
    """Create an empty parser with the options every INI store uses.

    Interpolation is off, valueless keys are allowed and key case is kept.
    """
    parser = configparser.ConfigParser(interpolation=None, allow_no_value=True)
    parser.optionxform = str  # type: ignore[assignment]
    return parser


def _storable_key(key: str) -> bool:
    """Check that a key survives being written as an INI option.

    Delimiters, line breaks, surrounding whitespace and a leading comment
    prefix would change the key on the next read.
    """
    if not key or key != key.strip():
        return False
    if key[0] in "#;[":
        return False
    return not any(char in key for char in "=:\r\n")


class IniConfig(ConfigBackend):
    """Configuration stored as ``[section]`` blocks of ``key=value`` lines.

    Paths address ``section.key``: the first segment names the section and
    the rest is the key. A one-segment path cannot address a value, and
    neither can a key that would read back differently (empty, padded with
    whitespace, starting with a comment prefix, or holding ``=``, ``:`` or
    a line break). With the default ShortPathPolicy.IGNORE reads treat such
    a path as absent and writes do nothing; with ShortPathPolicy.RAISE it
    raises ConfigPathError.

    Values are stored as text. Lists are comma-joined strings, and map lists
    are comma-separated ``key=value;key=value`` entries. ``set(path, None)``
    stores a key without a value. Failures are logged and swallowed by
    default.

    Keys under the parser's ``DEFAULT`` section apply to every section, as
    with any configparser file.
    """

    format = ConfigFormat.INI
    default_policy = ConfigPolicy(errors=ErrorPolicy.SUPPRESS, clear_on_delete=False)

    def __init__(self, path: Path | str | None = None, policy: ConfigPolicy | None = None):
        super().__init__(path, policy)
        self._parser = new_parser()

    # ===== Format hooks =====

    def _parse(self, text: str) -> configparser.ConfigParser:
        parser = new_parser()
        try:
            parser.read_string(text)
        except configparser.Error as e:
            raise ConfigParseError(f"Invalid INI: {e}") from e
        return parser

    def _serialize(self) -> str:
        buffer = io.StringIO()
        for line in self._header_lines():
            buffer.write(f"{line}\n")
        self._parser.write(buffer, space_around_delimiters=False)
        return buffer.getvalue()

    def _replace(self, store: configparser.ConfigParser) -> None:
        self._parser = store

    def _clear(self) -> None:
        self._parser = new_parser()

    # ===== Store operations =====

    def get(self, path: str, default: Any = None) -> Any:
        located = self._split(path)
        if located is None:
            return default
        section, key = located
        value = self._parser.get(section, key, fallback=None)
        return value if value is not None else default

    def set(self, path: str, value: Any) -> None:
        located = self._split(path)
        if located is None:
            return
        section, key = located
        if not self._has_section(section):
            self._parser.add_section(section)
        self._parser.set(section, key, stringify(value) if value is not None else None)

    def remove(self, path: str) -> None:
        located = self._split(path)
        if located is None:
            return
        section, key = located
        if self._parser.has_option(section, key):
            self._parser.remove_option(section, key)

    def contains(self, path: str) -> bool:
        located = self._split(path)
        if located is None:
            return False
        return self._parser.has_option(*located)

    def create_section(self, path: str) -> None:
        if not self._has_section(path):
            self._parser.add_section(path)

    def remove_section(self, path: str) -> None:
        self._parser.remove_section(path)

    def get_keys(self, deep: bool = False) -> set[str]:
        keys = set(self._parser.sections())
        if deep:
            for section in self._parser.sections():
                keys.update(f"{section}{SEPARATOR}{key}" for key in self._parser[section])
        return keys

    def get_values(self, deep: bool = False) -> dict[str, Any]:
        if not deep:
            return {section: dict(self._parser[section]) for section in self._parser.sections()}
        return {
            f"{section}{SEPARATOR}{key}": value
            for section in self._parser.sections()
            for key, value in self._parser[section].items()
        }

    def get_configuration_section(self, path: str) -> ConfigSection | None:
        """Detached copy of the section named ``path``, or None."""
        if not self._parser.has_section(path):
            return None
        section = ConfigSection()
        for key, value in self._parser[path].items():
            section.set(key, value)
        return section

    # ===== Lists =====

    def _list_items(self, path: str) -> list[Any] | None:
        value = self.get(path)
        return value.split(",") if value is not None else None

    def get_map_list(self, path: str) -> list[dict[str, Any]]:
        return [parse_inline_map(item) for item in self._list_items(path) or []]

    # ===== Private Helpers =====

    def _has_section(self, section: str) -> bool:
        return section == self._parser.default_section or self._parser.has_section(section)

    def _split(self, path: str) -> tuple[str, str] | None:
        """Split a path into ``(section, key)``.

        Returns:
            The section and key, or None when the path cannot address an
            INI option

        Raises:
            ConfigPathError: For an unaddressable path under ShortPathPolicy.RAISE
        """
        if SEPARATOR not in path:
            return self._unaddressable(f"INI paths need a section and a key, got '{path}'")
        section, key = path.split(SEPARATOR, 1)
        if not _storable_key(key):
            return self._unaddressable(f"INI cannot store the key '{key}' of path '{path}'")
        return section, key

    def _unaddressable(self, message: str) -> None:
        if self.policy.short_paths is ShortPathPolicy.RAISE:
            raise ConfigPathError(message)
        return None
