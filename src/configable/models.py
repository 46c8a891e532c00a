"""Data models for configable."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ConfigFormat(Enum):
    """Supported configuration file formats.

    Values are the canonical file suffixes (without the dot).
    """

    YAML = "yaml"
    JSON = "json"
    INI = "ini"
    PROPERTIES = "properties"
    XML = "xml"

    @classmethod
    def from_path(cls, path: Path | str) -> "ConfigFormat | None":
        """Infer the format from a file suffix.

        Args:
            path: Configuration file path

        Returns:
            Matching format, or None for an unknown suffix
        """
        suffix = Path(path).suffix.lower().lstrip(".")
        return _SUFFIXES.get(suffix)


_SUFFIXES = {
    "yaml": ConfigFormat.YAML,
    "yml": ConfigFormat.YAML,
    "json": ConfigFormat.JSON,
    "ini": ConfigFormat.INI,
    "cfg": ConfigFormat.INI,
    "properties": ConfigFormat.PROPERTIES,
    "xml": ConfigFormat.XML,
}


class ErrorKind(Enum):
    """Kinds of failure a backend can run into while touching its medium."""

    MALFORMED_INPUT = "malformed_input"
    IO_FAILURE = "io_failure"


class ErrorPolicy(Enum):
    """What a backend does with load/save failures.

    PROPAGATE raises the typed ConfigError, SUPPRESS logs a warning and
    leaves the in-memory tree untouched.
    """

    PROPAGATE = "propagate"
    SUPPRESS = "suppress"


class ShortPathPolicy(Enum):
    """Handling of paths a section-oriented format cannot address.

    INI needs at least ``section.key``, with a key it can write and read
    back unchanged. IGNORE treats such a path as absent (reads) or a no-op
    (writes); RAISE raises ConfigPathError.
    """

    IGNORE = "ignore"
    RAISE = "raise"


@dataclass(frozen=True)
class ConfigPolicy:
    """Per-backend behaviour switches.

    Every backend class ships a ``default_policy`` matching its historical
    behaviour. Pass a different instance (or ``dataclasses.replace`` the
    default) to opt into stricter or looser handling.

    Attributes:
        errors: Failure handling for load/save/delete/string transport
        clear_on_delete: Whether delete() also empties the in-memory tree
        short_paths: Unaddressable path handling for section-oriented formats
    """

    errors: ErrorPolicy = ErrorPolicy.SUPPRESS
    clear_on_delete: bool = False
    short_paths: ShortPathPolicy = ShortPathPolicy.IGNORE
