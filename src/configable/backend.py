"""Storage lifecycle shared by every format backend."""

import logging
from abc import abstractmethod
from pathlib import Path
from typing import Any
from typing import ClassVar

from .accessors import TypedAccessors
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .models import ConfigFormat
from .models import ConfigPolicy
from .models import ErrorPolicy

logger = logging.getLogger(__name__)


class ConfigBackend(TypedAccessors):
    """A configuration file of one format behind the path-addressed API.

    The backend owns its in-memory store exclusively. ``load`` replaces the
    store from the bound file (creating the file with an empty tree if it is
    missing), ``save`` writes the whole store back. ``save_to_string`` and
    ``load_from_string`` do the same against text without touching the file.

    Failures while touching the medium are handled according to
    ``policy.errors``: PROPAGATE raises ConfigFileError / ConfigParseError,
    SUPPRESS logs a warning and keeps the current in-memory state.

    Subclasses implement the store operations plus ``_parse``,
    ``_serialize``, ``_replace`` and ``_clear``.

    Args:
        path: File backing this configuration, or None for in-memory use
        policy: Behaviour switches (default: the format's ``default_policy``)
    """

    format: ClassVar[ConfigFormat]
    default_policy: ClassVar[ConfigPolicy] = ConfigPolicy()

    def __init__(self, path: Path | str | None = None, policy: ConfigPolicy | None = None):
        self.path = Path(path) if path is not None else None
        self.policy = policy or self.default_policy
        self.header: str | None = None

    # ===== Format hooks =====

    @abstractmethod
    def _parse(self, text: str) -> Any:
        """Parse text into a fresh store.

        Raises:
            ConfigParseError: If the text is malformed
        """

    @abstractmethod
    def _serialize(self) -> str:
        """Render the current store as text.

        Raises:
            ConfigFileError: If the store cannot be represented
        """

    @abstractmethod
    def _replace(self, store: Any) -> None:
        """Swap in a store produced by ``_parse``."""

    @abstractmethod
    def _clear(self) -> None:
        """Reset the store to an empty tree."""

    # ===== Medium operations =====

    def load(self) -> None:
        """Load configuration from the bound file.

        Creates the file (and parent directories) holding the serialized
        empty tree when it does not exist yet.
        """
        if self.path is None:
            self._handle(ConfigFileError("No configuration file bound to this backend"))
            return

        if not self.path.exists():
            self._create()
            return

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            self._handle(ConfigParseError(f"Failed to decode configuration from {self.path}: {e}"), e)
            return
        except OSError as e:
            self._handle(ConfigFileError(f"Failed to read configuration from {self.path}: {e}"), e)
            return

        try:
            store = self._parse(text)
        except ConfigParseError as e:
            self._handle(ConfigParseError(f"Failed to parse configuration from {self.path}: {e}"), e)
            return

        self._replace(store)
        logger.debug(f"Loaded {self.format.value} configuration from {self.path}")

    def save(self) -> None:
        """Write the whole configuration to the bound file."""
        if self.path is None:
            self._handle(ConfigFileError("No configuration file bound to this backend"))
            return

        try:
            text = self._serialize()
        except ConfigFileError as e:
            self._handle(e, e.__cause__)
            return

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            self._handle(ConfigFileError(f"Failed to write configuration to {self.path}: {e}"), e)
            return

        logger.debug(f"Saved {self.format.value} configuration to {self.path}")

    def reload(self) -> None:
        """Re-read the bound file."""
        self.load()

    def delete(self) -> None:
        """Delete the bound file.

        The in-memory tree is only emptied when ``policy.clear_on_delete``
        is set; otherwise a later ``save`` writes it back.
        """
        if self.path is not None and self.path.exists():
            try:
                self.path.unlink()
            except OSError as e:
                self._handle(ConfigFileError(f"Failed to delete configuration file {self.path}: {e}"), e)
                return
            logger.info(f"Deleted configuration file {self.path}")

        if self.policy.clear_on_delete:
            self._clear()

    def save_to_string(self) -> str:
        """Serialize the configuration without touching the file.

        Returns:
            Serialized text, or an empty string if serialization failed and
            failures are suppressed
        """
        try:
            return self._serialize()
        except ConfigFileError as e:
            self._handle(e, e.__cause__)
            return ""

    def load_from_string(self, contents: str) -> None:
        """Replace the configuration with the parsed ``contents``."""
        try:
            store = self._parse(contents)
        except ConfigParseError as e:
            self._handle(e, e.__cause__)
            return
        self._replace(store)

    def options(self, header: str | None = None) -> None:
        """Set the header comment written on save.

        Formats without comments (JSON, XML) ignore the header.
        """
        self.header = header

    # ===== Private Helpers =====

    def _header_lines(self, marker: str = "#") -> list[str]:
        if not self.header:
            return []
        return [f"{marker} {line}".rstrip() for line in self.header.splitlines()]

    def _create(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch()
        except OSError as e:
            self._handle(ConfigFileError(f"Failed to create configuration file {self.path}: {e}"), e)
            return

        logger.info(f"Created configuration file {self.path}")
        self.save()

    def _handle(self, error: ConfigError, cause: BaseException | None = None) -> None:
        """Raise or log a failure according to the error policy."""
        if self.policy.errors is ErrorPolicy.PROPAGATE:
            raise error from cause
        logger.warning(str(error))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!s})"
