"""Exceptions for configable."""

from .models import ErrorKind


class ConfigError(Exception):
    """Base exception for configuration errors."""

    kind: ErrorKind | None = None


class ConfigFileError(ConfigError):
    """Error reading, writing or deleting a configuration file."""

    kind = ErrorKind.IO_FAILURE


class ConfigParseError(ConfigError):
    """Configuration text could not be parsed."""

    kind = ErrorKind.MALFORMED_INPUT


class ConfigPathError(ConfigError):
    """Path cannot address a value in this format."""

    pass


class MissingConfigValueError(ConfigError):
    """A required configuration value is absent."""

    pass
