"""Pick a backend for a configuration file."""

from pathlib import Path

from .backend import ConfigBackend
from .exceptions import ConfigError
from .ini_config import IniConfig
from .json_config import JsonConfig
from .models import ConfigFormat
from .models import ConfigPolicy
from .properties_config import PropertiesConfig
from .xml_config import XmlConfig
from .yaml_config import YamlConfig

BACKENDS: dict[ConfigFormat, type[ConfigBackend]] = {
    ConfigFormat.YAML: YamlConfig,
    ConfigFormat.JSON: JsonConfig,
    ConfigFormat.INI: IniConfig,
    ConfigFormat.PROPERTIES: PropertiesConfig,
    ConfigFormat.XML: XmlConfig,
}


def open_config(
    path: Path | str,
    fmt: ConfigFormat | None = None,
    policy: ConfigPolicy | None = None,
) -> ConfigBackend:
    """Create the backend matching a configuration file.

    The backend is bound to ``path`` but not loaded; call ``load()``.

    Args:
        path: Configuration file path
        fmt: Explicit format (default: inferred from the file suffix)
        policy: Behaviour switches (default: the backend's own default)

    Returns:
        Unloaded backend for the file

    Raises:
        ConfigError: If the format cannot be inferred from the suffix
    """
    fmt = fmt or ConfigFormat.from_path(path)
    if fmt is None:
        raise ConfigError(f"Unsupported configuration file type: {path}")
    return BACKENDS[fmt](path, policy)
