"""configable: one path-addressed API over YAML, JSON, INI, Properties and XML.

Every backend exposes the same accessor contract: values are addressed by
dotted paths (``server.port``), typed getters coerce stored values and fall
back to defaults instead of raising, and ``save``/``load`` move the whole
tree to and from a file.

Public API:
    YamlConfig, JsonConfig, XmlConfig, IniConfig, PropertiesConfig: Format backends
    ConfigBackend: Common base class of the backends
    ConfigSection: Detached in-memory copy of a subtree
    open_config: Create the backend matching a file suffix
    ConfigFormat, ConfigPolicy, ErrorPolicy, ErrorKind, ShortPathPolicy: Configuration models
    ConfigError, ConfigFileError, ConfigParseError, ConfigPathError,
    MissingConfigValueError: Exception types

Example:
    ```python
    from pathlib import Path
    from configable import open_config

    config = open_config(Path("plugins") / "demo" / "config.json")
    config.load()  # creates the file if missing

    config.set_defaults({"server.port": 25565, "server.motd": "hello"})
    config.save()

    port = config.get_int("server.port")
    server = config.get_configuration_section("server")
    ```
"""

from .backend import ConfigBackend
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .exceptions import ConfigPathError
from .exceptions import MissingConfigValueError
from .factory import open_config
from .ini_config import IniConfig
from .json_config import JsonConfig
from .models import ConfigFormat
from .models import ConfigPolicy
from .models import ErrorKind
from .models import ErrorPolicy
from .models import ShortPathPolicy
from .properties_config import PropertiesConfig
from .section import ConfigSection
from .xml_config import XmlConfig
from .yaml_config import YamlConfig

__version__ = "0.1.0"

__all__ = [
    "ConfigBackend",
    "ConfigSection",
    "YamlConfig",
    "JsonConfig",
    "XmlConfig",
    "IniConfig",
    "PropertiesConfig",
    "open_config",
    "ConfigFormat",
    "ConfigPolicy",
    "ErrorKind",
    "ErrorPolicy",
    "ShortPathPolicy",
    "ConfigError",
    "ConfigFileError",
    "ConfigParseError",
    "ConfigPathError",
    "MissingConfigValueError",
]
