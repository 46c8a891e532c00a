"""Integration tests shared by every backend."""

import typing
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from configable import ConfigError
from configable import ConfigFormat
from configable import ConfigParseError
from configable import ConfigPolicy
from configable import ConfigSection
from configable import ErrorPolicy
from configable import IniConfig
from configable import JsonConfig
from configable import PropertiesConfig
from configable import XmlConfig
from configable import YamlConfig
from configable import open_config
from configable.accessors import TypedAccessors

ALL_BACKENDS = [
    (YamlConfig, "config.yml"),
    (JsonConfig, "config.json"),
    (XmlConfig, "config.xml"),
    (IniConfig, "config.ini"),
    (PropertiesConfig, "config.properties"),
]

TREE_BACKENDS = [YamlConfig, JsonConfig, XmlConfig]


@pytest.fixture
def tmpdir_path():
    """Create a temporary directory."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestAllBackends:
    """Behaviour every backend shares."""

    @pytest.fixture(params=ALL_BACKENDS, ids=[cls.__name__ for cls, _ in ALL_BACKENDS])
    def backend_case(self, request, tmpdir_path):
        """Backend class and a not-yet-existing file path for it."""
        cls, filename = request.param
        return cls, tmpdir_path / "nested" / "dir" / filename

    def test_fresh_file_round_trip(self, backend_case):
        """Test load creates the file, and a fresh backend reads saved values."""
        cls, path = backend_case

        config = cls(path)
        config.load()
        assert path.exists()
        assert path.parent.is_dir()

        config.set("server.port", 25565)
        config.save()

        fresh = cls(path)
        fresh.load()
        assert fresh.get_int("server.port") == 25565

    def test_string_round_trip(self, backend_case):
        """Test load_from_string(save_to_string()) keeps every leaf."""
        cls, _ = backend_case
        config = cls()
        config.set("server.host", "localhost")
        config.set("server.motd", "welcome")
        config.set("limits.players", "20")
        before = config.get_values(deep=True)

        config.load_from_string(config.save_to_string())
        assert config.get_values(deep=True) == before

    def test_typed_getters_after_set(self, backend_case):
        """Test set values read back through the matching typed getter."""
        cls, _ = backend_case
        config = cls()
        config.set("a.int", 42)
        config.set("a.long", 2**40)
        config.set("a.double", 2.5)
        config.set("a.bool", True)
        config.set("a.text", "hello")

        assert config.get_int("a.int") == 42
        assert config.get_long("a.long") == 2**40
        assert config.get_double("a.double") == 2.5
        assert config.get_boolean("a.bool") is True
        assert config.get_string("a.text") == "hello"

    def test_typed_getter_mismatch_returns_default(self, backend_case):
        """Test an unparseable value yields the supplied default."""
        cls, _ = backend_case
        config = cls()
        config.set("a.value", "abc")
        assert config.get_int("a.value", 11) == 11
        assert config.get_boolean("a.value", True) is True

    def test_absent_values_yield_zero_values(self, backend_case):
        """Test missing paths never raise."""
        cls, _ = backend_case
        config = cls()
        assert config.get("a.missing") is None
        assert config.get_string("a.missing") is None
        assert config.get_int("a.missing") == 0
        assert config.get_double("a.missing") == 0.0
        assert config.get_boolean("a.missing") is False
        assert config.get_list("a.missing") == []
        assert config.get_integer_list("a.missing") == []
        assert config.get_map_list("a.missing") == []

    def test_add_default_idempotent(self, backend_case):
        """Test add_default only writes absent paths and repeats harmlessly."""
        cls, _ = backend_case
        config = cls()
        config.set("a.present", "kept")

        config.add_default("a.present", "ignored")
        config.add_default("a.absent", "added")
        snapshot = config.get_values(deep=True)
        config.add_default("a.absent", "again")

        assert config.get_string("a.present") == "kept"
        assert config.get_string("a.absent") == "added"
        assert config.get_values(deep=True) == snapshot

    def test_set_defaults(self, backend_case):
        """Test set_defaults fills only the missing entries."""
        cls, _ = backend_case
        config = cls()
        config.set("a.one", "1")
        config.set_defaults({"a.one": "x", "a.two": "2"})
        assert config.get_int("a.one") == 1
        assert config.get_int("a.two") == 2

    def test_remove(self, backend_case):
        """Test remove drops a single value."""
        cls, _ = backend_case
        config = cls()
        config.set("a.b", "1")
        config.set("a.c", "2")
        config.remove("a.b")
        assert not config.contains("a.b")
        assert config.contains("a.c")

    def test_comma_joined_list_value(self, backend_case):
        """Test an explicit list value reads back as typed elements."""
        cls, _ = backend_case
        config = cls()
        config.set("a.ports", [80, 443])
        assert config.get_integer_list("a.ports") == [80, 443]


class TestTreeBackends:
    """Behaviour of backends with nested sections."""

    @pytest.fixture(params=TREE_BACKENDS, ids=[cls.__name__ for cls in TREE_BACKENDS])
    def config(self, request):
        """In-memory tree backend."""
        return request.param()

    def test_section_is_detached(self, config):
        """Test a retrieved section does not write back to the backend."""
        config.set("a.b.c", "x")
        section = config.get_configuration_section("a.b")
        assert section.get_string("c") == "x"

        section.set("c", "y")
        assert section.get_string("c") == "y"
        assert config.get_string("a.b.c") == "x"

    def test_remove_section(self, config):
        """Test removing a section removes its children."""
        config.set("a.b", 1)
        config.remove_section("a")
        assert not config.contains("a.b")
        assert not config.contains("a")

    def test_keys_and_values_asymmetry(self, config):
        """Test deep keys list sections while deep values skip them."""
        config.set("a.b", 1)
        config.set("a.c", 2)

        assert config.get_keys(deep=True) == {"a", "a.b", "a.c"}
        assert config.get_keys() == {"a"}

        values = config.get_values(deep=True)
        assert values == {"a.b": 1, "a.c": 2}
        assert "a" not in values

    def test_shallow_values_are_copies(self, config):
        """Test shallow values contain sections that do not alias the tree."""
        config.set("a.b", 1)
        values = config.get_values()
        values["a"]["b"] = 2
        assert config.get_int("a.b") == 1

    def test_raw_get_returns_copies(self, config):
        """Test sections and lists from get do not alias the tree."""
        config.set("a.b", 1)
        config.set("a.ports", [80, 443])

        config.get("a")["b"] = 2
        config.get("a.ports").append(8080)
        config.require("a")["b"] = 3

        assert config.get_int("a.b") == 1
        assert config.get_integer_list("a.ports") == [80, 443]

    def test_set_none_removes(self, config):
        """Test None removes the leaf on tree backends."""
        config.set("a.b", 1)
        config.set("a.b", None)
        assert not config.contains("a.b")

    def test_create_section(self, config):
        """Test create_section makes an empty, listable section."""
        config.create_section("a.b")
        assert config.contains("a.b")
        assert config.get_keys(deep=True) == {"a", "a.b"}

    def test_empty_segments_are_keys(self, config):
        """Test doubled dots address an empty-named section."""
        config.set("a..b", 1)
        assert config.get_keys(deep=True) == {"a", "a.", "a..b"}
        assert config.get_int("a..b") == 1


class TestErrorPolicies:
    """Legacy error policies per format and overriding them."""

    @pytest.mark.parametrize(
        ("cls", "expected"),
        [
            (YamlConfig, ErrorPolicy.SUPPRESS),
            (JsonConfig, ErrorPolicy.PROPAGATE),
            (XmlConfig, ErrorPolicy.SUPPRESS),
            (IniConfig, ErrorPolicy.SUPPRESS),
            (PropertiesConfig, ErrorPolicy.PROPAGATE),
        ],
    )
    def test_default_policies(self, cls, expected):
        """Test each backend carries its historical error policy."""
        assert cls().policy.errors is expected

    @pytest.mark.parametrize("cls", [YamlConfig, XmlConfig, IniConfig])
    def test_suppressing_backends_can_propagate(self, cls):
        """Test a propagate policy makes suppressing backends raise."""
        config = cls(policy=ConfigPolicy(errors=ErrorPolicy.PROPAGATE))
        with pytest.raises(ConfigError):
            config.load()

    @pytest.mark.parametrize(("cls", "filename"), ALL_BACKENDS)
    def test_undecodable_file_propagates_as_parse_error(self, tmpdir_path, cls, filename):
        """Test a file that is not UTF-8 raises ConfigParseError."""
        path = tmpdir_path / filename
        path.write_bytes(b"\xff\xfe\x00bad")
        config = cls(path, policy=ConfigPolicy(errors=ErrorPolicy.PROPAGATE))

        with pytest.raises(ConfigParseError) as exc_info:
            config.load()
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    @pytest.mark.parametrize(("cls", "filename"), ALL_BACKENDS)
    def test_undecodable_file_suppressed(self, tmpdir_path, cls, filename, caplog):
        """Test a file that is not UTF-8 is logged and the values kept."""
        path = tmpdir_path / filename
        path.write_bytes(b"\xff\xfe\x00bad")
        config = cls(path, policy=ConfigPolicy(errors=ErrorPolicy.SUPPRESS))
        config.set("kept.value", "1")

        config.load()

        assert config.get_int("kept.value") == 1
        assert "Failed to decode configuration" in caplog.text

    @pytest.mark.parametrize("cls", [YamlConfig, XmlConfig, IniConfig])
    def test_load_without_path_logged(self, cls, caplog):
        """Test loading an unbound backend only logs by default."""
        config = cls()
        config.load()
        assert "No configuration file bound" in caplog.text


class TestOpenConfig:
    """Test open_config factory."""

    @pytest.mark.parametrize(
        ("filename", "cls"),
        [
            ("a.yml", YamlConfig),
            ("a.yaml", YamlConfig),
            ("a.json", JsonConfig),
            ("a.xml", XmlConfig),
            ("a.ini", IniConfig),
            ("a.cfg", IniConfig),
            ("a.properties", PropertiesConfig),
            ("A.JSON", JsonConfig),
        ],
    )
    def test_suffix_detection(self, tmpdir_path, filename, cls):
        """Test the backend is chosen from the file suffix."""
        config = open_config(tmpdir_path / filename)
        assert type(config) is cls
        assert config.path == tmpdir_path / filename

    def test_explicit_format(self, tmpdir_path):
        """Test an explicit format overrides the suffix."""
        config = open_config(tmpdir_path / "settings.conf", fmt=ConfigFormat.INI)
        assert isinstance(config, IniConfig)

    def test_unknown_suffix(self, tmpdir_path):
        """Test unknown suffixes are rejected."""
        with pytest.raises(ConfigError):
            open_config(tmpdir_path / "settings.toml")

    def test_policy_passed_through(self, tmpdir_path):
        """Test a custom policy reaches the backend."""
        policy = ConfigPolicy(errors=ErrorPolicy.PROPAGATE, clear_on_delete=True)
        config = open_config(tmpdir_path / "a.yml", policy=policy)
        assert config.policy is policy

    def test_does_not_load(self, tmpdir_path):
        """Test the factory does not touch the file system."""
        path = tmpdir_path / "a.json"
        open_config(path)
        assert not path.exists()


class TestKeyListingAnnotations:
    """Key listings are annotated with the builtin set type."""

    @pytest.mark.parametrize(
        "cls",
        [TypedAccessors, ConfigSection, YamlConfig, JsonConfig, XmlConfig, IniConfig, PropertiesConfig],
    )
    def test_get_keys_return_type(self, cls):
        """Test the return annotation resolves to set[str]."""
        hints = typing.get_type_hints(cls.get_keys)
        assert hints["return"] == set[str]
