"""Tests for building backend instances."""

import pytest

from core.backends import (
    BackendConstructionError,
    BackendInfo,
    BackendNotFoundError,
    Registry,
    config_map_for,
    new_backend,
)
from core.config.configmap import Priority
from core.options import (
    ChoiceValue,
    DurationValue,
    FloatValue,
    Option,
    SizeValue,
    StringListValue,
)
from core.options.values import MILLISECOND, SECOND


class Backend:
    def __init__(self, name, root, opt):
        self.name = name
        self.root = root
        self.opt = opt


@pytest.fixture
def registry():
    registry = Registry()
    info = BackendInfo(
        name="scratch",
        aliases=["tmp"],
        options=[
            Option(name="chunk_size", default=SizeValue(1 << 20)),
            Option(name="max_objects", default=0),
            Option(name="tags", default=StringListValue()),
        ],
    )
    info.new_fs = lambda name, root, config_map: Backend(
        name, root, info.options.resolve(config_map)
    )
    registry.register(info)
    return registry


class TestConfigMapFor:
    """Tests for config_map_for."""

    def test_priority_order(self, registry, monkeypatch):
        """Flags, params and env beat the config file, which beats defaults."""
        # Arrange
        info = registry.find("scratch")
        monkeypatch.setenv("SCRATCH_MAX_OBJECTS", "7")
        section = {"type": "scratch", "chunk_size": "2Mi", "max_objects": 1}

        # Act
        config_map = config_map_for(info, section=section, params={"tags": "a,b"})

        # Assert
        assert config_map.get("chunk_size") == "2Mi"
        assert config_map.get("max_objects") == "7"
        assert config_map.get("tags") == "a,b"
        assert config_map.get("description") == ""
        overridden = info.options.overridden(config_map)
        assert overridden == {"max_objects": "7", "tags": "a,b"}

    def test_set_option_wins(self, registry, monkeypatch):
        """A value set on the option itself should win over everything."""
        info = registry.find("tmp")
        monkeypatch.setenv("TMP_CHUNK_SIZE", "8Mi")
        info.options.get("chunk_size").set("16Mi")

        config_map = config_map_for(info, params={"chunk_size": "4Mi"})

        assert config_map.get("chunk_size") == "16Mi"

    def test_writes_go_to_section_copy(self, registry):
        """Should store writes without touching the given section."""
        info = registry.find("scratch")
        section = {"type": "scratch"}
        config_map = config_map_for(info, section=section)

        config_map.set("token", "abc")

        assert config_map.get_priority("token", Priority.CONFIG) == "abc"
        assert section == {"type": "scratch"}


class TestNewBackend:
    """Tests for new_backend."""

    def test_builds_and_records_instance(self, registry):
        """Should resolve options and record the reverse mapping."""
        # Act
        instance = new_backend(
            "scratch",
            root="bucket",
            name="work",
            section={"type": "scratch", "chunk_size": "4Mi"},
            registry=registry,
        )

        # Assert
        assert instance.name == "work"
        assert instance.root == "bucket"
        assert instance.opt["chunk_size"] == 4 << 20
        assert instance.opt["max_objects"] == 0
        assert instance.opt["tags"] == ()
        assert registry.find_from_instance(instance) is registry.find("scratch")

    def test_name_defaults_to_backend(self, registry):
        """Should use the backend name as remote name."""
        instance = new_backend("scratch", registry=registry)

        assert instance.name == "scratch"

    def test_unknown_backend(self, registry):
        """Should raise BackendNotFoundError."""
        with pytest.raises(BackendNotFoundError):
            new_backend("nope", registry=registry)

    def test_missing_factory(self):
        """Should refuse a backend without a factory."""
        registry = Registry()
        registry.register(BackendInfo(name="bare"))

        with pytest.raises(BackendConstructionError):
            new_backend("bare", registry=registry)

    def test_factory_failure_wrapped(self, registry):
        """Should wrap factory errors, bad option values included."""
        with pytest.raises(BackendConstructionError) as exc_info:
            new_backend(
                "scratch",
                section={"type": "scratch", "max_objects": "lots"},
                registry=registry,
            )

        assert "max_objects" in str(exc_info.value)
        assert registry.find_from_instance(Backend("x", "", {})) is None


class TestSetValuesReachFactory:
    """Tests that values set on options arrive unchanged at the factory."""

    @pytest.fixture
    def kinds_registry(self):
        registry = Registry()
        info = BackendInfo(
            name="kinds",
            options=[
                Option(name="label", default="plain"),
                Option(name="enabled", default=False),
                Option(name="retries", default=3),
                Option(name="ratio", default=FloatValue(0.5)),
                Option(name="timeout", default=DurationValue(SECOND)),
                Option(name="chunk_size", default=SizeValue(1 << 20)),
                Option(name="tags", default=StringListValue(["x"])),
                Option(name="hash_type", default=ChoiceValue(["md5", "sha1"])),
            ],
        )
        info.new_fs = lambda name, root, config_map: Backend(
            name, root, info.options.resolve(config_map)
        )
        registry.register(info)
        return registry

    @pytest.mark.parametrize(
        "name,text,expected",
        [
            ("label", "fancy", "fancy"),
            ("enabled", "true", True),
            ("retries", "-12", -12),
            ("ratio", "0.1", 0.1),
            ("timeout", "1m30.25s", 90 * SECOND + 250 * MILLISECOND),
            ("chunk_size", "1048577", 1048577),
            ("chunk_size", "1537", 1537),
            ("chunk_size", "1.5Mi", 1536 * 1024),
            ("tags", "a,b", ("a,b",)),
            ("hash_type", "SHA1", "sha1"),
        ],
    )
    def test_set_value_is_exact(
        self, kinds_registry, monkeypatch, name, text, expected
    ):
        """Should hand the factory exactly the value that was set."""
        # Arrange
        monkeypatch.delenv(f"KINDS_{name.upper()}", raising=False)
        kinds_registry.find("kinds").options.get(name).set(text)

        # Act
        instance = new_backend("kinds", registry=kinds_registry)

        # Assert
        assert instance.opt[name] == expected
