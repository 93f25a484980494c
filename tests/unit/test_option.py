"""Tests for a single option."""

import json
import logging

import pytest

from core.options import (
    ChoiceValue,
    IntValue,
    Option,
    OptionExample,
    OptionParseError,
    OptionVisibility,
    SizeValue,
    StringListValue,
    option_to_env,
)


class TestOptionValue:
    """Tests for effective values and rendering."""

    def test_unset_default_is_empty_string(self):
        """Should fall back to "" with no default and no value."""
        # Arrange
        opt = Option(name="anything")

        # Act & Assert
        assert opt.get_value().value == ""
        assert str(opt) == ""
        assert opt.default_string() == ""
        assert opt.kind() == "string"

    def test_value_falls_back_to_default(self):
        """Should render the default until a value is set."""
        opt = Option(name="chunk_size", default=1048576)

        assert opt.value_string() == "1048576"
        assert opt.kind() == "int"

    def test_raw_defaults_are_wrapped(self):
        """Should wrap raw Python defaults into option values."""
        opt = Option(name="retries", default=3)

        assert opt.default == IntValue(3)

    def test_value_given_at_declaration_counts_as_set(self):
        """Should treat a declared value as set."""
        opt = Option(name="retries", default=3, value=5)

        assert opt.value_set is True
        assert str(opt) == "5"


class TestOptionSet:
    """Tests for Option.set."""

    def test_set_scalar(self):
        """Should parse into the default's kind."""
        # Arrange
        opt = Option(name="chunk_size", default=SizeValue(1 << 20))

        # Act
        opt.set("4Mi")

        # Assert
        assert opt.value == SizeValue(4 << 20)
        assert str(opt) == "4Mi"
        assert opt.value_set is True

    def test_set_invalid_raises_parse_error(self):
        """Should name the option and leave state untouched."""
        # Arrange
        opt = Option(name="max_objects", default=10)

        # Act
        with pytest.raises(OptionParseError) as exc_info:
            opt.set("lots")

        # Assert
        assert "max_objects" in str(exc_info.value)
        assert exc_info.value.option == "max_objects"
        assert exc_info.value.kind == "int"
        assert opt.value is None
        assert opt.value_set is False

    def test_set_rejects_digit_separators(self):
        """Should refuse "1_000" for an int option."""
        opt = Option(name="max_objects", default=10)

        with pytest.raises(OptionParseError):
            opt.set("1_000")

        assert opt.value_set is False
        assert opt.value_string() == "10"

    def test_parse_error_is_value_error(self):
        """Should be catchable as ValueError."""
        opt = Option(name="flag", default=False)

        with pytest.raises(ValueError):
            opt.set("maybe")

    def test_string_list_accumulates(self):
        """Should render "", then ["x"], then ["x","y"]."""
        # Arrange
        opt = Option(name="tags", default=StringListValue())

        # Act & Assert
        assert opt.value_string() == ""
        opt.set("x")
        assert opt.value_string() == '["x"]'
        opt.set("y")
        assert opt.value_string() == '["x","y"]'

    def test_string_list_replaces_default_on_first_set(self):
        """Should not extend a non-empty default."""
        # Arrange
        opt = Option(name="tags", default=["a", "b"])

        # Act
        opt.set("x")

        # Assert
        assert opt.value_string() == '["x"]'
        assert opt.default_string() == '["a","b"]'

    def test_string_list_kind(self):
        """Should report stringArray."""
        assert Option(name="tags", default=[]).kind() == "stringArray"

    def test_exclusive_rejects_non_examples(self):
        """Should only accept example values."""
        # Arrange
        opt = Option(
            name="mode",
            examples=[OptionExample(value="fast"), OptionExample(value="slow")],
            exclusive=True,
        )

        # Act
        opt.set("fast")

        # Assert
        assert str(opt) == "fast"
        with pytest.raises(OptionParseError):
            opt.set("medium")
        assert str(opt) == "fast"

    def test_exclusive_allows_empty_unless_required(self):
        """Should allow "" for an optional exclusive option."""
        optional = Option(name="mode", examples=[{"value": "fast"}], exclusive=True)
        required = Option(
            name="mode", examples=[{"value": "fast"}], exclusive=True, required=True
        )

        optional.set("")
        with pytest.raises(OptionParseError):
            required.set("")

    def test_choice_default(self):
        """Should canonicalise choice input."""
        opt = Option(name="hash_type", default=ChoiceValue(["md5", "sha1"]))

        opt.set("SHA1")

        assert str(opt) == "sha1"
        assert opt.kind() == "md5|sha1"

    def test_parse_value_does_not_mutate(self):
        """Should return the native value only."""
        opt = Option(name="chunk_size", default=SizeValue(0))

        assert opt.parse_value("1Ki") == 1024
        assert opt.value is None


class TestOptionNaming:
    """Tests for flag and environment variable names."""

    def test_flag_name_with_prefix(self):
        """Should kebab-case and prefix."""
        assert Option(name="chunk_size").flag_name("mem") == "mem-chunk-size"

    def test_flag_name_without_prefix(self):
        """Should skip the prefix when no_prefix is set."""
        opt = Option(name="copy_links", no_prefix=True)

        assert opt.flag_name("local") == "copy-links"

    def test_env_var_name(self):
        """Should upper-case and replace non alphanumerics."""
        assert Option(name="chunk_size").env_var_name("mem") == "MEM_CHUNK_SIZE"
        assert Option(name="a.b").env_var_name("my remote") == "MY_REMOTE_A_B"

    def test_option_to_env(self):
        """Should map every non alphanumeric character to underscore."""
        assert option_to_env("s3-upload_cutoff") == "S3_UPLOAD_CUTOFF"


class TestOptionCopy:
    """Tests for Option.copy."""

    def test_copy_is_independent(self):
        """Should not share examples or values."""
        # Arrange
        original = Option(
            name="mode", default="fast", examples=[OptionExample(value="fast")]
        )

        # Act
        clone = original.copy()
        clone.examples.append(OptionExample(value="slow"))
        clone.examples[0].help = "changed"
        clone.set("slow")
        clone.hide = OptionVisibility.HIDE_BOTH

        # Assert
        assert [e.value for e in original.examples] == ["fast"]
        assert original.examples[0].help == ""
        assert str(original) == "fast"
        assert original.value_set is False
        assert original.hide == OptionVisibility.SHOWN

    def test_examples_sort_by_help(self):
        """Should sort examples by help text."""
        opt = Option(
            name="region",
            examples=[
                OptionExample(value="b", help="Zulu"),
                OptionExample(value="a", help="Alpha"),
            ],
        )

        opt.examples.sort()

        assert [e.value for e in opt.examples] == ["a", "b"]


class TestOptionExport:
    """Tests for the JSON introspection export."""

    def test_derived_fields(self):
        """Should add DefaultStr, ValueStr and Type."""
        # Arrange
        opt = Option(name="chunk_size", help="Chunk size.", default=SizeValue(1 << 20))
        opt.set("2Mi")

        # Act
        data = opt.to_dict()

        # Assert
        assert data["Name"] == "chunk_size"
        assert data["Default"] == 1 << 20
        assert data["Value"] == 2 << 20
        assert data["DefaultStr"] == "1Mi"
        assert data["ValueStr"] == "2Mi"
        assert data["Type"] == "SizeSuffix"

    def test_declared_fields(self):
        """Should export every declared field."""
        opt = Option(
            name="secret",
            groups="Auth",
            short_opt="s",
            is_password=True,
            sensitive=True,
            hide=OptionVisibility.HIDE_COMMAND_LINE,
            examples=[OptionExample(value="x", help="An x")],
        )

        data = opt.to_dict()

        assert data["Groups"] == "Auth"
        assert data["ShortOpt"] == "s"
        assert data["IsPassword"] is True
        assert data["Sensitive"] is True
        assert data["Hide"] == 1
        assert data["Examples"] == [{"Value": "x", "Help": "An x", "Provider": ""}]
        for key in ("FieldName", "Help", "Provider", "Required", "NoPrefix",
                    "Advanced", "Exclusive"):
            assert key in data

    def test_empty_groups_and_examples_omitted(self):
        """Should leave out empty Groups and Examples."""
        data = Option(name="plain").to_dict()

        assert "Groups" not in data
        assert "Examples" not in data
        assert data["Default"] == ""
        assert data["Value"] is None

    def test_to_json(self):
        """Should produce valid JSON."""
        data = json.loads(Option(name="tags", default=["a"]).to_json())

        assert data["DefaultStr"] == '["a"]'
        assert data["Type"] == "stringArray"

    def test_broken_string_list_degrades(self, caplog):
        """Should log and substitute [] instead of failing."""
        # Arrange
        opt = Option(name="tags", default=StringListValue(["ok", object()]))

        # Act
        with caplog.at_level(logging.ERROR, logger="core.options.option"):
            data = opt.to_dict()
            text = opt.to_json()

        # Assert
        assert data["DefaultStr"] == "[]"
        assert data["ValueStr"] == "[]"
        assert json.loads(text)["DefaultStr"] == "[]"
        assert "tags" in caplog.text
