"""
Tests for Configuration System.

This test suite covers:
1. Schema validation (type mismatch, unknown fields, defaults)
2. TOML generation from schema (with comments)
3. Settings loading and config file discovery
4. Error cases
"""

import tempfile
from pathlib import Path

import pytest
import tomlkit

import ppm.config
from ppm.config import ConfigError, Settings, load_settings, write_default_config
from ppm.config.schema import ConfigField, SchemaError, SchemaValidationError, validate_config
from ppm.config.toml_handler import TOMLError, generate_toml_from_schema, read_toml


class TestSchemaValidation:
    """Test schema field validation."""

    def test_field_default_type_mismatch(self):
        """ConfigField should reject default value that doesn't match type."""
        with pytest.raises(SchemaError, match="does not match type"):
            ConfigField(int, "not an int", "Bad default")

    def test_field_rejects_bool_for_int(self):
        """bool values are not accepted for non-bool fields."""
        field = ConfigField(int, 1)
        with pytest.raises(SchemaValidationError, match="got bool"):
            field.validate(True)

    def test_validate_fills_defaults(self):
        """Missing fields take their defaults."""
        schema = {
            "a": ConfigField(str, "x"),
            "b": ConfigField(list, []),
        }
        validated = validate_config({"a": "y"}, schema)

        assert validated == {"a": "y", "b": []}
        validated["b"].append(1)
        assert schema["b"].default == []

    def test_validate_unknown_field(self):
        """Unknown fields are rejected."""
        with pytest.raises(SchemaValidationError, match="Unknown configuration field"):
            validate_config({"nope": 1}, {"a": ConfigField(int, 0)})

    def test_validate_wrong_type(self):
        """Values of the wrong type are rejected with the field name."""
        with pytest.raises(SchemaValidationError, match="Field 'a'"):
            validate_config({"a": "1"}, {"a": ConfigField(int, 0)})


class TestTOMLGeneration:
    """Test TOML document generation."""

    def test_generated_document_has_comments(self):
        """Descriptions become comments and scalars precede lists."""
        schema = {
            "items": ConfigField(list, [], "Some items"),
            "flag": ConfigField(bool, True, "A flag"),
        }
        text = tomlkit.dumps(generate_toml_from_schema(schema, {}, header="Header"))

        assert text.startswith("# Header")
        assert "# A flag" in text
        assert "# Some items" in text
        assert text.index("flag = true") < text.index("items = []")

    def test_list_of_tables(self):
        """A list of tables is written as an array of tables."""
        schema = {"plugins": ConfigField(list, [])}
        doc = generate_toml_from_schema(schema, {"plugins": [{"name": "a", "path": "u"}]})

        assert "[[plugins]]" in tomlkit.dumps(doc)

    def test_read_invalid_toml(self):
        """Invalid TOML raises TOMLError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.toml"
            path.write_text("packpath = ")

            with pytest.raises(TOMLError, match="not valid TOML"):
                read_toml(path)

    def test_read_missing_toml(self):
        """A missing settings file raises TOMLError naming the path."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "missing.toml"

            with pytest.raises(TOMLError, match="No settings file at"):
                read_toml(path)


class TestSettings:
    """Test settings loading."""

    def test_missing_file_gives_defaults(self):
        """A missing config file yields default settings."""
        with tempfile.TemporaryDirectory() as tmpdir:
            settings = load_settings(Path(tmpdir) / "missing.toml")

            assert settings == Settings()
            assert settings.plugins == []
            assert settings.packpath == "~/.local/share/nvim/site"

    def test_load_settings(self):
        """A config file is parsed into Settings."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "ppm.toml"
            path.write_text(
                'packpath = "/site,/other"\n'
                "ensure_denops = true\n"
                "\n"
                "[[plugins]]\n"
                'name = "foo"\n'
                'path = "https://example/foo"\n'
                "\n"
                "[[plugins]]\n"
                'name = "ns/bar"\n'
                'path = "/local/bar"\n'
                'type = "local"\n'
                "opt = true\n"
            )

            settings = load_settings(path)

            assert settings.packpath == "/site,/other"
            assert settings.ensure_denops is True
            assert settings.self_manage is False
            assert settings.plugins == [
                {"name": "foo", "path": "https://example/foo"},
                {"name": "ns/bar", "path": "/local/bar", "type": "local", "opt": True},
            ]

    def test_invalid_config(self):
        """Unknown keys and wrong types raise ConfigError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "ppm.toml"

            path.write_text("packpaths = '/x'\n")
            with pytest.raises(ConfigError, match="Unknown configuration field"):
                load_settings(path)

            path.write_text("self_manage = 'yes'\n")
            with pytest.raises(ConfigError, match="Field 'self_manage'"):
                load_settings(path)

            path.write_text("self_manage = \n")
            with pytest.raises(ConfigError, match="not valid TOML"):
                load_settings(path)

    def test_env_var_selects_config(self, monkeypatch):
        """PPM_CONFIG is used when no explicit path is given."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "env.toml"
            path.write_text("self_manage = true\n")
            monkeypatch.setenv(ppm.config.CONFIG_ENV_VAR, str(path))

            assert ppm.config.config_path() == path
            assert load_settings().self_manage is True
            assert ppm.config.config_path(Path(tmpdir) / "other.toml") == Path(tmpdir) / "other.toml"

    def test_write_default_config_round_trip(self):
        """The generated default config loads back as default settings."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "ppm.toml"

            written = write_default_config(path)

            assert written == path
            assert "[[plugins]]" in path.read_text()
            assert load_settings(path) == Settings()

    def test_write_default_config_refuses_overwrite(self):
        """An existing config file is never overwritten."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "ppm.toml"
            path.write_text("self_manage = true\n")

            with pytest.raises(ConfigError, match="already exists"):
                write_default_config(path)
            assert path.read_text() == "self_manage = true\n"
