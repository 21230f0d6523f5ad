"""
Tests for Configuration System.

This test suite covers:
1. Schema validation (type mismatch, unknown fields)
2. Settings precedence (defaults, pyproject.toml, microgravity.toml, env)
3. Default settings file generation
"""

import tomllib

import pytest

from microgravity.config import (
    ConfigError,
    env_verbose,
    load_settings,
    write_default_settings,
)
from microgravity.config.schema import (
    SETTINGS_SCHEMA,
    ConfigField,
    SchemaError,
    ValidationError,
    validate_config,
)
from microgravity.config.toml_handler import render_settings_file


class TestSchemaValidation:
    """Test schema field validation."""

    def test_field_default_type_mismatch(self):
        """ConfigField should reject default value that doesn't match type."""
        with pytest.raises(SchemaError, match="does not match type"):
            ConfigField(bool, "yes", "Bad default")

    def test_bool_is_not_an_int(self):
        """ConfigField should keep bool and int apart."""
        with pytest.raises(ValidationError):
            ConfigField(int, 1).validate(True)

    def test_partial_config_gets_defaults(self):
        """validate_config should fill missing fields with defaults."""
        assert validate_config({"verbose": True}, SETTINGS_SCHEMA) == {
            "root_dir": ".",
            "verbose": True,
        }

    def test_unknown_field(self):
        """validate_config should reject unknown fields."""
        with pytest.raises(ValidationError, match="Unknown configuration field"):
            validate_config({"colour": "blue"}, SETTINGS_SCHEMA)


class TestLoadSettings:
    """Test load_settings() precedence."""

    def test_defaults(self, tmp_path):
        """Should use the working directory and quiet mode by default."""
        settings = load_settings(tmp_path, environ={})

        assert settings.root_dir == tmp_path.resolve()
        assert settings.verbose is False

    def test_pyproject_table(self, tmp_path):
        """Should read [tool.microgravity] from pyproject.toml."""
        (tmp_path / "project").mkdir()
        (tmp_path / "pyproject.toml").write_text(
            '[tool.microgravity]\nroot_dir = "project"\nverbose = true\n'
        )

        settings = load_settings(tmp_path, environ={})

        assert settings.root_dir == (tmp_path / "project").resolve()
        assert settings.verbose is True

    def test_settings_file_overrides_pyproject(self, tmp_path):
        """Should let microgravity.toml override pyproject.toml per key."""
        (tmp_path / "pyproject.toml").write_text(
            '[tool.microgravity]\nroot_dir = "a"\nverbose = true\n'
        )
        (tmp_path / "microgravity.toml").write_text('[microgravity]\nroot_dir = "b"\n')

        settings = load_settings(tmp_path, environ={})

        assert settings.root_dir == (tmp_path / "b").resolve()
        assert settings.verbose is True

    def test_pyproject_without_table(self, tmp_path):
        """Should ignore a pyproject.toml without the table."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')

        assert load_settings(tmp_path, environ={}).verbose is False

    @pytest.mark.parametrize("name", ["DEBUG", "TITAN_DEBUG"])
    @pytest.mark.parametrize("value", ["true", "1", "YES", "on"])
    def test_env_flags(self, tmp_path, name, value):
        """Should turn verbose on for either environment flag."""
        assert load_settings(tmp_path, environ={name: value}).verbose is True

    def test_env_flag_negative(self):
        """Should ignore non-affirmative values."""
        assert env_verbose({"DEBUG": "false", "TITAN_DEBUG": "0"}) is False
        assert env_verbose({}) is False

    def test_invalid_type(self, tmp_path):
        """Should raise ConfigError for wrongly typed values."""
        (tmp_path / "microgravity.toml").write_text('[microgravity]\nverbose = "yes"\n')

        with pytest.raises(ConfigError, match="verbose"):
            load_settings(tmp_path, environ={})

    def test_invalid_toml(self, tmp_path):
        """Should raise ConfigError for unparseable files."""
        (tmp_path / "microgravity.toml").write_text("[microgravity\n")

        with pytest.raises(ConfigError, match="Failed to parse TOML"):
            load_settings(tmp_path, environ={})


class TestDefaultSettingsFile:
    """Test settings file generation."""

    def test_render_has_comments(self):
        """Should describe each field in a comment."""
        content = render_settings_file("microgravity", SETTINGS_SCHEMA, {"verbose": True})

        assert "# Print discovery and activation messages" in content
        data = tomllib.loads(content)
        assert data == {"microgravity": {"root_dir": ".", "verbose": True}}

    def test_write_and_reload(self, tmp_path):
        """Should write a file that load_settings accepts."""
        path = write_default_settings(tmp_path)

        assert path == tmp_path / "microgravity.toml"
        assert load_settings(tmp_path, environ={}).verbose is False

    def test_refuses_to_overwrite(self, tmp_path):
        """Should not replace an existing settings file."""
        write_default_settings(tmp_path)

        with pytest.raises(ConfigError, match="already exists"):
            write_default_settings(tmp_path)
