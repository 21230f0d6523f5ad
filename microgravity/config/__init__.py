"""
MicroGravity Configuration - TOML-based sandbox settings.

Sources, lowest to highest precedence:
1. Schema defaults
2. [tool.microgravity] in pyproject.toml
3. [microgravity] in microgravity.toml
4. DEBUG / TITAN_DEBUG environment flags (turn verbose on)

Example usage:
    from microgravity.config import load_settings

    settings = load_settings()
    print(settings.root_dir, settings.verbose)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from microgravity.config.schema import (
    SETTINGS_SCHEMA,
    SchemaError,
    generate_default_config,
    validate_config,
)
from microgravity.config.toml_handler import (
    TOMLError,
    read_table,
    render_settings_file,
    write_toml,
)

SECTION = "microgravity"
SETTINGS_FILENAME = "microgravity.toml"
PYPROJECT_FILENAME = "pyproject.toml"

DEBUG_ENV_VARS = ("DEBUG", "TITAN_DEBUG")
AFFIRMATIVE = frozenset({"1", "true", "yes", "on"})


class ConfigError(Exception):
    """Base exception for config API errors."""

    pass


@dataclass(frozen=True)
class Settings:
    """
    Resolved sandbox settings.

    Attributes:
        root_dir: Absolute project directory to scan
        verbose: Whether bootstrap messages are printed
    """

    root_dir: Path
    verbose: bool = False


def env_verbose(environ: Mapping[str, str] | None = None) -> bool:
    """True when DEBUG or TITAN_DEBUG holds an affirmative value."""
    environ = os.environ if environ is None else environ
    return any(
        environ.get(name, "").strip().lower() in AFFIRMATIVE
        for name in DEBUG_ENV_VARS
    )


def load_settings(
    directory: Path | None = None, environ: Mapping[str, str] | None = None
) -> Settings:
    """
    Load settings for a directory.

    Args:
        directory: Directory holding the settings files (default: cwd)
        environ: Environment mapping (default: os.environ)

    Returns:
        Settings

    Raises:
        ConfigError: If a settings file is unreadable or invalid
    """
    directory = Path(directory or Path.cwd()).absolute()
    values = generate_default_config(SETTINGS_SCHEMA)

    sources = (
        (directory / PYPROJECT_FILENAME, ("tool", SECTION)),
        (directory / SETTINGS_FILENAME, (SECTION,)),
    )
    for file_path, keys in sources:
        try:
            table = read_table(file_path, *keys)
            if table is not None:
                validate_config(table, SETTINGS_SCHEMA)
                values.update(table)
        except (TOMLError, SchemaError) as e:
            raise ConfigError(f"Invalid settings in {file_path}: {e}") from e

    return Settings(
        root_dir=(directory / values["root_dir"]).resolve(),
        verbose=values["verbose"] or env_verbose(environ),
    )


def write_default_settings(directory: Path) -> Path:
    """
    Write a commented microgravity.toml with default values.

    Raises:
        ConfigError: If the file already exists or cannot be written
    """
    file_path = Path(directory) / SETTINGS_FILENAME
    if file_path.exists():
        raise ConfigError(f"{file_path} already exists")

    content = render_settings_file(
        SECTION, SETTINGS_SCHEMA, generate_default_config(SETTINGS_SCHEMA)
    )
    try:
        write_toml(file_path, content)
    except TOMLError as e:
        raise ConfigError(str(e)) from e
    return file_path


__all__ = [
    "ConfigError",
    "Settings",
    "env_verbose",
    "load_settings",
    "write_default_settings",
]
