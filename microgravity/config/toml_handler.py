"""
TOML File I/O Handler.

This module reads and writes the sandbox settings files.

Key features:
- Parse TOML files using tomllib (Python 3.11+)
- Write TOML files using tomlkit (preserves comments and formatting)
- Generate a commented settings file from the schema
"""

import tomllib
from pathlib import Path
from typing import Any

import tomlkit

from microgravity.config.schema import ConfigField


class TOMLError(Exception):
    """Base exception for TOML-related errors."""

    pass


def read_toml(file_path: Path) -> dict[str, Any]:
    """
    Read and parse a TOML file.

    Raises:
        TOMLError: If file cannot be read or parsed
    """
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise TOMLError(f"TOML file not found: {file_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise TOMLError(f"Failed to parse TOML file {file_path}: {e}") from e
    except OSError as e:
        raise TOMLError(f"Failed to read TOML file {file_path}: {e}") from e


def read_table(file_path: Path, *keys: str) -> dict[str, Any] | None:
    """
    Read a nested table from a TOML file.

    Args:
        file_path: Path to the TOML file
        keys: Table path, e.g. ("tool", "microgravity")

    Returns:
        The table, or None if the file or the table is absent

    Raises:
        TOMLError: If the file is unreadable or the key is not a table
    """
    if not file_path.is_file():
        return None

    table: Any = read_toml(file_path)
    for key in keys:
        if not isinstance(table, dict) or key not in table:
            return None
        table = table[key]

    if not isinstance(table, dict):
        raise TOMLError(f"[{'.'.join(keys)}] in {file_path} must be a table")
    return table


def write_toml(file_path: Path, content: str) -> None:
    """
    Write rendered TOML text to a file.

    Raises:
        TOMLError: If file cannot be written
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise TOMLError(f"Failed to write TOML file {file_path}: {e}") from e


def render_settings_file(
    section: str, schema: dict[str, ConfigField], values: dict[str, Any]
) -> str:
    """
    Render a settings file with one commented entry per schema field.

    Args:
        section: Table name
        schema: Schema dictionary (field_name -> ConfigField)
        values: Values to write (defaults for missing fields)

    Returns:
        TOML string with comments
    """
    doc = tomlkit.document()
    doc.add(tomlkit.comment(f"{section} settings"))
    doc.add(tomlkit.nl())

    table = tomlkit.table()
    for field_name, field in schema.items():
        if field.description:
            table.add(tomlkit.comment(field.description))
        table.add(field_name, values.get(field_name, field.default))

    doc.add(section, table)
    return tomlkit.dumps(doc)
