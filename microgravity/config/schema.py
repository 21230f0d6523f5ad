"""
Settings Schema.

This module provides schema declaration and validation for sandbox settings.

Key features:
- Typed field definitions with defaults and descriptions
- Partial configs: missing fields fall back to their defaults
"""

from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    pass


class ValidationError(SchemaError):
    """Raised when value validation fails."""

    pass


@dataclass
class ConfigField:
    """
    Represents a settings field with type and constraints.

    Attributes:
        type_: The expected type of the field value
        default: Default value for the field
        description: Human-readable description
    """

    type_: type
    default: Any
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.default, self.type_):
            raise SchemaError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )

    def validate(self, value: Any) -> None:
        """
        Validate a value against this field's constraints.

        Raises:
            ValidationError: If validation fails
        """
        # bool is an int subclass; keep the two apart
        if not isinstance(value, self.type_) or (
            self.type_ is not bool and isinstance(value, bool)
        ):
            raise ValidationError(
                f"Expected type {self.type_.__name__}, got {type(value).__name__}"
            )


SETTINGS_SCHEMA: dict[str, ConfigField] = {
    "root_dir": ConfigField(
        str, ".", "Project directory to scan, relative to this file"
    ),
    "verbose": ConfigField(bool, False, "Print discovery and activation messages"),
}


def validate_config(
    config: dict[str, Any], schema: dict[str, ConfigField]
) -> dict[str, Any]:
    """
    Validate a settings table against a schema.

    Args:
        config: The settings table to validate
        schema: The schema dictionary (field_name -> ConfigField)

    Returns:
        The settings with defaults filled in

    Raises:
        ValidationError: If validation fails
    """
    for key in config:
        if key not in schema:
            raise ValidationError(f"Unknown configuration field: {key}")

    resolved = generate_default_config(schema)
    for field_name, value in config.items():
        try:
            schema[field_name].validate(value)
        except ValidationError as e:
            raise ValidationError(f"Field '{field_name}': {e}") from e
        resolved[field_name] = value

    return resolved


def generate_default_config(schema: dict[str, ConfigField]) -> dict[str, Any]:
    """Generate a default configuration from a schema."""
    return {field_name: field.default for field_name, field in schema.items()}
