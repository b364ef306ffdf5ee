"""
Configuration Schema System.

This module provides schema declaration and validation for ppm settings.

Key features:
- Typed field definitions with defaults and descriptions
- Validation of a parsed TOML table against the schema
- Defaults filled in for missing fields
"""

from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    pass


class SchemaValidationError(SchemaError):
    """Raised when value validation fails."""

    pass


@dataclass
class ConfigField:
    """
    Represents a configuration field with type and default.

    Attributes:
        type_: The expected type of the field value
        default: Default value for the field
        description: Human-readable description, written as a TOML comment
    """

    type_: type
    default: Any
    description: str = ""

    def __post_init__(self):
        """Validate field definition."""
        if not isinstance(self.default, self.type_):
            raise SchemaError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )

    def validate(self, value: Any) -> None:
        """
        Validate a value against this field's type.

        Args:
            value: The value to validate

        Raises:
            SchemaValidationError: If validation fails
        """
        # bool is an int subclass; keep them apart
        if isinstance(value, bool) and self.type_ is not bool:
            raise SchemaValidationError(f"Expected type {self.type_.__name__}, got bool")

        if not isinstance(value, self.type_):
            raise SchemaValidationError(
                f"Expected type {self.type_.__name__}, got {type(value).__name__}"
            )


def validate_config(config: dict[str, Any], schema: dict[str, ConfigField]) -> dict[str, Any]:
    """
    Validate a configuration table against a schema.

    Args:
        config: Parsed configuration table
        schema: The schema dictionary (field_name -> ConfigField)

    Returns:
        New dictionary with every schema field, defaults filled in

    Raises:
        SchemaValidationError: If an unknown field is present or a value has the wrong type
    """
    for key in config:
        if key not in schema:
            raise SchemaValidationError(f"Unknown configuration field: {key}")

    validated = generate_default_config(schema)
    for field_name, value in config.items():
        try:
            schema[field_name].validate(value)
        except SchemaValidationError as e:
            raise SchemaValidationError(f"Field '{field_name}': {e}") from e
        validated[field_name] = value

    return validated


def generate_default_config(schema: dict[str, ConfigField]) -> dict[str, Any]:
    """
    Generate a default configuration from a schema.

    Mutable defaults are copied so callers cannot alter the schema.
    """
    return {
        field_name: field.default.copy() if isinstance(field.default, (list, dict)) else field.default
        for field_name, field in schema.items()
    }
