"""
TOML File I/O Handler.

This module provides TOML parsing and writing.

Key features:
- Parse TOML files using tomllib (Python 3.11+)
- Write TOML files using tomlkit (preserves comments and formatting)
- Generate a commented settings document from a schema
"""

import tomllib
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.toml_document import TOMLDocument

from ppm.config.schema import ConfigField


class TOMLError(Exception):
    """Base exception for TOML-related errors."""

    pass


def read_toml(file_path: Path) -> dict[str, Any]:
    """
    Parse a ppm settings file.

    Raises:
        TOMLError: If the file is missing, unreadable or not valid TOML
    """
    try:
        raw = file_path.read_bytes()
    except FileNotFoundError as e:
        raise TOMLError(f"No settings file at {file_path}") from e
    except OSError as e:
        raise TOMLError(f"Cannot read settings file {file_path}: {e}") from e

    try:
        return tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise TOMLError(f"Settings file {file_path} is not valid TOML: {e}") from e


def write_toml(file_path: Path, data: dict[str, Any] | TOMLDocument) -> None:
    """
    Write data to a TOML file using tomlkit (preserves formatting).

    Args:
        file_path: Path to the TOML file
        data: Data or tomlkit document to write

    Raises:
        TOMLError: If file cannot be written
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            tomlkit.dump(data, f)
    except OSError as e:
        raise TOMLError(f"Failed to write TOML file {file_path}: {e}") from e


def generate_toml_from_schema(
    schema: dict[str, ConfigField],
    config_data: dict[str, Any],
    header: str = "",
    footer: list[str] | None = None,
) -> TOMLDocument:
    """
    Generate a TOML document from a schema with descriptive comments.

    Scalar fields come first so they stay top-level keys; list fields are
    written after them.

    Args:
        schema: Schema dictionary (field_name -> ConfigField)
        config_data: Configuration data (field_name -> value)
        header: Comment placed at the top of the document
        footer: Comment lines appended at the end of the document

    Returns:
        tomlkit document
    """
    doc = tomlkit.document()

    if header:
        doc.add(tomlkit.comment(header))
        doc.add(tomlkit.nl())

    ordered = sorted(schema.items(), key=lambda item: item[1].type_ is list)
    for field_name, field in ordered:
        if field.description:
            doc.add(tomlkit.comment(field.description))

        value = config_data.get(field_name, field.default)
        if field.type_ is list and value and all(isinstance(v, dict) for v in value):
            array = tomlkit.aot()
            for item in value:
                array.append(tomlkit.item(item))
            doc.add(field_name, array)
        else:
            doc.add(field_name, value)
        doc.add(tomlkit.nl())

    for line in footer or []:
        doc.add(tomlkit.comment(line))

    return doc
