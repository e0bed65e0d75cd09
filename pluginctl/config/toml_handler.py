"""
TOML File I/O Handler.

This module reads the optional pluginctl.toml settings file and generates a
commented template for it.

Key features:
- Parse TOML files using tomllib (Python 3.11+)
- Generate TOML using tomlkit with field descriptions as comments
"""

import tomllib
from pathlib import Path
from typing import Any

import tomlkit

from pluginctl.config.schema import ConfigField
from pluginctl.errors import ConfigurationError, FileWriteError


def read_toml(file_path: Path) -> dict[str, Any]:
    """
    Read and parse a TOML file.

    Args:
        file_path: Path to the TOML file

    Returns:
        Parsed TOML data as dictionary

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {file_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse config file {file_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {file_path}: {e}") from e


def generate_toml_from_schema(schema: dict[str, dict[str, ConfigField]]) -> str:
    """
    Generate a settings template with descriptive comments.

    Settings without a default are written commented out; secrets are only
    mentioned by their environment variable.

    Args:
        schema: Section name -> (field name -> ConfigField)

    Returns:
        TOML string with comments
    """
    doc = tomlkit.document()
    doc.add(tomlkit.comment("pluginctl settings. Environment variables override these values."))
    doc.add(tomlkit.nl())

    for section, fields in schema.items():
        table = tomlkit.table()

        for name, field in fields.items():
            if field.description:
                table.add(tomlkit.comment(field.description))
            if field.env:
                table.add(tomlkit.comment(f"Environment: {field.env}"))

            if field.secret:
                table.add(tomlkit.comment(f"{name} is read from the environment only"))
            elif field.default is None:
                table.add(tomlkit.comment(f'{name} = ""'))
            else:
                table.add(name, field.default)
            table.add(tomlkit.nl())

        doc.add(section, table)

    return tomlkit.dumps(doc)


def write_config_template(file_path: Path, schema: dict[str, dict[str, ConfigField]], overwrite: bool = False) -> None:
    """
    Write a settings template to file_path.

    Raises:
        FileWriteError: If the file exists (and overwrite is False) or cannot be written
    """
    if file_path.exists() and not overwrite:
        raise FileWriteError(f"Config file already exists: {file_path}")

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(generate_toml_from_schema(schema), encoding="utf-8")
    except OSError as e:
        raise FileWriteError(f"Failed to write config file {file_path}: {e}") from e
