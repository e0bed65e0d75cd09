"""
pluginctl Settings - server location, credentials and release options.

Values are resolved from, in increasing priority:
- schema defaults
- the optional TOML settings file (pluginctl.toml)
- environment variables

Example usage:
    from pluginctl.config import load_settings

    settings = load_settings()
    print(settings.site_url)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pluginctl.config.schema import SCHEMA, ConfigField
from pluginctl.config.toml_handler import read_toml
from pluginctl.errors import ConfigurationError

DEFAULT_CONFIG_FILE = Path("pluginctl.toml")


@dataclass
class Settings:
    """
    Resolved pluginctl settings.

    Attributes:
        site_url: Server base URL
        admin_token: Admin personal access token
        admin_username: Admin username, used with admin_password
        admin_password: Admin password
        timeout: HTTP timeout in seconds
        git_remote: Remote release branches are pushed to
    """

    site_url: str | None = None
    admin_token: str | None = None
    admin_username: str | None = None
    admin_password: str | None = None
    timeout: float = 30.0
    git_remote: str = "origin"


def load_settings(
    config_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Resolve settings from defaults, the settings file and the environment.

    Args:
        config_file: Explicit settings file; must exist when given. When
            omitted, pluginctl.toml in the working directory is used if present.
        environ: Environment mapping (default: os.environ)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the file is unreadable or a value has the wrong type
    """
    environ = os.environ if environ is None else environ

    if config_file is not None:
        file_data = read_toml(Path(config_file))
    elif DEFAULT_CONFIG_FILE.is_file():
        file_data = read_toml(DEFAULT_CONFIG_FILE)
    else:
        file_data = {}

    values: dict[str, Any] = {}
    for section, fields in SCHEMA.items():
        section_data = file_data.get(section, {})
        if not isinstance(section_data, dict):
            raise ConfigurationError(f"[{section}] must be a table")

        for key in section_data:
            if key not in fields:
                raise ConfigurationError(f"Unknown setting: {section}.{key}")

        for name, field in fields.items():
            values[name] = _resolve(section, name, field, section_data, environ)

    return Settings(**values)


def _resolve(
    section: str,
    name: str,
    field: ConfigField,
    section_data: dict[str, Any],
    environ: Mapping[str, str],
) -> Any:
    if field.env and environ.get(field.env):
        raw, source = environ[field.env], field.env
    elif name in section_data:
        raw, source = section_data[name], f"{section}.{name}"
    else:
        return field.default

    try:
        return field.coerce(raw)
    except ConfigurationError as e:
        raise ConfigurationError(f"Invalid value for {source}: {e}") from e


__all__ = ["Settings", "load_settings", "DEFAULT_CONFIG_FILE"]
