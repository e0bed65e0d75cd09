"""
Settings Schema.

This module declares the settings pluginctl understands, where each one can
come from, and how values are validated.
"""

from dataclasses import dataclass
from typing import Any

from pluginctl.errors import ConfigurationError


@dataclass
class ConfigField:
    """
    Represents a setting with type, default and environment override.

    Attributes:
        type_: The expected type of the value
        default: Default value, or None when the setting has no default
        description: Human-readable description (written as a TOML comment)
        env: Environment variable overriding the file value
        secret: Left out of generated config files
    """

    type_: type
    default: Any
    description: str = ""
    env: str | None = None
    secret: bool = False

    def __post_init__(self):
        """Validate field definition."""
        if self.default is not None and not isinstance(self.default, self.type_):
            raise ConfigurationError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )

    def coerce(self, value: Any) -> Any:
        """
        Convert a raw value (file or environment) to the field's type.

        Raises:
            ConfigurationError: If the value cannot be converted
        """
        if isinstance(value, bool):
            pass
        elif isinstance(value, self.type_):
            return value
        elif self.type_ is float and isinstance(value, int):
            return float(value)
        elif isinstance(value, str) and self.type_ in (int, float):
            try:
                return self.type_(value)
            except ValueError:
                pass

        raise ConfigurationError(
            f"Expected type {self.type_.__name__}, got {type(value).__name__} ({value!r})"
        )


SERVER_SCHEMA: dict[str, ConfigField] = {
    "site_url": ConfigField(
        str, None, "Base URL of the server the plugin is deployed to",
        env="MM_SERVICESETTINGS_SITEURL",
    ),
    "admin_token": ConfigField(
        str, None, "Personal access token of a system admin",
        env="MM_ADMIN_TOKEN", secret=True,
    ),
    "admin_username": ConfigField(
        str, None, "System admin username (used when no token is set)",
        env="MM_ADMIN_USERNAME",
    ),
    "admin_password": ConfigField(
        str, None, "System admin password",
        env="MM_ADMIN_PASSWORD", secret=True,
    ),
    "timeout": ConfigField(
        float, 30.0, "Request timeout in seconds",
        env="PLUGINCTL_TIMEOUT",
    ),
}

RELEASE_SCHEMA: dict[str, ConfigField] = {
    "git_remote": ConfigField(
        str, "origin", "Remote that release branches are pushed to",
        env="PLUGINCTL_GIT_REMOTE",
    ),
}

SCHEMA: dict[str, dict[str, ConfigField]] = {
    "server": SERVER_SCHEMA,
    "release": RELEASE_SCHEMA,
}
