"""
Plugin Lifecycle Operations.

Deploy, enable, disable, reset and inspect a plugin on the server. Each
operation is one or two API calls; the first failure is raised as is.
"""

import sys
from pathlib import Path
from typing import Any

from pluginctl.api.client import PluginClient
from pluginctl.config import Settings
from pluginctl.errors import ConfigurationError, FileOpenError


def get_client(settings: Settings) -> PluginClient:
    """
    Build an authenticated client from settings.

    A token takes precedence over username/password.

    Raises:
        ConfigurationError: If the site URL or credentials are missing
        RemoteError: If the username/password login is rejected
    """
    if not settings.site_url:
        raise ConfigurationError("MM_SERVICESETTINGS_SITEURL is not set")

    if settings.admin_token:
        client = PluginClient(settings.site_url, timeout=settings.timeout)
        print(f"Authenticating using token against {settings.site_url}.", file=sys.stderr)
        client.set_token(settings.admin_token)
        return client

    if settings.admin_username and settings.admin_password:
        client = PluginClient(settings.site_url, timeout=settings.timeout)
        print(
            f"Authenticating as {settings.admin_username} against {settings.site_url}.",
            file=sys.stderr,
        )
        try:
            client.login(settings.admin_username, settings.admin_password)
        except Exception:
            client.close()
            raise
        return client

    raise ConfigurationError(
        "one of MM_ADMIN_TOKEN or MM_ADMIN_USERNAME/MM_ADMIN_PASSWORD must be defined"
    )


def deploy(client: PluginClient, plugin_id: str, bundle_path: Path) -> None:
    """
    Upload a bundle, replacing any installed copy, and enable the plugin.

    Raises:
        FileOpenError: If the bundle cannot be opened (no request is made)
        RemoteError: If the upload or the enable call fails
    """
    bundle_path = Path(bundle_path)
    try:
        bundle = open(bundle_path, "rb")
    except OSError as e:
        raise FileOpenError(f"failed to open {bundle_path}: {e}") from e

    with bundle:
        print("Uploading plugin via API.", file=sys.stderr)
        client.upload_plugin_forced(bundle, filename=bundle_path.name)

    print("Enabling plugin.", file=sys.stderr)
    client.enable_plugin(plugin_id)


def enable_plugin(client: PluginClient, plugin_id: str) -> None:
    print("Enabling plugin.", file=sys.stderr)
    client.enable_plugin(plugin_id)


def disable_plugin(client: PluginClient, plugin_id: str) -> None:
    print("Disabling plugin.", file=sys.stderr)
    client.disable_plugin(plugin_id)


def reset_plugin(client: PluginClient, plugin_id: str) -> None:
    """Disable then enable the plugin; enable is skipped if disable fails."""
    disable_plugin(client, plugin_id)
    enable_plugin(client, plugin_id)


def plugin_status(client: PluginClient, plugin_id: str) -> list[dict[str, Any]]:
    """
    Get the status entries reported for plugin_id.

    Returns:
        One entry per cluster node running the plugin; empty if not installed
    """
    return [
        status
        for status in client.get_plugin_statuses()
        if status.get("plugin_id") == plugin_id
    ]
