"""pluginctl API client for the plugin server."""

from pluginctl.api.client import PluginClient

__all__ = ["PluginClient"]
