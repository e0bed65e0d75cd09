"""
pluginctl lifecycle commands (deploy, enable, disable, reset, status).

Every command reads plugin.json for the plugin id, then talks to the server.
"""

import argparse
from pathlib import Path

from pluginctl.config import load_settings
from pluginctl.errors import FileOpenError
from pluginctl.plugin import lifecycle
from pluginctl.plugin.manifest import find_manifest

_STATE_NAMES = {
    0: "not running",
    1: "starting",
    2: "running",
    3: "failed to start",
    4: "failed to stay running",
    5: "stopping",
}


def _plugin_id() -> str:
    return find_manifest().id


def _client(args: argparse.Namespace):
    settings = load_settings(Path(args.config) if args.config else None)
    return lifecycle.get_client(settings)


def deploy_command(args: argparse.Namespace) -> int:
    """
    Execute deploy command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    plugin_id = _plugin_id()

    bundle_path = Path(args.bundle)
    if not bundle_path.is_file():
        raise FileOpenError(f"failed to open {bundle_path}: no such file")

    with _client(args) as client:
        lifecycle.deploy(client, plugin_id, bundle_path)

    print(f"Deployed {plugin_id} from {bundle_path}")
    return 0


def enable_command(args: argparse.Namespace) -> int:
    plugin_id = _plugin_id()
    with _client(args) as client:
        lifecycle.enable_plugin(client, plugin_id)
    print(f"Enabled {plugin_id}")
    return 0


def disable_command(args: argparse.Namespace) -> int:
    plugin_id = _plugin_id()
    with _client(args) as client:
        lifecycle.disable_plugin(client, plugin_id)
    print(f"Disabled {plugin_id}")
    return 0


def reset_command(args: argparse.Namespace) -> int:
    plugin_id = _plugin_id()
    with _client(args) as client:
        lifecycle.reset_plugin(client, plugin_id)
    print(f"Reset {plugin_id}")
    return 0


def status_command(args: argparse.Namespace) -> int:
    """Print one line per server node reporting the plugin."""
    plugin_id = _plugin_id()
    with _client(args) as client:
        statuses = lifecycle.plugin_status(client, plugin_id)

    if not statuses:
        print(f"{plugin_id}: not installed")
        return 0

    for status in statuses:
        state = _STATE_NAMES.get(status.get("state"), str(status.get("state")))
        node = status.get("cluster_id") or "local"
        print(f"{plugin_id} {status.get('version', '?')} [{node}]: {state}")
    return 0
