"""
pluginctl CLI - manage a server plugin from its source tree.

Usage:
    pluginctl deploy <bundle>                 Upload (forced) and enable the plugin
    pluginctl disable                         Disable the plugin
    pluginctl enable                          Enable the plugin
    pluginctl reset                           Disable and enable the plugin
    pluginctl status                          Show the plugin status on the server
    pluginctl bump-version major|minor|patch  Bump the version and push a release branch
    pluginctl config-init [path]              Write a commented settings template
"""

import argparse
import sys
from collections.abc import Callable

from pctl.commands.bump import bump_command
from pctl.commands.config import config_init_command
from pctl.commands.lifecycle import (
    deploy_command,
    disable_command,
    enable_command,
    reset_command,
    status_command,
)
from pluginctl.errors import PluginctlError

# name -> (handler, help)
COMMANDS: dict[str, tuple[Callable[[argparse.Namespace], int], str]] = {
    "deploy": (deploy_command, "Deploy the plugin"),
    "disable": (disable_command, "Disable the plugin"),
    "enable": (enable_command, "Enable the plugin"),
    "reset": (reset_command, "Disable and enable the plugin"),
    "status": (status_command, "Show the plugin status on the server"),
    "bump-version": (bump_command, "Bump the plugin version"),
    "config-init": (config_init_command, "Write a settings template"),
}

BUMP_MODES = ("major", "minor", "patch")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with one subcommand per COMMANDS entry."""
    parser = argparse.ArgumentParser(
        prog="pluginctl",
        description="Deploy, toggle and version-bump a server plugin",
    )

    # Common options
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--noconfirm", action="store_true", help="Skip confirmation prompts"
    )
    parser.add_argument(
        "--config", metavar="PATH", default=None, help="Settings file (default: ./pluginctl.toml)"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    for name, (_, help_text) in COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text, description=help_text)

        if name == "deploy":
            sub.add_argument(
                "bundle",
                help="Plugin bundle, e.g. dist/com.example.plugin-0.1.0.tar.gz",
            )
        elif name == "bump-version":
            sub.add_argument("mode", choices=BUMP_MODES, help="Version component to bump")
        elif name == "config-init":
            sub.add_argument("path", nargs="?", default=None, help="Target file")
            sub.add_argument("--force", action="store_true", help="Overwrite an existing file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the pluginctl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    handler, _ = COMMANDS[args.command]

    try:
        return handler(args)

    except PluginctlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
