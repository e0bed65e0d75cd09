"""
pluginctl bump-version command.

Bump the manifest version and publish a release branch.
"""

import argparse
from pathlib import Path

from pluginctl.config import load_settings
from pluginctl.plugin.bump import bump_version, prompt_confirm


def bump_command(args: argparse.Namespace) -> int:
    """
    Execute bump-version command.

    Declining the diff is not an error and exits with 0.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    settings = load_settings(Path(args.config) if args.config else None)
    confirm = (lambda question: True) if args.noconfirm else prompt_confirm

    result = bump_version(args.mode, confirm=confirm, remote=settings.git_remote)

    if result.confirmed:
        print(f"Bumped {result.old_version} -> {result.new_version} on {result.branch}")
    elif args.verbose:
        print(f"Left {', '.join(result.files)} at {result.new_version}, nothing committed")
    return 0
