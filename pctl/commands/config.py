"""
pluginctl config-init command.

Write a commented pluginctl.toml template.
"""

import argparse
from pathlib import Path

from pluginctl.config import DEFAULT_CONFIG_FILE
from pluginctl.config.schema import SCHEMA
from pluginctl.config.toml_handler import write_config_template


def config_init_command(args: argparse.Namespace) -> int:
    target = Path(args.path) if args.path else DEFAULT_CONFIG_FILE
    write_config_template(target, SCHEMA, overwrite=args.force)
    print(f"Wrote {target}")
    return 0
