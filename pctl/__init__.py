"""
pctl - pluginctl command-line interface.

Dispatches the deploy/enable/disable/reset/status and bump-version commands.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
