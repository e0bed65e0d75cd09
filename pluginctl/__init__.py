"""
pluginctl - Deploy, toggle and release a server plugin from its source tree.

The library half of the tool; the command-line interface lives in pctl.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
