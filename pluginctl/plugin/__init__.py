"""
pluginctl Plugin Operations.

This module handles:
- Manifest lookup, rewrite and regeneration of derived sources
- Semantic version arithmetic
- Git-driven release workflow
- Remote lifecycle operations (deploy, enable, disable, reset)
"""

__all__ = []
