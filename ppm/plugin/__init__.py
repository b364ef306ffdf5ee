"""
ppm Plugin Core - Declarative plugin installation and pruning.

This module handles:
- Plugin specification parsing and validation
- Install path resolution
- The plugin registry
- Concurrent git/local installation
- Pruning of undeclared plugins
"""

__all__ = []
