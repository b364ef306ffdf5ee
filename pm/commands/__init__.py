"""
pm commands.

Shared helpers for building an initialized PluginManager from CLI arguments.
"""

import sys
from typing import Any

from ppm.config import load_settings
from ppm.plugin.manager import PluginManager


def echoerr(message: str) -> None:
    """Print one error message to stderr."""
    print(message, file=sys.stderr)


def initialized_manager(args: Any) -> PluginManager:
    """
    Load settings and initialize a PluginManager.

    Raises:
        PMError: If the search path is unusable
        ConfigError: If the config file is invalid
        ValidationError: If a plugin specification is malformed
    """
    from pm.cli import PMError

    settings = load_settings(args.config)
    manager = PluginManager(settings, echoerr=echoerr)

    try:
        manager.initialize()
    except ValueError as e:
        raise PMError(str(e)) from e

    return manager
