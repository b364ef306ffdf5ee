"""
ppm - Declarative plugin manager for Vim/Neovim packages.

This is the main package that exports the public API.
"""

__version__ = "0.1.0"

from ppm.config import Settings, load_settings
from ppm.plugin.errors import (
    InstallError,
    PluginError,
    PruneError,
    StateError,
    ValidationError,
)
from ppm.plugin.manager import PluginManager, Session, clean, initialize, install

__all__ = [
    "__version__",
    "InstallError",
    "PluginError",
    "PluginManager",
    "PruneError",
    "Session",
    "Settings",
    "StateError",
    "ValidationError",
    "clean",
    "initialize",
    "install",
    "load_settings",
]
