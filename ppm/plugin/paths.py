"""
Install path resolution.

Plugins live at <install_root>/<namespace>/<start|opt>/<name>. Everything
here is pure: no filesystem access beyond user-home expansion.
"""

import os
from pathlib import Path

from ppm.plugin.spec import Plugin

PACK_DIR = "pack"
SEARCH_PATH_SEPARATOR = ","


def relative_path(plugin: Plugin) -> Path:
    """Path of a plugin relative to the install root."""
    return Path(*plugin.key)


def resolve(plugin: Plugin, install_root: Path) -> Path:
    """Absolute install path of a plugin under install_root."""
    return install_root / relative_path(plugin)


def resolve_install_root(packpath: str) -> Path:
    """
    Derive the install root from a multi-value search path.

    Only the first candidate is used; it is joined with "pack".

    Args:
        packpath: Comma-separated list of directories

    Returns:
        Absolute install root

    Raises:
        ValueError: If the search path has no usable first candidate
    """
    first = packpath.split(SEARCH_PATH_SEPARATOR)[0].strip()
    if not first:
        raise ValueError(f"Search path has no usable first entry: {packpath!r}")

    return Path(os.path.abspath(os.path.expanduser(first))) / PACK_DIR
