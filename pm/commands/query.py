"""
pm query command (-Q).

List declared plugins with their load type and install state.
"""

import os
from typing import Any

from pm.commands import initialized_manager
from ppm.plugin.paths import resolve


def query_command(args: Any) -> int:
    """
    Execute query command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    manager = initialized_manager(args)
    session = manager.session

    for plugin in sorted(session.registry, key=lambda p: p.key):
        path = resolve(plugin, session.install_root)
        state = "installed" if os.path.lexists(path) else "missing"
        line = f"{plugin.key} [{plugin.load_type}] {state}"
        if args.verbose:
            line += f" {path}"
        print(line)

    return 0
