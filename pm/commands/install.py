"""
pm install command (-S).

Install every declared plugin that is not yet present.
"""

import asyncio
from typing import Any

from pm.commands import initialized_manager


def install_command(args: Any) -> int:
    """
    Execute install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero if any plugin failed)
    """
    manager = initialized_manager(args)
    report = asyncio.run(manager.install())

    # Summary
    if args.verbose:
        print(
            f"\nInstalled: {len(report.installed)}, "
            f"Skipped: {len(report.skipped)}, Failed: {len(report.failed)}"
        )

    return 0 if report.ok else 1
