"""
pm clean command (-C).

Remove installed plugins that are no longer declared.
"""

import asyncio
from typing import Any

from pm.commands import initialized_manager


def clean_command(args: Any) -> int:
    """
    Execute clean command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero if any removal failed)
    """
    manager = initialized_manager(args)
    report = asyncio.run(manager.clean())

    if args.verbose:
        for path in report.removed:
            print(f"removed {path}")
        print(f"\nRemoved: {len(report.removed)}, Failed: {len(report.failed)}")

    return 0 if report.ok else 1
