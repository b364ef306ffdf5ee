"""
pm generate-config command (-G).

Write a commented default config file.
"""

from typing import Any

from ppm.config import write_default_config


def generate_config_command(args: Any) -> int:
    """
    Execute generate-config command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    path = write_default_config(args.config)
    print(f"Wrote {path}")
    return 0
