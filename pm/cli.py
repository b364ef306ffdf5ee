"""
pm CLI - ppm Package Manager.

Pacman-style interface for managing declared editor plugins.

Usage:
    ppm -S                       Install declared plugins
    ppm -C                       Remove plugins that are no longer declared
    ppm -Q                       List declared plugins
    ppm -G                       Write a default config file
"""

import argparse
import logging
import sys

from ppm.config import ConfigError
from ppm.plugin.errors import PluginError


class PMError(Exception):
    """Base exception for pm errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with pacman-style flags."""
    parser = argparse.ArgumentParser(
        prog="ppm",
        description="ppm - Pacman-style plugin manager for Vim/Neovim packages",
        add_help=False,
    )

    # Operation flags (mutually exclusive)
    ops = parser.add_mutually_exclusive_group()
    ops.add_argument("-S", "--sync", action="store_true", help="Install plugins")
    ops.add_argument("-C", "--clean", action="store_true", help="Remove undeclared plugins")
    ops.add_argument("-Q", "--query", action="store_true", help="List declared plugins")
    ops.add_argument(
        "-G", "--generate-config", action="store_true", help="Write default config"
    )
    ops.add_argument("-h", "--help", action="store_true", help="Show help")

    # Common options
    parser.add_argument("--config", metavar="PATH", help="Config file to use")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    return parser


def print_help():
    """Print help message."""
    help_text = """
ppm - Pack Plugin Manager

Usage:
    ppm -S                       Install declared plugins
    ppm -C                       Remove plugins that are no longer declared
    ppm -Q                       List declared plugins
    ppm -G                       Write a default config file

Options:
    --config PATH                Config file (default: $PPM_CONFIG or ~/.config/ppm/ppm.toml)
    -v, --verbose                Verbose output
    -h, --help                   Show this help
"""
    print(help_text.strip())


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for pm CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        # Show help
        if args.help or (
            not args.sync
            and not args.clean
            and not args.query
            and not args.generate_config
        ):
            print_help()
            return 0

        # Route to appropriate command
        if args.sync:
            # -S: Install
            from pm.commands.install import install_command

            return install_command(args)

        elif args.clean:
            # -C: Clean
            from pm.commands.clean import clean_command

            return clean_command(args)

        elif args.query:
            # -Q: Query
            from pm.commands.query import query_command

            return query_command(args)

        elif args.generate_config:
            # -G: Generate config
            from pm.commands.config import generate_config_command

            return generate_config_command(args)

    except (PMError, PluginError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
