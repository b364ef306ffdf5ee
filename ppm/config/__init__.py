"""
ppm Configuration - TOML-based host settings.

This module provides:
- The settings schema (search path, declared plugins, toggles)
- Config file discovery (--config, PPM_CONFIG, default location)
- Commented default config generation

Example ppm.toml:
    packpath = "~/.local/share/nvim/site"
    ensure_denops = true

    [[plugins]]
    name = "lambdalisue/fern.vim"
    path = "https://github.com/lambdalisue/fern.vim"

    [[plugins]]
    name = "mine/scratch"
    path = "~/src/scratch.vim"
    type = "local"
    opt = true
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ppm.config.schema import ConfigField, SchemaError, validate_config
from ppm.config.toml_handler import TOMLError, generate_toml_from_schema, read_toml, write_toml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PPM_CONFIG"

DEFAULT_CONFIG_FILE = Path("~/.config/ppm/ppm.toml")

SETTINGS_SCHEMA: dict[str, ConfigField] = {
    "packpath": ConfigField(
        str,
        "~/.local/share/nvim/site",
        "Comma-separated package search path; plugins go under <first entry>/pack",
    ),
    "ensure_denops": ConfigField(bool, False, "Also install vim-denops/denops.vim"),
    "self_manage": ConfigField(bool, False, "Let ppm install and keep itself"),
    "plugins": ConfigField(list, [], "Declared plugins, one [[plugins]] table each"),
}

_EXAMPLE_PLUGIN = [
    "Replace 'plugins = []' with one table per plugin, for example:",
    "",
    "[[plugins]]",
    'name = "namespace/name"        # or just "name" (namespace "unnamed")',
    'path = "https://github.com/owner/repo"',
    'type = "git"                   # "git" (default) or "local"',
    'branch = "main"                # git only, optional',
    'commit = "0123abc"             # git only, optional',
    "opt = false                    # true installs into opt/ instead of start/",
]


class ConfigError(Exception):
    """Base exception for config API errors."""

    pass


@dataclass
class Settings:
    """
    Host inputs to the plugin core.

    Attributes:
        packpath: Comma-separated search path; only the first entry is used
        plugins: Raw plugin specifications
        ensure_denops: Auto-include the denops.vim bootstrap plugin
        self_manage: Auto-include ppm itself
    """

    packpath: str = SETTINGS_SCHEMA["packpath"].default
    plugins: list[dict[str, Any]] = field(default_factory=list)
    ensure_denops: bool = False
    self_manage: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """
        Build settings from a parsed TOML table.

        Raises:
            ConfigError: If the table does not match the schema
        """
        try:
            values = validate_config(data, SETTINGS_SCHEMA)
        except SchemaError as e:
            raise ConfigError(str(e)) from e

        return cls(**values)


def config_path(explicit: Path | str | None = None) -> Path:
    """
    Locate the config file.

    Order: explicit argument, PPM_CONFIG environment variable, default.
    """
    if explicit:
        return Path(explicit).expanduser()

    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()

    return DEFAULT_CONFIG_FILE.expanduser()


def load_settings(path: Path | str | None = None) -> Settings:
    """
    Load settings from the config file.

    A missing file yields default settings.

    Args:
        path: Explicit config file, see config_path()

    Returns:
        Settings

    Raises:
        ConfigError: If the file cannot be parsed or is invalid
    """
    file_path = config_path(path)

    if not file_path.exists():
        logger.debug("No config at %s, using defaults", file_path)
        return Settings()

    try:
        data = read_toml(file_path)
    except TOMLError as e:
        raise ConfigError(str(e)) from e

    try:
        return Settings.from_dict(data)
    except ConfigError as e:
        raise ConfigError(f"Invalid config {file_path}: {e}") from e


def write_default_config(path: Path | str | None = None) -> Path:
    """
    Write a commented default config file.

    Args:
        path: Target file, see config_path()

    Returns:
        Path written

    Raises:
        ConfigError: If the file already exists or cannot be written
    """
    file_path = config_path(path)

    if file_path.exists():
        raise ConfigError(f"Config file already exists: {file_path}")

    doc = generate_toml_from_schema(
        SETTINGS_SCHEMA,
        {},
        header="ppm configuration",
        footer=_EXAMPLE_PLUGIN,
    )

    try:
        write_toml(file_path, doc)
    except TOMLError as e:
        raise ConfigError(str(e)) from e

    return file_path


__all__ = [
    "ConfigError",
    "Settings",
    "SETTINGS_SCHEMA",
    "config_path",
    "load_settings",
    "write_default_config",
]
