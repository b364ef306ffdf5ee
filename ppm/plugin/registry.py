"""
Plugin Registry.

This module provides the in-memory mapping from canonical key to plugin.

Key features:
- Last-write-wins registration by (namespace, subdirectory, name)
- Freezing once initialization completes
- Optional bootstrap (denops.vim) and self-management entries
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from ppm.plugin.errors import RegistryError
from ppm.plugin.spec import Plugin, PluginKey, parse_plugin

logger = logging.getLogger(__name__)

DENOPS_PLUGIN = {
    "name": "vim-denops/denops.vim",
    "path": "https://github.com/vim-denops/denops.vim",
}

SELF_PLUGIN = {
    "name": "Pcrab/ppm",
    "path": "https://github.com/Pcrab/ppm",
}


class PluginRegistry:
    """
    Registry of declared plugins.

    Writable until freeze() is called, read-only afterwards.
    """

    def __init__(self):
        self._plugins: dict[PluginKey, Plugin] = {}
        self._frozen = False

    def register(self, plugin: Plugin) -> None:
        """
        Register a plugin, replacing any earlier entry with the same key.

        Args:
            plugin: Normalized plugin

        Raises:
            RegistryError: If the registry is frozen
        """
        if self._frozen:
            raise RegistryError(f"Registry is frozen, cannot register {plugin.key}")

        if plugin.key in self._plugins:
            logger.debug("Plugin %s declared more than once, keeping the last", plugin.key)
        self._plugins[plugin.key] = plugin

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, key: PluginKey) -> Plugin | None:
        return self._plugins.get(key)

    def keys(self) -> set[PluginKey]:
        return set(self._plugins)

    def plugins(self) -> list[Plugin]:
        return list(self._plugins.values())

    def __contains__(self, key: object) -> bool:
        return key in self._plugins

    def __iter__(self) -> Iterator[Plugin]:
        return iter(list(self._plugins.values()))

    def __len__(self) -> int:
        return len(self._plugins)


def build_registry(
    specs: Iterable[Mapping[str, Any]],
    ensure_denops: bool = False,
    self_manage: bool = False,
) -> PluginRegistry:
    """
    Build and freeze a registry from declared specifications.

    Declared plugins are registered first, then the bootstrap entry, then
    the self-management entry, so the injected entries win on key collision.

    Args:
        specs: Raw plugin specifications
        ensure_denops: Also register denops.vim
        self_manage: Also register this plugin manager itself

    Returns:
        Frozen PluginRegistry

    Raises:
        ValidationError: If any specification is malformed
    """
    registry = PluginRegistry()

    for raw in specs:
        registry.register(parse_plugin(raw))

    if ensure_denops:
        registry.register(parse_plugin(DENOPS_PLUGIN))

    if self_manage:
        registry.register(parse_plugin(SELF_PLUGIN))

    registry.freeze()
    return registry
