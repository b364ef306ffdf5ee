"""
Plugin Installer.

This module installs every registered plugin concurrently.

Key features:
- Presence-only idempotence: an existing install path is never touched
- git clone (with optional branch and commit) or local symlink per plugin
- Per-plugin failure isolation; nothing fails fast
- Aggregate report of installed, skipped and failed plugins
"""

import asyncio
import logging
import os
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ppm.plugin import git_ops
from ppm.plugin.errors import InstallError
from ppm.plugin.paths import resolve
from ppm.plugin.registry import PluginRegistry
from ppm.plugin.spec import GitSource, LocalSource, Plugin, PluginKey, UnknownSource

logger = logging.getLogger(__name__)


class InstallStatus(Enum):
    """Outcome of a single install attempt."""

    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class InstallResult:
    """
    Outcome of installing one plugin.

    Attributes:
        key: Canonical plugin key
        path: Absolute install path
        status: What happened
        error: Error message if status is FAILED
    """

    key: PluginKey
    path: Path
    status: InstallStatus
    error: str | None = None


@dataclass
class InstallReport:
    """Aggregate outcome of an install run."""

    results: list[InstallResult] = field(default_factory=list)

    def _with_status(self, status: InstallStatus) -> list[InstallResult]:
        return [r for r in self.results if r.status == status]

    @property
    def installed(self) -> list[InstallResult]:
        return self._with_status(InstallStatus.INSTALLED)

    @property
    def skipped(self) -> list[InstallResult]:
        return self._with_status(InstallStatus.SKIPPED)

    @property
    def failed(self) -> list[InstallResult]:
        return self._with_status(InstallStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed


async def _install_git(source: GitSource, target_dir: Path) -> None:
    await git_ops.clone_plugin(source.url, target_dir, branch=source.branch)
    if source.commit:
        try:
            await git_ops.checkout(target_dir, source.commit)
        except InstallError:
            # no working copy may remain at the wrong ref
            shutil.rmtree(target_dir, ignore_errors=True)
            raise


def _install_local(source: LocalSource, target_dir: Path) -> None:
    source_dir = os.path.abspath(os.path.expanduser(source.path))
    if not os.path.exists(source_dir):
        raise InstallError(f"Local plugin source does not exist: {source_dir}")

    try:
        target_dir.symlink_to(source_dir, target_is_directory=True)
    except OSError as e:
        raise InstallError(f"Failed to link {source_dir} to {target_dir}: {e}") from e


async def install_plugin(plugin: Plugin, install_root: Path) -> InstallStatus:
    """
    Install a single plugin unless its install path already exists.

    Args:
        plugin: Plugin to install
        install_root: Resolved install root

    Returns:
        INSTALLED or SKIPPED

    Raises:
        InstallError: If installation fails
    """
    target_dir = resolve(plugin, install_root)

    # lexists so a dangling symlink still counts as present
    if os.path.lexists(target_dir):
        logger.debug("Plugin %s already present at %s", plugin.key, target_dir)
        return InstallStatus.SKIPPED

    try:
        target_dir.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallError(f"Failed to create {target_dir.parent}: {e}") from e

    source = plugin.source
    if isinstance(source, GitSource):
        await _install_git(source, target_dir)
    elif isinstance(source, LocalSource):
        _install_local(source, target_dir)
    elif isinstance(source, UnknownSource):
        raise InstallError(f"unknown plugin type: {source.type_name}")
    else:
        raise InstallError(f"unknown plugin source: {source!r}")

    logger.debug("Installed %s at %s", plugin.key, target_dir)
    return InstallStatus.INSTALLED


async def _attempt(plugin: Plugin, install_root: Path) -> InstallResult:
    target_dir = resolve(plugin, install_root)
    try:
        status = await install_plugin(plugin, install_root)
    except InstallError as e:
        return InstallResult(plugin.key, target_dir, InstallStatus.FAILED, str(e))
    except Exception as e:
        logger.exception("Unexpected error installing %s", plugin.key)
        return InstallResult(plugin.key, target_dir, InstallStatus.FAILED, str(e))

    return InstallResult(plugin.key, target_dir, status)


async def install_all(registry: PluginRegistry, install_root: Path) -> InstallReport:
    """
    Install every registered plugin concurrently.

    Waits for all attempts; one failure never cancels or delays another.

    Args:
        registry: Registry of declared plugins
        install_root: Resolved install root

    Returns:
        InstallReport with one result per plugin
    """
    results = await asyncio.gather(
        *(_attempt(plugin, install_root) for plugin in registry)
    )
    report = InstallReport(results=list(results))

    logger.info(
        "Install finished: %d installed, %d skipped, %d failed",
        len(report.installed),
        len(report.skipped),
        len(report.failed),
    )
    return report
