"""
Plugin Pruner.

Removes installed plugin directories that are no longer declared. The
install root is read as a fixed namespace/subdirectory/name tree and every
leaf whose key is missing from the registry is deleted.
"""

import asyncio
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from ppm.plugin.errors import PruneError
from ppm.plugin.registry import PluginRegistry
from ppm.plugin.spec import PluginKey

logger = logging.getLogger(__name__)


@dataclass
class PruneFailure:
    """A leaf or directory the pruner could not handle."""

    path: Path
    error: str


@dataclass
class PruneReport:
    """
    Aggregate outcome of a prune run.

    Attributes:
        removed: Leaves that were deleted
        kept: Keys of leaves that are still declared
        failed: Per-entry failures
    """

    removed: list[Path] = field(default_factory=list)
    kept: list[PluginKey] = field(default_factory=list)
    failed: list[PruneFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def _subdirectories(path: Path) -> list[Path]:
    return sorted(entry for entry in path.iterdir() if entry.is_dir() and not entry.is_symlink())


def scan_leaves(install_root: Path, failures: list[PruneFailure]) -> list[tuple[PluginKey, Path]]:
    """
    List every leaf entry under install_root with its key.

    Directories that cannot be read are recorded in failures and skipped.
    """
    leaves = []

    try:
        namespaces = _subdirectories(install_root)
    except FileNotFoundError:
        return leaves
    except OSError as e:
        failures.append(PruneFailure(install_root, str(e)))
        return leaves

    for namespace_dir in namespaces:
        try:
            subdirs = _subdirectories(namespace_dir)
        except OSError as e:
            failures.append(PruneFailure(namespace_dir, str(e)))
            continue

        for subdir in subdirs:
            try:
                entries = sorted(subdir.iterdir())
            except OSError as e:
                failures.append(PruneFailure(subdir, str(e)))
                continue

            for leaf in entries:
                key = PluginKey(namespace_dir.name, subdir.name, leaf.name)
                leaves.append((key, leaf))

    return leaves


def remove_leaf(path: Path) -> None:
    """
    Delete a plugin leaf.

    Symlinks and stray files are unlinked; link targets are never touched.

    Raises:
        PruneError: If removal fails
    """
    try:
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as e:
        raise PruneError(f"Failed to remove {path}: {e}") from e


async def _remove(path: Path) -> PruneFailure | None:
    try:
        await asyncio.to_thread(remove_leaf, path)
    except PruneError as e:
        return PruneFailure(path, str(e))

    logger.debug("Removed %s", path)
    return None


async def prune(registry: PluginRegistry, install_root: Path) -> PruneReport:
    """
    Delete every installed plugin whose key is not registered.

    This is destructive and has no dry run. All removals are awaited before
    returning.

    Args:
        registry: Registry of declared plugins
        install_root: Resolved install root

    Returns:
        PruneReport
    """
    report = PruneReport()
    leaves = scan_leaves(install_root, report.failed)

    to_remove = []
    for key, path in leaves:
        if key in registry:
            report.kept.append(key)
        else:
            to_remove.append(path)

    outcomes = await asyncio.gather(*(_remove(path) for path in to_remove))

    for path, failure in zip(to_remove, outcomes, strict=True):
        if failure is None:
            report.removed.append(path)
        else:
            report.failed.append(failure)

    logger.info(
        "Prune finished: %d removed, %d kept, %d failed",
        len(report.removed),
        len(report.kept),
        len(report.failed),
    )
    return report
