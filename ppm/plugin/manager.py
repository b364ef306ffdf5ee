"""
Plugin Manager.

This module provides the host-facing operations.

Key features:
- initialize(): build the install root and a frozen registry into a Session
- install(): install every declared plugin, reporting failures one by one
- clean(): prune undeclared plugin directories
- Uninitialized/Initialized state tracking
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ppm.config import Settings
from ppm.plugin.errors import StateError
from ppm.plugin.installer import InstallReport, install_all
from ppm.plugin.paths import resolve_install_root
from ppm.plugin.pruner import PruneReport, prune
from ppm.plugin.registry import PluginRegistry, build_registry

logger = logging.getLogger(__name__)


class ManagerState(Enum):
    """Manager lifecycle state."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


@dataclass(frozen=True)
class Session:
    """
    Everything install and clean need, built once by initialize().

    Attributes:
        install_root: Resolved absolute install root
        registry: Frozen plugin registry
    """

    install_root: Path
    registry: PluginRegistry


def initialize(settings: Settings) -> Session:
    """
    Build a session from host settings.

    Raises:
        ValidationError: If any plugin specification is malformed
        ValueError: If the search path is empty
    """
    install_root = resolve_install_root(settings.packpath)
    registry = build_registry(
        settings.plugins,
        ensure_denops=settings.ensure_denops,
        self_manage=settings.self_manage,
    )

    logger.debug("Initialized %d plugins under %s", len(registry), install_root)
    return Session(install_root=install_root, registry=registry)


async def install(session: Session) -> InstallReport:
    return await install_all(session.registry, session.install_root)


async def clean(session: Session) -> PruneReport:
    return await prune(session.registry, session.install_root)


def _log_error(message: str) -> None:
    logger.error(message)


class PluginManager:
    """
    Stateful wrapper for hosts that call initialize/install/clean on demand.

    Failures during install and clean are sent, one message per entry, to the
    host's error channel; successes are silent.
    """

    def __init__(
        self,
        settings: Settings | Callable[[], Settings],
        echoerr: Callable[[str], None] | None = None,
    ):
        """
        Initialize PluginManager.

        Args:
            settings: Host settings, or a callable returning them at initialize time
            echoerr: Host error display channel (defaults to logging)
        """
        self._settings = settings
        self._echoerr = echoerr or _log_error
        self._session: Session | None = None

    @property
    def state(self) -> ManagerState:
        if self._session is None:
            return ManagerState.UNINITIALIZED
        return ManagerState.INITIALIZED

    @property
    def session(self) -> Session:
        """
        Current session.

        Raises:
            StateError: If initialize() has not completed
        """
        if self._session is None:
            raise StateError("Plugin manager is not initialized; call initialize() first")
        return self._session

    def initialize(self) -> Session:
        """
        Build the registry and move to INITIALIZED.

        On failure the manager stays UNINITIALIZED.
        """
        self._session = None
        settings = self._settings() if callable(self._settings) else self._settings
        self._session = initialize(settings)
        return self._session

    async def install(self) -> InstallReport:
        """Install all declared plugins."""
        report = await install(self.session)
        for result in report.failed:
            self._echoerr(f"Failed to install {result.key}: {result.error}")
        return report

    async def clean(self) -> PruneReport:
        """Remove installed plugins that are no longer declared."""
        report = await clean(self.session)
        for failure in report.failed:
            self._echoerr(f"Failed to clean {failure.path}: {failure.error}")
        return report
