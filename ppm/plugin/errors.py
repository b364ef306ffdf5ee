"""
Plugin Error Hierarchy.

All errors raised by the plugin core derive from PluginError so that hosts can
catch a single type at their dispatch boundary.
"""


class PluginError(Exception):
    """Base exception for plugin-related errors."""

    pass


class ValidationError(PluginError):
    """Raised when a raw plugin specification is malformed."""

    pass


class RegistryError(PluginError):
    """Raised when a frozen registry is modified."""

    pass


class StateError(PluginError):
    """Raised when an operation is invoked before initialization."""

    pass


class InstallError(PluginError):
    """Raised when installing a single plugin fails."""

    def __init__(self, message: str, plugin_key: str | None = None):
        self.plugin_key = plugin_key
        super().__init__(message)


class GitError(InstallError):
    """Raised when an external git command fails."""

    pass


class PruneError(PluginError):
    """Raised when removing a single undeclared plugin directory fails."""

    pass
