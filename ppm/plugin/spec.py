"""
Plugin Specification Parsing.

This module normalizes raw, host-supplied plugin specifications into
canonical plugin records.

Key features:
- "name" / "namespace/name" splitting with an "unnamed" default namespace
- Tagged source variants (git, local) instead of type-dependent optional fields
- start/opt load bucket selection
- Opaque pass-through of host hooks
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

from ppm.plugin.errors import ValidationError

UNNAMED_NAMESPACE = "unnamed"

START_DIR = "start"
OPT_DIR = "opt"


class LoadType(Enum):
    """Plugin load type enumeration."""

    GIT = "git"
    LOCAL = "local"


@dataclass(frozen=True)
class GitSource:
    """
    Plugin cloned from a git repository.

    Attributes:
        url: Repository URL (or anything `git clone` accepts)
        branch: Branch or tag to clone
        commit: Commit to check out after cloning
    """

    url: str
    branch: str | None = None
    commit: str | None = None

    @property
    def load_type(self) -> str:
        return LoadType.GIT.value


@dataclass(frozen=True)
class LocalSource:
    """Plugin symlinked from a directory on the local filesystem."""

    path: str

    @property
    def load_type(self) -> str:
        return LoadType.LOCAL.value


@dataclass(frozen=True)
class UnknownSource:
    """
    Plugin declared with a load type this manager does not support.

    Kept through parsing so the failure surfaces per plugin at install time.
    """

    type_name: str
    path: str

    @property
    def load_type(self) -> str:
        return self.type_name


PluginSource = GitSource | LocalSource | UnknownSource


class PluginKey(NamedTuple):
    """Canonical plugin key, also the on-disk relative path."""

    namespace: str
    subdirectory: str
    name: str

    def __str__(self) -> str:
        return "/".join(self)


@dataclass(frozen=True)
class Plugin:
    """
    Normalized plugin record.

    Attributes:
        name: Final segment of the declared name
        namespace: First segment of the declared name, or "unnamed"
        source: Where the plugin comes from
        subdirectory: "start" or "opt"
        hooks: Host-owned hooks, stored and forwarded untouched
    """

    name: str
    namespace: str
    source: PluginSource
    subdirectory: str = START_DIR
    hooks: tuple[Any, ...] = field(default=(), compare=False)

    @property
    def key(self) -> PluginKey:
        return PluginKey(self.namespace, self.subdirectory, self.name)

    @property
    def load_type(self) -> str:
        return self.source.load_type

    @property
    def optional(self) -> bool:
        return self.subdirectory == OPT_DIR


def split_name(raw_name: str) -> tuple[str, str]:
    """
    Split a declared plugin name into (namespace, name).

    Args:
        raw_name: "name" or "namespace/name"

    Returns:
        Tuple of (namespace, name)

    Raises:
        ValidationError: If the name has more than two segments, an empty one
            or a "." or ".." segment
    """
    segments = raw_name.split("/")
    if len(segments) > 2:
        raise ValidationError(f"Invalid plugin name: {raw_name}")
    if any(not segment for segment in segments):
        raise ValidationError(f"Invalid plugin name: {raw_name!r} has an empty segment")
    if any(segment in (".", "..") for segment in segments):
        raise ValidationError(f"Invalid plugin name: {raw_name!r} has a relative segment")

    if len(segments) == 1:
        return UNNAMED_NAMESPACE, segments[0]
    return segments[0], segments[1]


def _optional_str(raw: Mapping[str, Any], key: str, plugin_name: str) -> str | None:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Plugin {plugin_name}: '{key}' must be a string")
    return value


def _build_source(raw: Mapping[str, Any], plugin_name: str) -> PluginSource:
    type_name = raw.get("type") or LoadType.GIT.value
    if not isinstance(type_name, str):
        raise ValidationError(f"Plugin {plugin_name}: 'type' must be a string")

    path = raw["path"]
    if type_name == LoadType.GIT.value:
        return GitSource(
            url=path,
            branch=_optional_str(raw, "branch", plugin_name),
            commit=_optional_str(raw, "commit", plugin_name),
        )
    if type_name == LoadType.LOCAL.value:
        return LocalSource(path=path)
    return UnknownSource(type_name=type_name, path=path)


def parse_plugin(raw: Mapping[str, Any]) -> Plugin:
    """
    Normalize a raw plugin specification.

    Only naming and field types are checked. A malformed URL or a missing
    local directory surfaces later as an install failure.

    Args:
        raw: Mapping with keys name, path and optionally type, branch,
            commit, opt, hooks

    Returns:
        Normalized Plugin

    Raises:
        ValidationError: If the specification is malformed
    """
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Plugin specification must be a table, got {type(raw).__name__}")

    raw_name = raw.get("name")
    if not isinstance(raw_name, str):
        raise ValidationError(f"Plugin specification is missing a string 'name': {dict(raw)!r}")
    if not isinstance(raw.get("path"), str):
        raise ValidationError(f"Plugin {raw_name}: 'path' must be a string")

    namespace, name = split_name(raw_name)

    opt = raw.get("opt", False)
    if not isinstance(opt, bool):
        raise ValidationError(f"Plugin {raw_name}: 'opt' must be a boolean")

    hooks = raw.get("hooks") or ()
    if not isinstance(hooks, (list, tuple)):
        raise ValidationError(f"Plugin {raw_name}: 'hooks' must be a list")

    return Plugin(
        name=name,
        namespace=namespace,
        source=_build_source(raw, raw_name),
        subdirectory=OPT_DIR if opt else START_DIR,
        hooks=tuple(hooks),
    )
