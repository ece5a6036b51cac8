"""Explicit run configuration for the resolver and merger.

A `CatalogConfig` is built by the caller once per run and threaded through
`resolve_version_refs()` and `merge_catalog()`; nothing here is process-global.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from catalogsync.core.model import ModuleId

VersionKeyReader = Callable[[ModuleId], Optional[str]]

MINIMUM_GRADLE_VERSION = "7.4"

_VERSION_NUMBER_RE = re.compile(r"^\s*(\d+(?:\.\d+)*)")


def _no_version_keys(_: ModuleId) -> str | None:
    return None


@dataclass(frozen=True)
class FeatureFlags:
    """Host feature switches; catalog integration runs only when `versions_catalog` is on."""

    versions_catalog: bool = True


@dataclass(frozen=True)
class CatalogConfig:
    """Inputs shared by every step of one catalog run.

    Attributes:
        versions_map: previously recorded version values keyed by canonical
            version key (eg `"version.kotlin" -> "1.6.10"`).
        version_key_of: naming function mapping a coordinate to its canonical
            version key, or `None` when it has none.
        with_versions: when False, inline library versions are written as `"_"`.
    """

    versions_map: Mapping[str, str] = field(default_factory=dict)
    version_key_of: VersionKeyReader = _no_version_keys
    with_versions: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.versions_map, Mapping):
            raise TypeError(f"CatalogConfig.versions_map: expected mapping, got {type(self.versions_map).__name__}")
        if not callable(self.version_key_of):
            raise TypeError("CatalogConfig.version_key_of: expected a callable")
        object.__setattr__(self, "versions_map", dict(self.versions_map))
        object.__setattr__(self, "with_versions", bool(self.with_versions))

    @classmethod
    def from_key_table(
        cls,
        version_keys: Mapping[str, str],
        *,
        versions_map: Mapping[str, str] | None = None,
        with_versions: bool = True,
    ) -> "CatalogConfig":
        """Build a config whose naming function is a `"group:name" -> key` lookup."""
        table = dict(version_keys)

        def _lookup(module: ModuleId) -> str | None:
            return table.get(module.module_key)

        return cls(versions_map=dict(versions_map or {}), version_key_of=_lookup, with_versions=with_versions)

    def version_key(self, module: ModuleId) -> str | None:
        return self.version_key_of(module)


def _version_tuple(version: str, *, where: str) -> tuple[tuple[int, ...], int]:
    """Return `(numbers, release)` where release is 0 for a suffixed pre-release and 1 otherwise."""
    m = _VERSION_NUMBER_RE.match(version)
    if not m:
        raise ValueError(f"{where}: expected a dotted numeric version, got {version!r}")
    parts = [int(x) for x in m.group(1).split(".")]
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    release = 0 if version[m.end():].strip() else 1
    return tuple(parts), release


def is_supported(gradle_version: Any, *, minimum: str = MINIMUM_GRADLE_VERSION) -> bool:
    """Return True if `gradle_version` is at least `minimum` (eg "7.4", "7.4.2", "8.0-rc-1").

    A pre-release sorts before the release it leads to: "7.4-rc-1" is below
    "7.4", while "7.4.1-rc-1" is above it.
    """
    if not isinstance(gradle_version, str):
        raise TypeError(f"is_supported: expected str, got {type(gradle_version).__name__}")
    return _version_tuple(gradle_version, where="gradle_version") >= _version_tuple(minimum, where="minimum")
