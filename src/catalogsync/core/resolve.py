"""Resolver: decide which dependencies share a named `[versions]` entry.

Rules:
- Only dependencies with a group are considered.
- The canonical version key comes from `CatalogConfig.version_key_of`. A key that
  is missing, contains `..`, or starts with `plugin` disables sharing; the
  dependency then gets an inline version.
- The shared value is the recorded value for the key (`versions_map`), falling
  back to the dependency's own declared version.
- The displayed key drops the `version.` prefix and uses `-` as separator
  (`version.kotlinx.coroutines` -> `kotlinx-coroutines`).
"""

from __future__ import annotations

import logging
from typing import Iterable

from catalogsync.core.config import CatalogConfig
from catalogsync.core.model import ModuleId, VersionRef

logger = logging.getLogger(__name__)

VERSION_KEY_PREFIX = "version."
PLUGIN_KEY_PREFIX = "plugin"
_DOUBLE_SEPARATOR = ".."


def is_shareable_key(version_key: str | None) -> bool:
    """Return True if a canonical key may back a shared version reference."""
    if not version_key:
        return False
    return _DOUBLE_SEPARATOR not in version_key and not version_key.startswith(PLUGIN_KEY_PREFIX)


def version_ref_key(version_key: str) -> str:
    """Map a canonical key to its catalog identifier."""
    key = version_key[len(VERSION_KEY_PREFIX):] if version_key.startswith(VERSION_KEY_PREFIX) else version_key
    return key.replace(".", "-")


def _shared_ref(module: ModuleId, config: CatalogConfig) -> tuple[str | None, VersionRef | None]:
    """Look up the canonical key once and resolve it.

    Returns `(version_key, ref)`; version_key is None when the dependency has
    no group or its key is not shareable.
    """
    if module.group is None:
        logger.debug("%s: no group; skipped by resolver", module.name)
        return None, None
    version_key = config.version_key(module)
    if version_key is None or not is_shareable_key(version_key):
        logger.debug("%s: version key %r is not shareable; using inline version", module.module_key, version_key)
        return None, None
    version = config.versions_map.get(version_key, module.version)
    if version is None:
        return version_key, None
    return version_key, VersionRef(key=version_ref_key(version_key), version=version)


def resolve_version_ref(module: ModuleId, config: CatalogConfig) -> VersionRef | None:
    """Resolve the shared version reference for one dependency (pure).

    Returns None when the dependency must use an inline version.
    """
    return _shared_ref(module, config)[1]


def resolve_version_refs(modules: Iterable[ModuleId], config: CatalogConfig) -> dict[ModuleId, VersionRef | None]:
    """Resolve version references for a dependency set.

    Returns:
        mapping with one entry per dependency that has a group and a shareable
        key; the value is None when no version could be found. Dependencies
        absent from the mapping always use an inline version.
    """
    out: dict[ModuleId, VersionRef | None] = {}
    for module in modules:
        version_key, ref = _shared_ref(module, config)
        if version_key is not None:
            out[module] = ref
    return out


__all__ = [
    "PLUGIN_KEY_PREFIX",
    "VERSION_KEY_PREFIX",
    "is_shareable_key",
    "resolve_version_ref",
    "resolve_version_refs",
    "version_ref_key",
]
