"""Merger: fold observed dependencies and plugins into a catalog document.

Processing order is fixed: `[plugins]`, then `[libraries]`, then `[versions]`.
Generated lines are appended to the end of their section, each preceded by a
blank line. Nothing already in the document is removed, reordered or rewritten;
a second run over the same document appends again.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from catalogsync.core.config import CatalogConfig
from catalogsync.core.model import (
    BLANK_LINE,
    CatalogDocument,
    GeneratedLine,
    Line,
    ModuleId,
    SectionKind,
    VersionRef,
)
from catalogsync.core.resolve import resolve_version_refs

logger = logging.getLogger(__name__)

PLUGIN_MARKER_SUFFIX = ".gradle.plugin"
# Library filter matches the looser suffix (no leading dot).
_PLUGIN_LIBRARY_SUFFIX = "gradle.plugin"

PLACEHOLDER_VERSION = "_"


def _with_separators(lines: Iterable[GeneratedLine]) -> list[Line]:
    out: list[Line] = []
    for line in lines:
        out.append(BLANK_LINE)
        out.append(line)
    return out


def plugin_id(module: ModuleId) -> str:
    """Plugin id of a plugin-marker artifact (`com.foo.bar.gradle.plugin` -> `com.foo.bar`)."""
    name = module.name
    if name.endswith(PLUGIN_MARKER_SUFFIX):
        return name[: -len(PLUGIN_MARKER_SUFFIX)]
    return name


def is_plugin_marker(module: ModuleId) -> bool:
    return module.group is not None and module.name.endswith(_PLUGIN_LIBRARY_SUFFIX)


def plugin_lines(
    plugins: Sequence[ModuleId],
    version_refs: Mapping[ModuleId, VersionRef | None],
) -> list[GeneratedLine]:
    """Build `[plugins]` entries: `alias = { id = "...", version[.ref] = "..." }`.

    Plugins are deduplicated by `group:name` (first wins); unversioned plugins are dropped.
    """
    seen: set[str] = set()
    lines: list[GeneratedLine] = []
    for module in plugins:
        if module.module_key in seen:
            continue
        seen.add(module.module_key)
        if module.version is None:
            logger.debug("plugin %s: no version; skipped", module.module_key)
            continue

        pid = plugin_id(module)
        ref = version_refs.get(module)
        version_field = ("version.ref", ref.key) if ref is not None else ("version", module.version)
        lines.append(GeneratedLine.table(pid.replace(".", "-"), [("id", pid), version_field]))
    return lines


def _inline_version(module: ModuleId, config: CatalogConfig) -> str | None:
    if module.version is None:
        return None
    if not config.with_versions:
        return PLACEHOLDER_VERSION
    version_key = config.version_key(module)
    if version_key is not None and version_key in config.versions_map:
        return config.versions_map[version_key]
    return module.version


def library_lines(
    library_names: Mapping[ModuleId, str],
    version_refs: Mapping[ModuleId, VersionRef | None],
    config: CatalogConfig,
) -> list[GeneratedLine]:
    """Build `[libraries]` entries: `alias = { group, name, version | version.ref }`.

    Plugin-marker artifacts are skipped (they belong to `[plugins]`), as are
    dependencies without a group.
    """
    lines: list[GeneratedLine] = []
    for module, alias in library_names.items():
        if is_plugin_marker(module):
            continue
        if module.group is None:
            logger.debug("library %s: no group; skipped", module.name)
            continue

        if module in version_refs:
            ref = version_refs[module]
            version_field: tuple[str, str | None] = ("version.ref", ref.key if ref is not None else None)
        else:
            version_field = ("version", _inline_version(module, config))
        lines.append(
            GeneratedLine.table(alias, [("group", module.group), ("name", module.name), version_field])
        )
    return lines


def version_lines(
    modules: Iterable[ModuleId],
    version_refs: Mapping[ModuleId, VersionRef | None],
) -> list[GeneratedLine]:
    """Build one `key = "value"` entry per distinct reference key (first dependency wins)."""
    seen: set[str] = set()
    lines: list[GeneratedLine] = []
    for module in modules:
        ref = version_refs.get(module)
        if ref is None or ref.key in seen:
            continue
        seen.add(ref.key)
        lines.append(GeneratedLine(ref.key, value=ref.version))
    return lines


def merge_catalog(
    doc: CatalogDocument,
    library_names: Mapping[ModuleId, str],
    plugins: Sequence[ModuleId],
    config: CatalogConfig,
) -> CatalogDocument:
    """Merge freshly observed dependencies and plugins into `doc` (mutated and returned).

    Args:
        doc: freshly parsed catalog document.
        library_names: dependency -> caller-assigned library alias, in output order.
        plugins: applied plugin-marker dependencies.
        config: run configuration (recorded versions, naming function, version mode).
    """
    if not isinstance(doc, CatalogDocument):
        raise TypeError(f"merge_catalog: doc must be CatalogDocument, got {type(doc).__name__}")
    if not isinstance(config, CatalogConfig):
        raise TypeError(f"merge_catalog: config must be CatalogConfig, got {type(config).__name__}")

    version_refs = resolve_version_refs(library_names.keys(), config)

    new_plugins = plugin_lines(plugins, version_refs)
    new_libraries = library_lines(library_names, version_refs, config)
    new_versions = version_lines(library_names.keys(), version_refs)

    doc.merge(SectionKind.PLUGINS, _with_separators(new_plugins))
    doc.merge(SectionKind.LIBRARIES, _with_separators(new_libraries))
    doc.merge(SectionKind.VERSIONS, _with_separators(new_versions))

    logger.info(
        "merged %d plugin(s), %d librar(y/ies), %d version(s)",
        len(new_plugins),
        len(new_libraries),
        len(new_versions),
    )
    return doc


__all__ = [
    "PLACEHOLDER_VERSION",
    "PLUGIN_MARKER_SUFFIX",
    "is_plugin_marker",
    "library_lines",
    "merge_catalog",
    "plugin_id",
    "plugin_lines",
    "version_lines",
]
