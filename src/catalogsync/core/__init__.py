"""catalogsync core: document model, resolver and merger.

This package is intentionally standalone and must not import CLI/codecs/io
to avoid circular dependencies.
"""

from __future__ import annotations

from .config import MINIMUM_GRADLE_VERSION, CatalogConfig, FeatureFlags, is_supported
from .merge import PLACEHOLDER_VERSION, merge_catalog
from .model import (
    BLANK_LINE,
    CatalogDocument,
    GeneratedLine,
    Line,
    ModuleId,
    RawLine,
    Section,
    SectionKind,
    VersionRef,
)
from .resolve import resolve_version_ref, resolve_version_refs

__all__ = [
    "BLANK_LINE",
    "CatalogConfig",
    "CatalogDocument",
    "FeatureFlags",
    "GeneratedLine",
    "Line",
    "MINIMUM_GRADLE_VERSION",
    "ModuleId",
    "PLACEHOLDER_VERSION",
    "RawLine",
    "Section",
    "SectionKind",
    "VersionRef",
    "is_supported",
    "merge_catalog",
    "resolve_version_ref",
    "resolve_version_refs",
]
