"""catalogsync: keep a Gradle version catalog in step with the build.

Parses `gradle/libs.versions.toml` into an order-preserving document, merges
freshly observed dependencies and plugins into it without touching manual
edits, and renders it back deterministically.
"""

from __future__ import annotations

from catalogsync.codecs.versions_toml import generate_catalog_text, parse_catalog_text, render_catalog
from catalogsync.core import CatalogConfig, CatalogDocument, ModuleId, merge_catalog

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CatalogConfig",
    "CatalogDocument",
    "ModuleId",
    "generate_catalog_text",
    "merge_catalog",
    "parse_catalog_text",
    "render_catalog",
]
