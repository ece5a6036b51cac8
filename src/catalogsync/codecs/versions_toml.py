"""Gradle version catalog (`libs.versions.toml`) codec.

Parsing is shallow and lossless: the text is split into sections by
`[name]` headers and every body line is kept verbatim as a raw line.

- text before the first header is the synthetic `root` section (rendered
  without a header, always first)
- a repeated header starts a fresh body: the later body wins, the earlier
  position is kept
- a line like `[versions` (no closing bracket) is ordinary content

Rendering emits sections in document order, raw lines verbatim and generated
lines as `key = "value"` / `key = { field = "value", ... }`. The output ends
with exactly one newline; an empty document renders as "".

Parse-then-render with no merge in between reproduces the input, except that
`\\r\\n`/`\\r` become `\\n` and a missing final newline is added.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

from catalogsync.core.config import CatalogConfig, FeatureFlags
from catalogsync.core.merge import merge_catalog
from catalogsync.core.model import CatalogDocument, GeneratedLine, ModuleId, SectionKind

# Import internal helpers from private modules
from catalogsync.codecs._toml_parser import (
    _build_document,
    _library_coordinates,
    _parse_entry,
    _split_sections,
)
from catalogsync.codecs._toml_writer import _format_document

logger = logging.getLogger(__name__)

LIBS_VERSIONS_TOML = "gradle/libs.versions.toml"


# ----------------------------
# Public API
# ----------------------------


def parse_catalog_text(text: str) -> CatalogDocument:
    """Parse catalog text into an order-preserving `CatalogDocument`."""
    if not isinstance(text, str):
        raise TypeError(f"parse_catalog_text: expected str, got {type(text).__name__}")
    return _build_document(_split_sections(text))


def render_catalog(doc: CatalogDocument) -> str:
    """Render a `CatalogDocument` back to text."""
    if not isinstance(doc, CatalogDocument):
        raise TypeError(f"render_catalog: expected CatalogDocument, got {type(doc).__name__}")
    lines = _format_document(doc)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def read_catalog(path: str | Path) -> CatalogDocument:
    """Read and parse a catalog file; a missing file yields an empty document."""
    p = Path(path)
    if not p.exists():
        logger.info("%s does not exist yet; starting from an empty catalog", p)
        return CatalogDocument()
    return parse_catalog_text(p.read_text(encoding="utf-8"))


def write_catalog(path: str | Path, doc: CatalogDocument) -> None:
    """Render and write a catalog file (UTF-8, `\\n` newlines)."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    # Use newline="" to prevent newline translation.
    with out_path.open("w", encoding="utf-8", newline="") as f:
        f.write(render_catalog(doc))
    logger.info("wrote %s", out_path)


def generate_catalog_text(
    current_text: str,
    library_names: Mapping[ModuleId, str],
    plugins: Sequence[ModuleId],
    config: CatalogConfig,
) -> str:
    """Parse `current_text`, merge the observed dependencies/plugins, and render."""
    doc = parse_catalog_text(current_text)
    merge_catalog(doc, library_names, plugins, config)
    return render_catalog(doc)


def library_aliases(doc: CatalogDocument, flags: FeatureFlags | None = None) -> dict[ModuleId, str]:
    """Map each `[libraries]` entry to its accessor (`ModuleId(group, name) -> "libs.<alias>"`).

    Alias separators `-` and `_` are normalized to `.`, matching generated
    accessors. Entries that are not simple string or inline-table declarations
    are skipped. Returns {} when the version catalog feature is disabled.
    """
    flags = flags or FeatureFlags()
    if not flags.versions_catalog:
        return {}
    section = doc.get(SectionKind.LIBRARIES)
    if section is None:
        return {}

    out: dict[ModuleId, str] = {}
    for line in section.lines:
        if isinstance(line, GeneratedLine):
            alias, value = line.key, (dict(line.fields) if line.is_table else line.value)
        else:
            entry = _parse_entry(line.text)
            if entry is None:
                continue
            alias, value = entry
        coords = _library_coordinates(value)
        if coords is None:
            continue
        accessor = alias.replace("-", ".").replace("_", ".")
        out[ModuleId(coords[0], coords[1])] = f"libs.{accessor}"
    return out


__all__ = [
    "LIBS_VERSIONS_TOML",
    "generate_catalog_text",
    "library_aliases",
    "parse_catalog_text",
    "read_catalog",
    "render_catalog",
    "write_catalog",
]
