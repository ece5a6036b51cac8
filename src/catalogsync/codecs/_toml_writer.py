"""Internal writer helpers for the version catalog codec.

This module contains the rendering logic:
- TOML basic-string quoting
- generated entry formatting (`key = "v"` / `key = { f = "v", ... }`)
- section and document layout

This is a private module; public API is in `versions_toml.py`.
"""

from __future__ import annotations

from catalogsync.core.model import CatalogDocument, GeneratedLine, Line, RawLine, Section


def _quote(value: str) -> str:
    """TOML basic string (locked in tests)."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _format_generated_line(line: GeneratedLine) -> str:
    """Format a generated entry.

    Examples:
        kotlin = "1.6.10"
        okhttp = { group = "com.squareup.okhttp3", name = "okhttp", version.ref = "okhttp" }
    """
    if not line.is_table:
        return f"{line.key} = {_quote(str(line.value))}"
    inner = ", ".join(f"{k} = {_quote(v)}" for k, v in line.fields)
    return f"{line.key} = {{ {inner} }}"


def _format_line(line: Line) -> str:
    if isinstance(line, RawLine):
        return line.text
    if isinstance(line, GeneratedLine):
        return _format_generated_line(line)
    raise TypeError(f"catalog line: expected RawLine or GeneratedLine, got {type(line).__name__}")


def _format_section(section: Section) -> list[str]:
    """Header (except for root) followed by the body lines."""
    lines: list[str] = [] if section.kind.is_root else [f"[{section.name}]"]
    lines.extend(_format_line(x) for x in section.lines)
    return lines


def _format_document(doc: CatalogDocument) -> list[str]:
    lines: list[str] = []
    for section in doc:
        lines.extend(_format_section(section))
    return lines
