"""Internal parsing helpers for the version catalog codec.

Private module for parsing logic; public API is in `versions_toml.py`.
"""
from __future__ import annotations

import re
import sys
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from catalogsync.core.model import CatalogDocument, RawLine, SectionKind

_NEWLINE_RE = re.compile(r"\r\n|\r")


def _split_lines(text: str) -> list[str]:
    """Split catalog text into lines; a final newline does not yield an empty last line."""
    lines = _NEWLINE_RE.sub("\n", text).split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _section_header_name(line: str) -> str | None:
    s = line.strip()
    if s.startswith("[") and s.endswith("]") and len(s) >= 2:
        return s[1:-1]
    return None


def _split_sections(text: str) -> list[tuple[str, list[str]]]:
    """Split catalog text into `(section_name, body_lines)` blocks.

    Notes:
        - Lines before the first header belong to the synthetic `root` section.
        - A repeated header starts a fresh body; the later body replaces the
          earlier one but keeps the earlier position.
        - Body lines are kept verbatim (no trailing newline).
    """
    blocks: dict[str, list[str]] = {"root": []}
    current = blocks["root"]
    for line in _split_lines(text):
        name = _section_header_name(line)
        if name is not None:
            current = []
            blocks[name] = current
        else:
            current.append(line)
    return list(blocks.items())


def _build_document(blocks: list[tuple[str, list[str]]]) -> CatalogDocument:
    doc = CatalogDocument()
    for name, body in blocks:
        doc.replace(SectionKind.from_name(name), [RawLine(x) for x in body])
    return doc


# ----------------------------
# Entry-level helpers
# ----------------------------


def _parse_entry(line: str) -> tuple[str, Any] | None:
    """Parse one `alias = ...` line with a TOML parser.

    Returns:
        `(alias, value)` where value is the decoded string or inline table, or
        None for blanks, comments, multi-key lines and anything that is not
        valid TOML on its own.
    """
    if not line.strip() or line.lstrip().startswith("#"):
        return None
    try:
        data = tomllib.loads(line)
    except tomllib.TOMLDecodeError:
        return None
    if len(data) != 1:
        return None
    alias, value = next(iter(data.items()))
    return alias, value


def _library_coordinates(value: Any) -> tuple[str, str] | None:
    """Extract `(group, name)` from a `[libraries]` entry value."""
    if isinstance(value, str):
        parts = value.split(":")
        if len(parts) in (2, 3) and parts[0] and parts[1]:
            return parts[0], parts[1]
        return None
    if isinstance(value, dict):
        module = value.get("module")
        if isinstance(module, str):
            parts = module.split(":")
            if len(parts) == 2 and parts[0] and parts[1]:
                return parts[0], parts[1]
            return None
        group = value.get("group")
        name = value.get("name")
        if isinstance(group, str) and isinstance(name, str) and group and name:
            return group, name
    return None
