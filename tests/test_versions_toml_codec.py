from __future__ import annotations

from pathlib import Path

import pytest

from conftest import catalog_fixture_text

from catalogsync.codecs.versions_toml import parse_catalog_text, read_catalog, render_catalog, write_catalog
from catalogsync.core.model import CatalogDocument, GeneratedLine, RawLine, SectionKind


def _bodies(doc: CatalogDocument) -> dict[str, list[str]]:
    return {s.name: [line.text for line in s.lines] for s in doc}  # type: ignore[union-attr]


def test_parse_splits_sections_in_source_order() -> None:
    doc = parse_catalog_text(catalog_fixture_text())

    assert [k.name for k in doc.kinds] == ["root", "versions", "libraries", "bundles", "plugins"]
    bodies = _bodies(doc)
    assert bodies["root"] == ["# Managed by hand and by catalogsync.", ""]
    assert bodies["versions"] == ['kotlin = "1.6.10"  # pinned', ""]
    assert bodies["plugins"] == ['detekt = { id = "io.gitlab.arturbosch.detekt", version = "1.19.0" }']
    assert all(isinstance(line, RawLine) for s in doc for line in s.lines)


def test_parse_then_render_is_identity() -> None:
    text = catalog_fixture_text()
    assert render_catalog(parse_catalog_text(text)) == text


def test_render_adds_missing_final_newline_and_normalizes_crlf() -> None:
    assert render_catalog(parse_catalog_text("[versions]\na = \"1\"")) == '[versions]\na = "1"\n'
    assert render_catalog(parse_catalog_text("[versions]\r\na = \"1\"\r\n")) == '[versions]\na = "1"\n'


def test_trailing_blank_lines_survive_roundtrip() -> None:
    text = '[versions]\na = "1"\n\n\n'
    assert render_catalog(parse_catalog_text(text)) == text


def test_empty_text_renders_empty() -> None:
    doc = parse_catalog_text("")
    assert doc.kinds == [SectionKind.ROOT]
    assert render_catalog(doc) == ""


def test_header_detection_uses_trimmed_line() -> None:
    doc = parse_catalog_text("  [versions]  \nx = \"1\"\n")
    assert doc.get(SectionKind.VERSIONS) is not None
    # Headers are re-emitted in canonical form.
    assert render_catalog(doc) == '[versions]\nx = "1"\n'


def test_malformed_header_is_ordinary_content() -> None:
    doc = parse_catalog_text('[versions\na = "1"\n')

    assert doc.kinds == [SectionKind.ROOT]
    assert _bodies(doc)["root"] == ["[versions", 'a = "1"']


def test_duplicate_header_later_body_wins_at_first_position() -> None:
    text = "\n".join(
        [
            "[libraries]",
            'first = "a:b:1"',
            "[versions]",
            'v = "1"',
            "[libraries]",
            'second = "c:d:2"',
        ]
    ) + "\n"

    doc = parse_catalog_text(text)

    assert [k.name for k in doc.kinds] == ["root", "libraries", "versions"]
    assert _bodies(doc)["libraries"] == ['second = "c:d:2"']
    assert render_catalog(doc) == '[libraries]\nsecond = "c:d:2"\n[versions]\nv = "1"\n'


def test_unknown_section_kind_roundtrips_by_name() -> None:
    doc = parse_catalog_text('[metadata]\nformat.version = "1.1"\n')

    kind = doc.kinds[1]
    assert kind == SectionKind.other("metadata")
    assert not kind.is_known
    assert render_catalog(doc) == '[metadata]\nformat.version = "1.1"\n'


def test_root_header_addresses_the_implicit_root_section() -> None:
    doc = parse_catalog_text('top\n[root]\nreplaced\n[versions]\nv = "1"\n')

    assert _bodies(doc)["root"] == ["replaced"]
    assert render_catalog(doc) == 'replaced\n[versions]\nv = "1"\n'


def test_render_generated_lines_quotes_and_escapes() -> None:
    doc = CatalogDocument()
    doc.merge(SectionKind.VERSIONS, [GeneratedLine("odd", value='a"b\\c')])
    doc.merge(
        SectionKind.LIBRARIES,
        [GeneratedLine.table("okhttp", [("group", "com.squareup.okhttp3"), ("name", "okhttp"), ("version.ref", "okhttp")])],
    )

    assert render_catalog(doc) == (
        "[versions]\n"
        'odd = "a\\"b\\\\c"\n'
        "[libraries]\n"
        'okhttp = { group = "com.squareup.okhttp3", name = "okhttp", version.ref = "okhttp" }\n'
    )


def test_generated_table_drops_none_fields() -> None:
    line = GeneratedLine.table("x", [("group", "g"), ("name", "n"), ("version", None)])
    assert line.fields == (("group", "g"), ("name", "n"))
    assert line.field_value("version") is None


def test_parse_rejects_non_string() -> None:
    with pytest.raises(TypeError, match=r"parse_catalog_text: expected str"):
        parse_catalog_text(b"[versions]")  # type: ignore[arg-type]


def test_read_missing_file_is_empty_document_and_write_is_deterministic(tmp_path: Path) -> None:
    assert read_catalog(tmp_path / "nope.toml").kinds == [SectionKind.ROOT]

    doc = parse_catalog_text(catalog_fixture_text())
    p1 = tmp_path / "a" / "libs.versions.toml"
    p2 = tmp_path / "b" / "libs.versions.toml"
    write_catalog(p1, doc)
    write_catalog(p2, read_catalog(p1))

    assert p1.read_bytes() == p2.read_bytes()
    assert p1.read_text(encoding="utf-8") == catalog_fixture_text()
