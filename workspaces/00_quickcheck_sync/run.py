"""Quickcheck workspace: passthrough -> sync -> re-sync -> report.

This workspace is self-contained (no repo-level assets required). It writes a
small hand-edited catalog under `workspaces/00_quickcheck_sync/outputs/`,
checks that parse/render is lossless, merges a synthetic build state into it
twice, and writes a JSON report.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from catalogsync.codecs.versions_toml import parse_catalog_text, read_catalog, render_catalog, write_catalog
from catalogsync.core.merge import merge_catalog
from catalogsync.io.build_state import build_state_from_obj


def _fixture_catalog_text() -> str:
    # Mirrors the test fixture: comments, blanks, an unknown-to-the-merger section.
    return "\n".join(
        [
            "# Managed by hand and by catalogsync.",
            "",
            "[versions]",
            'kotlin = "1.6.10"  # pinned',
            "",
            "[libraries]",
            'junit = { group = "junit", name = "junit", version = "4.13.2" }',
            "",
            "[bundles]",
            'testing = ["junit"]',
        ]
    ) + "\n"


def _fixture_state() -> dict[str, Any]:
    return {
        "dependencies": [
            {"group": "com.squareup.okhttp3", "name": "okhttp", "version": "4.9.0", "alias": "okhttp"},
            {"group": "org.jetbrains.kotlinx", "name": "kotlinx-coroutines-core", "version": "1.6.0", "alias": "coroutines-core"},
            {"group": "org.jetbrains.kotlinx", "name": "kotlinx-coroutines-android", "version": "1.6.0", "alias": "coroutines-android"},
            {"group": "com.example", "name": "lib", "version": "1.0", "alias": "example-lib"},
        ],
        "plugins": [
            {"group": "io.gitlab.arturbosch.detekt", "name": "io.gitlab.arturbosch.detekt.gradle.plugin", "version": "1.19.0"},
        ],
        "versions": {"version.okhttp3": "4.9.3"},
        "version_keys": {
            "com.squareup.okhttp3:okhttp": "version.okhttp3",
            "org.jetbrains.kotlinx:kotlinx-coroutines-core": "version.kotlinx.coroutines",
            "org.jetbrains.kotlinx:kotlinx-coroutines-android": "version.kotlinx.coroutines",
            "com.example:lib": "version.com.example..lib",
        },
    }


def _is_subsequence(needle: list[str], haystack: list[str]) -> bool:
    it = iter(haystack)
    return all(any(x == y for y in it) for x in needle)


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main() -> None:
    here = Path(__file__).resolve().parent
    outputs = here / "outputs"
    outputs.mkdir(parents=True, exist_ok=True)

    src_text = _fixture_catalog_text()
    ok_passthrough = render_catalog(parse_catalog_text(src_text)) == src_text

    catalog_path = outputs / "gradle" / "libs.versions.toml"
    catalog_path.parent.mkdir(parents=True, exist_ok=True)
    catalog_path.write_text(src_text, encoding="utf-8")

    state = build_state_from_obj(_fixture_state())
    config = state.to_config()

    doc1 = merge_catalog(read_catalog(catalog_path), state.library_names, state.plugins, config)
    write_catalog(catalog_path, doc1)
    text1 = catalog_path.read_text(encoding="utf-8")

    doc2 = merge_catalog(read_catalog(catalog_path), state.library_names, state.plugins, config)
    text2 = render_catalog(doc2)

    # Manual content must survive untouched; a second run only appends.
    ok_preserved = all(line in text1.splitlines() for line in src_text.splitlines() if line)
    ok_append_only = _is_subsequence(text1.splitlines(), text2.splitlines())

    report = {
        "catalog_path": str(catalog_path),
        "passthrough_identical": ok_passthrough,
        "manual_lines_preserved": ok_preserved,
        "append_only": ok_append_only,
        "first_run_lines": len(text1.splitlines()),
        "second_run_lines": len(text2.splitlines()),
        "shared_version_lines": [x for x in text1.splitlines() if x.startswith(("okhttp3 =", "kotlinx-coroutines ="))],
    }
    _write_json(outputs / "sync_report.json", report)

    if not (ok_passthrough and ok_preserved and ok_append_only):
        raise SystemExit("quickcheck failed; see outputs/sync_report.json")


if __name__ == "__main__":
    main()
