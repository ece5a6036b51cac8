"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import catalogsync` to fail.

We ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers for catalog tests
# =============================================================================


def make_config(
    version_keys: dict[str, str] | None = None,
    versions: dict[str, str] | None = None,
    with_versions: bool = True,
) -> Any:
    """Create a CatalogConfig from a `"group:name" -> key` table."""
    from catalogsync.core.config import CatalogConfig

    return CatalogConfig.from_key_table(version_keys or {}, versions_map=versions or {}, with_versions=with_versions)


def make_state_obj(
    dependencies: list[dict[str, Any]] | None = None,
    plugins: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Create a minimal build state JSON object."""
    obj: dict[str, Any] = {
        "dependencies": dependencies or [],
        "plugins": plugins or [],
    }
    obj.update(extra)
    return obj


def catalog_fixture_text() -> str:
    """A hand-edited catalog with comments, blank lines and an unknown section."""
    return "\n".join(
        [
            "# Managed by hand and by catalogsync.",
            "",
            "[versions]",
            'kotlin = "1.6.10"  # pinned',
            "",
            "[libraries]",
            'junit = { group = "junit", name = "junit", version = "4.13.2" }',
            'guava = "com.google.guava:guava:31.0-jre"',
            "",
            "[bundles]",
            'testing = ["junit"]',
            "",
            "[plugins]",
            'detekt = { id = "io.gitlab.arturbosch.detekt", version = "1.19.0" }',
        ]
    ) + "\n"
