"""`catalogsync sync` command.

Merges the dependencies and plugins recorded in a build state JSON into the
project's version catalog:
- reads `gradle/libs.versions.toml` (or `--catalog`); a missing file starts empty
- appends new `[plugins]`, `[libraries]` and `[versions]` entries
- writes the catalog back (or prints it with `--dry-run`)

Guards (checked before the engine runs):
- `features.versions_catalog` off: nothing is read or written (exit code 0)
- `gradle_version` below the minimum: exit code 2
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from catalogsync.codecs.versions_toml import LIBS_VERSIONS_TOML, read_catalog, render_catalog, write_catalog
from catalogsync.core.config import MINIMUM_GRADLE_VERSION, is_supported
from catalogsync.core.merge import merge_catalog
from catalogsync.io.build_state import read_build_state_json

logger = logging.getLogger(__name__)


def _resolve_catalog_path(*, project_dir: str, catalog: Optional[str]) -> Path:
    if catalog:
        return Path(catalog)
    return Path(project_dir) / LIBS_VERSIONS_TOML


def register(app: typer.Typer) -> None:
    @app.command("sync")
    def sync(
        state: str = typer.Option(..., "--state", help="Build state JSON (dependencies, plugins, versions)."),
        project_dir: str = typer.Option(".", "--project-dir", help="Project root holding gradle/libs.versions.toml."),
        catalog: Optional[str] = typer.Option(None, "--catalog", help="Catalog path (overrides --project-dir)."),
        placeholder_versions: bool = typer.Option(
            False,
            "--placeholder-versions",
            help='Write "_" instead of concrete inline library versions.',
        ),
        dry_run: bool = typer.Option(False, "--dry-run", help="Print the merged catalog instead of writing it."),
    ) -> None:
        """Merge build dependencies and plugins into the version catalog."""
        try:
            build_state = read_build_state_json(state)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e

        if not build_state.features.versions_catalog:
            typer.echo("versions catalog feature is disabled; nothing to do")
            return

        if build_state.gradle_version is not None:
            try:
                supported = is_supported(build_state.gradle_version)
            except ValueError as e:
                raise typer.BadParameter(str(e)) from e
            if not supported:
                typer.echo(
                    f"Gradle {build_state.gradle_version} does not support version catalogs "
                    f"(requires {MINIMUM_GRADLE_VERSION}+)",
                    err=True,
                )
                raise typer.Exit(code=2)

        config = build_state.to_config(with_versions=False if placeholder_versions else None)
        catalog_path = _resolve_catalog_path(project_dir=project_dir, catalog=catalog)
        logger.debug("catalog path: %s (with_versions=%s)", catalog_path, config.with_versions)

        doc = read_catalog(catalog_path)
        merge_catalog(doc, build_state.library_names, build_state.plugins, config)

        if dry_run:
            typer.echo(render_catalog(doc), nl=False)
            return

        write_catalog(catalog_path, doc)
        typer.echo(str(catalog_path))
