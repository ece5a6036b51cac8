"""`catalogsync aliases` command.

Lists the accessor of every library declared in the catalog, one
`group:name=libs.alias` line per entry, sorted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from catalogsync.codecs.versions_toml import LIBS_VERSIONS_TOML, library_aliases, read_catalog


def register(app: typer.Typer) -> None:
    @app.command("aliases")
    def aliases(
        project_dir: str = typer.Option(".", "--project-dir", help="Project root holding gradle/libs.versions.toml."),
        catalog: Optional[str] = typer.Option(None, "--catalog", help="Catalog path (overrides --project-dir)."),
    ) -> None:
        """Print library accessors declared in the version catalog."""
        path = Path(catalog) if catalog else Path(project_dir) / LIBS_VERSIONS_TOML
        if not path.exists():
            raise typer.BadParameter(f"catalog not found: {path}")

        found = library_aliases(read_catalog(path))
        for module_key, accessor in sorted((m.module_key, a) for m, a in found.items()):
            typer.echo(f"{module_key}={accessor}")
