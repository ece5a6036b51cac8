"""catalogsync CLI entrypoint."""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="catalogsync",
    add_completion=False,
    no_args_is_help=True,
    help="Synchronize build dependencies and plugins with gradle/libs.versions.toml.",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
) -> None:
    """catalogsync CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("version")
def version() -> None:
    """Print the installed catalogsync version."""
    from catalogsync import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `catalogsync --help` is fast.
    """
    from catalogsync.cli.commands import aliases as aliases_cmd
    from catalogsync.cli.commands import sync_catalog as sync_catalog_cmd

    sync_catalog_cmd.register(app)
    aliases_cmd.register(app)


_register_commands()
