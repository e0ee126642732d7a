"""CLI tools: sitsync run, sitsync check, sitsync init."""

from importlib import metadata

import typer

from sitsync.cli.check import check_command
from sitsync.cli.init_config import init_config_command
from sitsync.cli.run import run_command

app = typer.Typer(
    name="sitsync",
    help="Sync keyword dictionaries and publish the SIT rule pack.",
    no_args_is_help=True,
)


def _print_version_and_exit(value: bool) -> None:
    """Print installed package version and exit."""
    if not value:
        return
    try:
        version = metadata.version("sitsync")
    except metadata.PackageNotFoundError:
        version = "unknown"
    typer.echo(f"sitsync {version}")
    raise typer.Exit(0)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version_and_exit,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """sitsync command group."""


app.command("run")(run_command)
app.command("check")(check_command)


@app.command("init")
def init_command(
    path: str = typer.Option(".", "--path", help="Output directory"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing sitsync.yaml"),
) -> None:
    """Generate default sitsync.yaml in target directory."""
    try:
        init_config_command(path=path, force=force)
    except FileExistsError as exc:
        typer.secho(f"error: {exc}", fg="red", err=True)
        raise typer.Exit(code=2) from None


def main() -> None:
    """Console-script entry point."""
    app()
