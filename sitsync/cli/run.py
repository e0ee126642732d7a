"""sitsync run: sync dictionaries, inject identities, bump version, publish."""

from __future__ import annotations

import typer

from sitsync.cli.context import build_service, configure_logging, fail, load_context
from sitsync.exceptions import (
    ConfigurationError,
    InvalidInputError,
    MissingInputError,
    PhaseError,
    SitSyncError,
)
from sitsync.runner import RunOptions, RunReport, SyncRunner


def _echo(message: str, *, color: str | None = None, err: bool = False) -> None:
    typer.secho(message, fg=color, err=err)


def render_report(report: RunReport, rule_pack: str) -> None:
    prefix = "[preview] " if report.preview else ""
    if report.dictionaries:
        _echo(f"{prefix}Dictionaries", color="blue")
        for outcome in report.dictionaries.values():
            identity = outcome.identity or "-"
            _echo(f"  {outcome.name}: {outcome.action} ({identity})")
            if outcome.identity_changed:
                _echo(f"    identity changed from {outcome.previous_identity}", color="yellow")
    if report.patch is not None:
        _echo(f"{prefix}Rule pack {rule_pack}", color="blue")
        for line in report.patch.summary_lines():
            _echo(f"  {line}")
        if report.written:
            _echo("  written", color="green")
        elif report.patch.changed:
            _echo("  not written (preview)")
    if report.publish is not None:
        _echo(f"{prefix}Publish", color="blue")
        _echo(f"  {report.publish.describe()}", color="green")
    for warning in report.warnings:
        _echo(f"warning: {warning}", color="yellow")


def run_command(
    ensure_dictionaries: bool = typer.Option(
        False, "--ensure-dictionaries", help="Create or update remote keyword dictionaries."
    ),
    inject: bool = typer.Option(False, "--inject", help="Replace placeholder tokens with dictionary identities."),
    bump_version: bool = typer.Option(False, "--bump-version", help="Increment the rule pack build number."),
    import_pack: bool = typer.Option(False, "--import", help="Import the rule pack as a new package."),
    update_pack: bool = typer.Option(False, "--update", help="Update the existing rule package."),
    preview: bool = typer.Option(False, "--preview", help="Report changes without writing or mutating anything."),
    auto_fallback: bool | None = typer.Option(
        None,
        "--auto-fallback/--no-auto-fallback",
        help="Import when an update reports the package does not exist (default from config).",
    ),
    root: str = typer.Option("", "--root", help="Repository root (default: config file directory, else cwd)."),
    config: str = typer.Option("", "--config", help="Optional config file path."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Run the selected phases in order: dictionaries, patch, publish."""
    configure_logging(verbose)
    options = RunOptions(
        ensure_dictionaries=ensure_dictionaries,
        inject=inject,
        bump_version=bump_version,
        import_pack=import_pack,
        update_pack=update_pack,
        preview=preview,
        auto_fallback=auto_fallback,
    )
    try:
        options.validate()
    except ConfigurationError as exc:
        raise fail(str(exc), 2) from None

    ctx = load_context(config, root)
    service = None
    try:
        service = build_service(ctx.config) if options.needs_service else None
        report = SyncRunner(ctx.config, ctx.root, service).run(options)
    except (ConfigurationError, MissingInputError, InvalidInputError) as exc:
        raise fail(str(exc), 2) from None
    except PhaseError as exc:
        raise fail(str(exc), 1) from None
    except SitSyncError as exc:
        raise fail(str(exc), 1) from None
    finally:
        close = getattr(service, "close", None)
        if callable(close):
            close()
    render_report(report, ctx.config.paths.rule_pack)
