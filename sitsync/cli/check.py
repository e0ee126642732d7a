"""sitsync check: read-only report on keyword lists and rule-pack readiness."""

from __future__ import annotations

import typer

from sitsync.cli.context import fail, load_context
from sitsync.exceptions import InvalidInputError, MissingInputError
from sitsync.rulepack import read_version
from sitsync.runner import SyncRunner


def check_command(
    root: str = typer.Option("", "--root", help="Repository root (default: config file directory, else cwd)."),
    config: str = typer.Option("", "--config", help="Optional config file path."),
) -> None:
    """Show keyword lists, rule-pack version and unresolved placeholders."""
    ctx = load_context(config, root)
    runner = SyncRunner(ctx.config, ctx.root)
    try:
        keyword_lists = runner.load_keyword_lists()
        text = runner.rule_pack.read()
    except (MissingInputError, InvalidInputError) as exc:
        raise fail(str(exc), 2) from None

    typer.secho(f"Keyword lists ({len(keyword_lists)})", fg="blue")
    for item in keyword_lists:
        typer.echo(f"  {item.name}: {len(item.terms)} terms")
    known = {item.name for item in keyword_lists}
    for name in runner.placeholders.dictionary_names():
        if name not in known:
            typer.secho(f"  {name}: referenced by a placeholder but no keyword file", fg="yellow")

    version = read_version(text)
    typer.echo(f"Rule pack version: {version if version is not None else 'not found'}")
    unresolved = runner.patcher.unresolved(text)
    if not unresolved:
        typer.secho("All placeholders resolved", fg="green")
        return
    typer.secho(f"Unresolved placeholders ({len(unresolved)})", fg="yellow")
    for token in unresolved:
        typer.echo(f"  {token} -> {runner.placeholders[token]}")
    raise typer.Exit(code=1)
