"""Shared setup for commands: config, repository root and service client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from sitsync.config import ConfigLoadError, ConfigManager, SitSyncConfig
from sitsync.service import HttpComplianceClient


@dataclass(frozen=True)
class CommandContext:
    config: SitSyncConfig
    root: Path
    config_path: Path | None


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def fail(message: str, code: int) -> typer.Exit:
    typer.secho(f"error: {message}", fg="red", err=True)
    return typer.Exit(code=code)


def load_context(config: str, root: str) -> CommandContext:
    """Load configuration; exit 2 when it cannot be read or validated."""
    try:
        manager = ConfigManager.load(config_path=config or None)
    except ConfigLoadError as exc:
        raise fail(str(exc), 2) from None
    except ValidationError as exc:
        raise fail(f"invalid configuration: {exc}", 2) from None
    config_path = manager.config_path
    return CommandContext(
        config=manager.get(),
        root=resolve_root(root, config_path),
        config_path=config_path,
    )


def resolve_root(root: str, config_path: Path | None) -> Path:
    """Explicit --root, else the directory holding the config file, else cwd."""
    if root.strip():
        return Path(root.strip()).resolve()
    if config_path is not None:
        return config_path.resolve().parent
    return Path.cwd()


def build_service(config: SitSyncConfig) -> HttpComplianceClient | None:
    if not config.service.base_url:
        return None
    return HttpComplianceClient.from_config(config.service)
