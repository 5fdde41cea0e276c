"""Inspect the resolved unitscan configuration."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from ..config import get_settings
from ..extraction.interpreters import INTERPRETERS

__all__ = ["app"]

app = typer.Typer(help="Configuration diagnostics.", add_completion=False)


@app.command("show")
def show_settings(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="TOML/YAML configuration to use instead of UNITSCAN_CONFIG_FILE.",
    ),
    refresh: bool = typer.Option(False, "--refresh", help="Ignore the cache and rebuild the settings."),
) -> None:
    """Print the resolved settings as JSON."""

    try:
        settings = get_settings(refresh=refresh, config_file=config_file)
    except (OSError, RuntimeError, ValueError) as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    payload = {
        "config_source": str(config_file) if config_file else "environment",
        "settings": settings.as_dict(),
        "available_interpreters": sorted(INTERPRETERS),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
