"""
CLI commands for the devsetup configuration file.

Thin wrappers over ``devsetup.core.config.loader``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import yaml


def _config_path(ctx: click.Context) -> Path:
    from devsetup.core.config.loader import default_config_path

    return ctx.obj.get("config_path") or default_config_path()


@click.group()
def config() -> None:
    """Configuration — init, show."""


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Write a configuration file with every default filled in."""
    from devsetup.core.config.loader import ConfigError, save_settings
    from devsetup.core.models.settings import Settings

    path = _config_path(ctx)
    if path.exists() and not force:
        click.secho(f"⚠️  {path} already exists (use --force to overwrite)", fg="yellow")
        sys.exit(1)

    try:
        save_settings(Settings(), path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✅ Wrote {path}", fg="green")


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Print the effective configuration (file merged over defaults)."""
    error = ctx.obj.get("config_error")
    if error:
        click.secho(f"❌ {error}", fg="red", err=True)
        sys.exit(1)

    data = ctx.obj["settings"].model_dump(mode="json")

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    path = _config_path(ctx)
    source = str(path) if path.exists() else "defaults (no config file)"
    click.secho(f"# {source}", fg="cyan")
    click.echo(yaml.safe_dump(data, sort_keys=False, default_flow_style=False), nl=False)
