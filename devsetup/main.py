"""
devsetup — CLI entrypoint.

Usage:
    devsetup --help
    devsetup install
    devsetup install --yes --dry-run
    devsetup order
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from devsetup import __version__
from devsetup.core.config.loader import ConfigError, load_settings
from devsetup.core.console import Console
from devsetup.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="devsetup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to configuration file (default: ~/.config/devsetup/config.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """devsetup — set up a development workstation."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # Settings are loaded once; a broken file is reported by the
    # commands that need it, so `config init --force` can still fix it.
    try:
        ctx.obj["settings"] = load_settings(ctx.obj["config_path"])
        ctx.obj["config_error"] = None
    except ConfigError as e:
        ctx.obj["settings"] = None
        ctx.obj["config_error"] = str(e)

    settings = ctx.obj["settings"]

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        debug=debug,
        verbose=verbose,
        quiet=quiet,
        config_verbose=bool(settings and settings.verbose),
    )


def _require_settings(ctx: click.Context):
    error = ctx.obj.get("config_error")
    if error:
        click.secho(f"❌ {error}", fg="red", err=True)
        sys.exit(1)
    return ctx.obj["settings"]


@cli.command()
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Skip confirmation for all installations.")
@click.option("--dry-run", "-d", is_flag=True, help="Only show what would be installed.")
@click.option("--only", "only", multiple=True, help="Install only this component (repeatable).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the report as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    assume_yes: bool,
    dry_run: bool,
    only: tuple[str, ...],
    as_json: bool,
) -> None:
    """Select components and install them.

    Examples:

        devsetup install

        devsetup install --yes --only Rust

        devsetup install --dry-run
    """
    from devsetup.core.use_cases.install import run_install
    from devsetup.ui.cli.prompt import ConsolePrompt

    settings = _require_settings(ctx)
    quiet = ctx.obj.get("quiet", False)
    console = Console(quiet=quiet, to_stderr=as_json)

    console.section("Ubuntu Dev Environment Setup")

    result = run_install(
        prompt=ConsolePrompt(err=as_json),
        console=console,
        only=list(only) if only else None,
        dry_run=dry_run,
        assume_yes=assume_yes,
        settings=settings,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    report = result.report
    assert report is not None

    click.echo()
    mode_label = "[dry-run] " if dry_run else ""
    click.secho(f"⚡ {mode_label}Summary", fg="cyan", bold=True)
    for outcome in report.outcomes:
        if outcome.ok:
            click.secho(f"   ✓ {outcome.installer}", fg="green", nl=False)
            timing = f" ({outcome.duration_ms}ms)" if outcome.duration_ms else ""
            click.echo(f"{timing}")
        elif outcome.failed:
            click.secho(f"   ✗ {outcome.installer}", fg="red", nl=False)
            phase = f" [{outcome.phase}]" if outcome.phase else ""
            click.echo(phase)
            if outcome.error:
                for line in outcome.error.split("\n")[:5]:
                    click.echo(f"     │ {line}")
        else:
            click.secho(f"   ⊘ {outcome.installer} ", fg="yellow", nl=False)
            click.echo(f"({outcome.message})")

    click.echo()
    status_color = {"ok": "green", "partial": "yellow", "failed": "red"}.get(
        report.status, "white"
    )
    click.secho(
        f"   Done: {report.succeeded} | Skipped: {report.skipped} | Failed: {report.failed}",
        fg=status_color,
        bold=True,
    )

    if report.failed > 0:
        click.echo()
        sys.exit(1)

    if not quiet:
        click.echo()
        click.secho("Setup completed successfully!", fg="green", bold=True)


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_installers(ctx: click.Context, as_json: bool) -> None:
    """List available components and their dependencies."""
    from devsetup.core.use_cases.install import build_registry
    from devsetup.ui.cli.prompt import ConsolePrompt

    settings = _require_settings(ctx)
    registry = build_registry(settings, ConsolePrompt(), Console())

    rows = [
        {
            "name": inst.name,
            "description": inst.description,
            "dependencies": inst.dependencies(),
        }
        for inst in registry.installers()
    ]

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    click.secho(f"\n📦 Components: {len(rows)}", fg="cyan", bold=True)
    for row in rows:
        click.secho(f"   • {row['name']}", bold=True, nl=False)
        click.echo(f" — {row['description']}")
        if row["dependencies"]:
            click.echo(f"     needs: {', '.join(row['dependencies'])}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def order(ctx: click.Context, as_json: bool) -> None:
    """Show the dependency-resolved install order."""
    from devsetup.core.errors import DependencyError
    from devsetup.core.use_cases.install import build_registry
    from devsetup.ui.cli.prompt import ConsolePrompt

    settings = _require_settings(ctx)
    registry = build_registry(settings, ConsolePrompt(), Console())

    try:
        resolved = [inst.name for inst in registry.resolve_order()]
    except DependencyError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"order": resolved}, indent=2))
        return

    click.secho("\n🔗 Install order:", fg="cyan", bold=True)
    for i, name in enumerate(resolved, start=1):
        click.echo(f"   {i}. {name}")
    click.echo()


# ── Register sub-command groups from devsetup/ui/cli/ ─────────────

from devsetup.ui.cli.config import config  # noqa: E402

cli.add_command(config)


if __name__ == "__main__":
    cli()
