"""
Shared helpers for the CLI sub-groups: project root, config, result output.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from scaffoldkit.core.models.config import ScaffoldConfig
from scaffoldkit.core.models.result import ScaffoldResult


def resolve_project_root(ctx: click.Context) -> Path:
    """Project root registered by the top-level group, else the cwd."""
    root: Path | None = ctx.obj.get("project_root") if ctx.obj else None
    return root or Path.cwd()


def load_cli_config(ctx: click.Context) -> ScaffoldConfig:
    """Load scaffold.yml for the command, exiting 1 on an invalid file."""
    from scaffoldkit.core.config.loader import ConfigError, load_config

    config_path: Path | None = ctx.obj.get("config_path") if ctx.obj else None
    try:
        return load_config(config_path, project_root=resolve_project_root(ctx))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


def fail(message: str, as_json: bool, **extra: object) -> None:
    """Report a structural error and exit 1."""
    if as_json:
        click.echo(json.dumps({"ok": False, "error": message, **extra}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def echo_result(result: ScaffoldResult, as_json: bool) -> None:
    """Print a ScaffoldResult; exit 1 unless it succeeded."""
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.success:
            sys.exit(1)
        return

    mode = "[dry-run] " if result.dry_run else ""
    if result.success:
        click.secho(f"✅ {mode}{result.message}", fg="green", bold=True)
    elif result.has_conflicts:
        click.secho(f"⚠️  {mode}{result.message}", fg="yellow", bold=True)
    else:
        click.secho(f"❌ {mode}{result.message}", fg="red", bold=True)

    for label, paths in (
        ("Created", result.files_created),
        ("Updated", result.files_updated),
        ("Skipped", result.files_skipped),
    ):
        if paths:
            click.echo(f"   {label}:")
            for p in paths:
                click.echo(f"     • {p}")

    if result.conflict_report:
        click.echo()
        click.echo(result.conflict_report, nl=False)

    if result.next_steps:
        click.echo()
        click.secho("   Next steps:", fg="cyan")
        for step in result.next_steps:
            click.echo(f"     → {step}")

    if not result.success:
        sys.exit(1)
