"""
scaffoldkit — CLI entrypoint.

Usage:
    scaffoldkit --help
    scaffoldkit inject between cmd/web/main.go MCP:REPOS:START MCP:REPOS:END -f fragment.go
    scaffoldkit wire domain product --group authenticated
    scaffoldkit files write manifest.yml --dry-run
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from scaffoldkit import __version__
from scaffoldkit.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="scaffoldkit")
@click.option("--verbose", "-v", is_flag=True, help="Log every write and injection.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to scaffold.yml (default: auto-detect).",
)
@click.option(
    "--root",
    "-C",
    "project_root",
    type=click.Path(file_okay=False),
    default=None,
    help="Project root (default: directory of scaffold.yml, else cwd).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    project_root: str | None,
) -> None:
    """scaffoldkit — merge generated code into hand-edited projects."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # Register project root in core context (used by scaffold operations for audit)
    from scaffoldkit.core.config.loader import find_config_file
    from scaffoldkit.core.context import set_project_root

    if project_root:
        root = Path(project_root).resolve()
    else:
        cfg = ctx.obj["config_path"] or find_config_file()
        root = cfg.parent.resolve() if cfg else Path.cwd()
    ctx.obj["project_root"] = root
    set_project_root(root)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(verbose=verbose, quiet=quiet, debug=debug),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )


# ── Register sub-groups ─────────────────────────────────────────

from scaffoldkit.ui.cli.files import files  # noqa: E402
from scaffoldkit.ui.cli.inject import inject  # noqa: E402
from scaffoldkit.ui.cli.wire import wire  # noqa: E402

cli.add_command(inject)
cli.add_command(wire)
cli.add_command(files)


if __name__ == "__main__":
    cli()
