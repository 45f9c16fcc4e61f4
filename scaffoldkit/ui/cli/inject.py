"""
CLI commands for marker-based injection into a single file.

Thin wrappers over ``SourceDocument`` and ``import_patcher``.

Usage::

    scaffoldkit inject markers cmd/web/main.go
    scaffoldkit inject between cmd/web/main.go MCP:REPOS:START MCP:REPOS:END -f 'x := y'
    scaffoldkit inject replace cmd/web/main.go MCP:ROUTES:START MCP:ROUTES:END --from-file routes.go
    scaffoldkit inject import cmd/web/main.go example.com/app/internal/web/product --alias productctrl
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from scaffoldkit.core.errors import ScaffoldError
from scaffoldkit.core.services.source_document import SourceDocument
from scaffoldkit.ui.cli.common import fail, load_cli_config, resolve_project_root

_fragment_options = [
    click.option("--fragment", "-f", default=None, help="Fragment text to inject."),
    click.option(
        "--from-file",
        "fragment_file",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="Read the fragment from a file (default: stdin).",
    ),
]

_common_options = [
    click.option("--dry-run", is_flag=True, help="Report the change without saving."),
    click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON."),
]


def _apply(options):
    def decorator(fn):
        for option in reversed(options):
            fn = option(fn)
        return fn
    return decorator


def _read_fragment(fragment: str | None, fragment_file: str | None) -> str:
    if fragment is not None:
        return fragment
    if fragment_file is not None:
        return Path(fragment_file).read_text(encoding="utf-8")
    return click.get_text_stream("stdin").read()


def _open(ctx: click.Context, file: str) -> SourceDocument:
    config = load_cli_config(ctx)
    path = Path(file)
    if not path.is_absolute():
        path = resolve_project_root(ctx) / path
    return SourceDocument.from_file(path, comment_token=config.comment_token)


def _finish(doc: SourceDocument, changed: bool, dry_run: bool, as_json: bool, action: str) -> None:
    if changed and not dry_run:
        doc.save()

    if as_json:
        click.echo(json.dumps({
            "ok": True,
            "file": str(doc.path),
            "changed": changed,
            "dry_run": dry_run,
        }, indent=2))
        return

    mode = "[dry-run] " if dry_run else ""
    if changed:
        click.secho(f"✅ {mode}{action}: {doc.path}", fg="green")
    else:
        click.secho(f"⊘ {mode}Already present, nothing to do: {doc.path}", fg="yellow")


@click.group()
def inject() -> None:
    """Inject fragments between, after, or before marker comments."""


# ── Markers ─────────────────────────────────────────────────────


@inject.command("markers")
@click.argument("file")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_markers(ctx: click.Context, file: str, as_json: bool) -> None:
    """List the START/END markers declared in FILE."""
    try:
        doc = _open(ctx, file)
    except ScaffoldError as e:
        fail(str(e), as_json)
        return

    found = doc.markers()
    if as_json:
        click.echo(json.dumps(
            [{"name": m.name, "line": m.line, "indent": m.indent} for m in found],
            indent=2,
        ))
        return

    if not found:
        click.secho(f"No markers in {doc.path}", fg="yellow")
        return

    click.secho(f"\n📍 {doc.path}", fg="cyan", bold=True)
    for m in found:
        click.echo(f"   {m.line:>5}  {m.name}")
    click.echo()


# ── Fragment injection ──────────────────────────────────────────


@inject.command("between")
@click.argument("file")
@click.argument("start")
@click.argument("end")
@_apply(_fragment_options)
@_apply(_common_options)
@click.pass_context
def between(
    ctx: click.Context,
    file: str,
    start: str,
    end: str,
    fragment: str | None,
    fragment_file: str | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Append a fragment just before END, unless it is already between START and END."""
    try:
        doc = _open(ctx, file)
        changed = doc.inject_between(start, end, _read_fragment(fragment, fragment_file))
        _finish(doc, changed, dry_run, as_json, f"Injected before {end}")
    except ScaffoldError as e:
        fail(str(e), as_json)


@inject.command("replace")
@click.argument("file")
@click.argument("start")
@click.argument("end")
@_apply(_fragment_options)
@_apply(_common_options)
@click.pass_context
def replace(
    ctx: click.Context,
    file: str,
    start: str,
    end: str,
    fragment: str | None,
    fragment_file: str | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Replace everything between START and END with a fragment."""
    try:
        doc = _open(ctx, file)
        changed = doc.replace_between(start, end, _read_fragment(fragment, fragment_file))
        _finish(doc, changed, dry_run, as_json, f"Replaced {start} … {end}")
    except ScaffoldError as e:
        fail(str(e), as_json)


@inject.command("after")
@click.argument("file")
@click.argument("marker")
@_apply(_fragment_options)
@_apply(_common_options)
@click.pass_context
def after(
    ctx: click.Context,
    file: str,
    marker: str,
    fragment: str | None,
    fragment_file: str | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Insert a fragment on the line after MARKER."""
    try:
        doc = _open(ctx, file)
        changed = doc.inject_after(marker, _read_fragment(fragment, fragment_file))
        _finish(doc, changed, dry_run, as_json, f"Injected after {marker}")
    except ScaffoldError as e:
        fail(str(e), as_json)


@inject.command("before")
@click.argument("file")
@click.argument("marker")
@_apply(_fragment_options)
@_apply(_common_options)
@click.pass_context
def before(
    ctx: click.Context,
    file: str,
    marker: str,
    fragment: str | None,
    fragment_file: str | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Insert a fragment on the line before MARKER."""
    try:
        doc = _open(ctx, file)
        changed = doc.inject_before(marker, _read_fragment(fragment, fragment_file))
        _finish(doc, changed, dry_run, as_json, f"Injected before {marker}")
    except ScaffoldError as e:
        fail(str(e), as_json)


# ── Imports ─────────────────────────────────────────────────────


@inject.command("import")
@click.argument("file")
@click.argument("import_path")
@click.option("--alias", default="", help="Import alias.")
@_apply(_common_options)
@click.pass_context
def import_(
    ctx: click.Context,
    file: str,
    import_path: str,
    alias: str,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Add IMPORT_PATH to FILE's import block."""
    from scaffoldkit.core.services.import_patcher import inject_import

    config = load_cli_config(ctx)
    try:
        doc = _open(ctx, file)
        changed = inject_import(doc, import_path, alias, config.marker_prefix)
        _finish(doc, changed, dry_run, as_json, f"Imported {import_path}")
    except ScaffoldError as e:
        fail(str(e), as_json)
