"""
CLI commands for writing generated files.

Thin wrappers over ``scaffoldkit.core.services.scaffold_ops.scaffold_files``.

A manifest is a YAML list (or a mapping with a ``files`` list) of::

    - path: internal/models/product.go
      description: Product model        # optional
      content: |                        # or: source: build/product.go
        package models
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from scaffoldkit.core.models.template import GeneratedFile
from scaffoldkit.ui.cli.common import echo_result, fail, resolve_project_root


def load_manifest(path: Path) -> list[GeneratedFile]:
    """Parse a manifest into GeneratedFiles; ``source`` entries are read relative to it.

    Raises:
        ValueError: The manifest is unreadable or malformed.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Cannot read manifest {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("files", [])
    if not isinstance(data, list):
        raise ValueError(f"Manifest {path} must be a list of files")

    files = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Manifest entry {i} must be a mapping")
        entry = dict(entry)
        source = entry.pop("source", None)
        if source is not None and "content" not in entry:
            try:
                entry["content"] = (path.parent / source).read_text(encoding="utf-8")
            except OSError as e:
                raise ValueError(f"Manifest entry {i}: cannot read {source}: {e}") from e
        try:
            files.append(GeneratedFile.model_validate(entry))
        except ValidationError as e:
            raise ValueError(f"Manifest entry {i}: {e}") from e
    return files


@click.group()
def files() -> None:
    """Write generated files without clobbering hand-edited ones."""


@files.command("write")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite existing files.")
@click.option("--dry-run", is_flag=True, help="Report what would be written.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def write(ctx: click.Context, manifest: str, force: bool, dry_run: bool, as_json: bool) -> None:
    """Write every file in MANIFEST; existing files are reported as conflicts."""
    from scaffoldkit.core.services.scaffold_ops import scaffold_files

    try:
        generated = load_manifest(Path(manifest))
    except ValueError as e:
        fail(str(e), as_json)
        return

    result = scaffold_files(resolve_project_root(ctx), generated, dry_run=dry_run, force=force)
    echo_result(result, as_json)
