"""
Scaffold operations — multi-file calls built on the engine.

Each operation:
    1. validates its inputs,
    2. loads every document it will touch and mutates them in memory,
    3. saves only after every injection succeeded (or nothing, in dry run),
    4. returns a ``ScaffoldResult`` and appends one audit entry.

Structural errors (missing markers, bad marker order, no import block)
become a failed result naming the domain and file; nothing is saved in
that case.  Conflicts from file generation are reported through
``conflict_result``, never as silent partial success.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from scaffoldkit.core.context import get_project_root
from scaffoldkit.core.errors import MarkerNotFound, ScaffoldError
from scaffoldkit.core.models.config import ScaffoldConfig
from scaffoldkit.core.models.result import ScaffoldResult
from scaffoldkit.core.models.template import GeneratedFile
from scaffoldkit.core.models.wiring import Relationship, RelationshipType, RouteGroup
from scaffoldkit.core.persistence.audit import AuditEntry, AuditWriter
from scaffoldkit.core.services import markers, naming, wiring
from scaffoldkit.core.services.conflict_report import conflict_result
from scaffoldkit.core.services.file_writer import FileWriter
from scaffoldkit.core.services.markers import MarkerPair, Section
from scaffoldkit.core.services.source_document import SourceDocument

logger = logging.getLogger(__name__)


def _audit(operation: str, target: str, result: ScaffoldResult, started: float, **context: Any) -> None:
    """Record the operation in the project ledger if a project root is registered."""
    root = get_project_root()
    if root is None:
        return

    if result.has_conflicts:
        status = "conflict"
    elif not result.success:
        status = "failed"
    else:
        status = "dry_run" if result.dry_run else "ok"

    AuditWriter(project_root=root).write(AuditEntry(
        operation=operation,
        target=target,
        status=status,
        dry_run=result.dry_run,
        files_created=result.files_created,
        files_updated=result.files_updated,
        conflicts=[c.path for c in result.conflicts],
        errors=[] if result.success or result.has_conflicts else [result.message],
        duration_ms=int((time.monotonic() - started) * 1000),
        context=context,
    ))


def _rel(root: Path, path: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


# ── File generation ─────────────────────────────────────────────


def scaffold_files(
    root: Path,
    files: Iterable[GeneratedFile],
    dry_run: bool = False,
    force: bool = False,
) -> ScaffoldResult:
    """Write a batch of generated files.

    Without ``force`` the batch is all-or-nothing: if any target already
    exists, no file is written and every conflict is reported.
    """
    started = time.monotonic()
    files = list(files)
    writer = FileWriter(root, dry_run=dry_run, force_overwrite=force)

    try:
        writer.write_batch(files)
    except ScaffoldError as e:
        result = ScaffoldResult.error(
            f"Failed to write files: {e}",
            files_created=writer.result().files_created,
            files_updated=writer.result().files_updated,
        )
        _audit("scaffold_files", f"{len(files)} file(s)", result, started)
        return result

    generation = writer.result()
    failed = conflict_result(generation)
    if failed is not None:
        _audit("scaffold_files", f"{len(files)} file(s)", failed, started)
        return failed

    verb = "Would write" if dry_run else "Wrote"
    result = ScaffoldResult.ok(
        f"{verb} {len(generation.written)} file(s)",
        created=generation.files_created,
        updated=generation.files_updated,
        dry_run=dry_run,
    )
    logger.info("%s", writer.summary().rstrip())
    _audit("scaffold_files", f"{len(files)} file(s)", result, started, force=force)
    return result


# ── DI wiring ───────────────────────────────────────────────────


def _validate_domains(domains: list[str]) -> str | None:
    if not domains:
        return "at least one domain is required"
    for domain in domains:
        problem = naming.validate_domain_name(domain)
        if problem:
            return f"domain '{domain}': {problem}"
    return None


def _load(root: Path, rel_path: str, config: ScaffoldConfig) -> SourceDocument:
    return SourceDocument.from_file(root / rel_path, comment_token=config.comment_token)


def _route_start(doc: SourceDocument, group: RouteGroup, prefix: str) -> str:
    pair = wiring.route_markers(group, prefix)
    if doc.has_pair(pair):
        return pair.start
    return MarkerPair.for_section(Section.ROUTES, prefix).start


def update_di_wiring(
    root: Path,
    domains: list[str],
    config: ScaffoldConfig | None = None,
    dry_run: bool = False,
) -> ScaffoldResult:
    """Wire existing domains into the main file: imports, repo, service, controller, route.

    A dry run only checks that the main file carries every marker the
    wiring needs.
    """
    started = time.monotonic()
    config = config or ScaffoldConfig()
    target = ", ".join(domains)

    def _finish(result: ScaffoldResult) -> ScaffoldResult:
        _audit("update_di_wiring", target, result, started)
        return result

    problem = _validate_domains(domains)
    if problem:
        return _finish(ScaffoldResult.error(problem))
    if not config.module_path:
        return _finish(ScaffoldResult.error(
            "module path unknown: set module_path in scaffold.yml or add a go.mod"
        ))

    main_path = root / config.main_file
    if not main_path.is_file():
        return _finish(ScaffoldResult.error(f"main file not found at {config.main_file}"))

    prefix = config.marker_prefix
    group = config.default_route_group
    try:
        doc = _load(root, config.main_file, config)
    except ScaffoldError as e:
        return _finish(ScaffoldResult.error(f"failed to read {config.main_file}: {e}"))

    if dry_run:
        required = [
            MarkerPair.for_section(section, prefix).start
            for section in (Section.IMPORTS, Section.REPOS, Section.SERVICES, Section.CONTROLLERS)
        ]
        required.append(_route_start(doc, group, prefix))
        missing = markers.missing_markers(doc.content, required, config.comment_token)
        if missing:
            return _finish(ScaffoldResult.error(
                f"{config.main_file} is missing required markers: {', '.join(missing)}",
                dry_run=True,
            ))
        return _finish(ScaffoldResult.ok(
            f"Dry run: would update {config.main_file} with wiring for {len(domains)} domain(s)",
            updated=[config.main_file],
            dry_run=True,
        ))

    for domain in domains:
        try:
            wiring.wire_imports(doc, config.module_path, domain, prefix)
            wiring.inject_repo(doc, domain, config.db_handle, prefix)
            wiring.inject_service(doc, domain, prefix)
            wiring.inject_controller(doc, domain, prefix=prefix)
            wiring.inject_route(doc, domain, group, prefix)
        except ScaffoldError as e:
            return _finish(ScaffoldResult.error(f"failed to wire '{domain}' into {config.main_file}: {e}"))

    try:
        doc.save()
    except ScaffoldError as e:
        return _finish(ScaffoldResult.error(f"failed to save {config.main_file}: {e}"))

    return _finish(ScaffoldResult.ok(
        f"Updated {config.main_file} with wiring for {len(domains)} domain(s)",
        updated=[config.main_file],
    ).with_next_steps("go build ./...", "templ generate"))


# ── Full domain wiring ──────────────────────────────────────────


def inject_inverse_relationships(
    root: Path,
    domain: str,
    relationships: Iterable[Relationship],
    config: ScaffoldConfig,
) -> list[SourceDocument]:
    """Add the inverse field to each related model that declares RELATIONSHIPS markers.

    Related models without a file or without markers are skipped.  Returns
    the documents that changed (unsaved).
    """
    changed: dict[Path, SourceDocument] = {}
    prefix = config.marker_prefix
    pair = MarkerPair.for_section(Section.RELATIONSHIPS, prefix)

    for rel in relationships:
        model_path = root / config.models_dir / f"{naming.to_package_name(rel.model)}.go"
        if not model_path.is_file():
            logger.debug("No model file for %s, skipping inverse relationship", rel.model)
            continue

        doc = changed.get(model_path) or SourceDocument.from_file(
            model_path, comment_token=config.comment_token
        )
        if not doc.has_pair(pair):
            logger.debug("%s has no relationship markers, skipping", _rel(root, model_path))
            continue

        field_code = wiring.inverse_relationship_field(domain, rel)
        if wiring.inject_relationship(doc, field_code, prefix):
            changed[model_path] = doc

    return list(changed.values())


def wire_domain(
    root: Path,
    domain: str,
    config: ScaffoldConfig | None = None,
    route_group: RouteGroup | str | None = None,
    relationships: Iterable[Relationship] = (),
    with_crud_views: bool = False,
    dry_run: bool = False,
) -> ScaffoldResult:
    """Wire a freshly scaffolded domain into the project.

    Touches, in order: the main file (imports, repo, service, controller,
    route), the database file (model registration, when present), the
    layout (nav item, for authenticated/admin routes, when present), and
    related model files (inverse relationship fields).
    """
    started = time.monotonic()
    config = config or ScaffoldConfig()
    relationships = list(relationships)

    def _finish(result: ScaffoldResult) -> ScaffoldResult:
        _audit("wire_domain", domain, result, started, route_group=str(group))
        return result

    try:
        group = RouteGroup.parse(route_group or config.default_route_group)
    except ValueError as e:
        group = config.default_route_group
        return _finish(ScaffoldResult.error(str(e)))

    problem = _validate_domains([domain])
    if problem:
        return _finish(ScaffoldResult.error(problem))
    if not config.module_path:
        return _finish(ScaffoldResult.error(
            "module path unknown: set module_path in scaffold.yml or add a go.mod"
        ))
    if not (root / config.main_file).is_file():
        return _finish(ScaffoldResult.error(f"main file not found at {config.main_file}"))

    prefix = config.marker_prefix
    docs: list[SourceDocument] = []
    current = config.main_file

    try:
        main_doc = _load(root, config.main_file, config)
        wiring.wire_imports(main_doc, config.module_path, domain, prefix)
        wiring.inject_repo(main_doc, domain, config.db_handle, prefix)
        wiring.inject_service(main_doc, domain, prefix)

        related = []
        if with_crud_views:
            related = [r.model for r in relationships if r.type is RelationshipType.BELONGS_TO]
        wiring.inject_controller(main_doc, domain, related, prefix)
        wiring.inject_route(main_doc, domain, group, prefix)
        docs.append(main_doc)

        current = config.database_file
        if (root / config.database_file).is_file():
            db_doc = _load(root, config.database_file, config)
            wiring.inject_model(db_doc, domain, prefix)
            docs.append(db_doc)

        current = config.layout_file
        if group.requires_login and (root / config.layout_file).is_file():
            layout_doc = _load(root, config.layout_file, config)
            try:
                wiring.inject_nav_item(layout_doc, domain, group, config.nav_icon, prefix)
                docs.append(layout_doc)
            except MarkerNotFound as e:
                logger.warning("Navigation item for %s not added: %s", domain, e)

        current = config.models_dir
        docs.extend(inject_inverse_relationships(root, domain, relationships, config))
    except ScaffoldError as e:
        return _finish(ScaffoldResult.error(f"failed to wire '{domain}' into {current}: {e}"))

    updated = [_rel(root, d.path) for d in docs if d.modified and d.path is not None]

    if not dry_run:
        saved: list[str] = []
        for doc in docs:
            if not doc.modified:
                continue
            try:
                doc.save()
            except ScaffoldError as e:
                return _finish(ScaffoldResult.error(
                    f"failed to save {_rel(root, doc.path)}: {e}",
                    files_updated=saved,
                ))
            saved.append(_rel(root, doc.path))

    verb = "Would wire" if dry_run else "Wired"
    message = f"{verb} domain '{domain}' ({group} routes)"
    if not updated:
        message = f"Domain '{domain}' is already wired"

    return _finish(ScaffoldResult.ok(message, updated=updated, dry_run=dry_run).with_next_steps(
        "templ generate",
        "go build ./...",
        f"Visit {naming.to_url_path(domain)} once the server is running",
    ))
