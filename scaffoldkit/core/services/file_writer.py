"""
Conflict-aware file writer — create, overwrite, or refuse per target file.

One ``FileWriter`` belongs to one scaffold operation.  For each target it
decides, in order:

    dry run             → classify as created/updated, touch nothing
    absent              → write, record as created
    present + force     → overwrite, record as updated
    present, no force   → leave it alone, record a FileConflict

Conflicts are data, not errors: the operation carries on and the caller
decides what to do with the accumulated ``GenerationResult``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from scaffoldkit.core.errors import FileSystemError
from scaffoldkit.core.models.result import FileConflict, GenerationResult
from scaffoldkit.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)


def infer_description(rel_path: str) -> str:
    """Guess what a generated file is for from where it lives."""
    path = rel_path.replace("\\", "/")
    if "/models/" in path:
        return "Model definition with struct fields and GORM tags"
    if "/repository/" in path:
        return "Repository layer with database CRUD operations"
    if "/services/" in path:
        if path.endswith("dto.go"):
            return "Data Transfer Objects for service layer"
        return "Service layer with business logic"
    if "/web/" in path:
        if "/views/" in path:
            return "Templ view template for UI rendering"
        return "HTTP controller with route handlers"
    if "/middleware/" in path:
        return "HTTP middleware"
    if "/config/" in path:
        return "Configuration file"
    if path.endswith("_seeder.go"):
        return "Database seeder for test data"
    return "Generated source file"


class FileWriter:
    """Writes files under ``base_path`` and tracks what happened to each."""

    def __init__(self, base_path: Path | str, dry_run: bool = False, force_overwrite: bool = False):
        self.base_path = Path(base_path)
        self.dry_run = dry_run
        self.force_overwrite = force_overwrite
        self._created: list[str] = []
        self._updated: list[str] = []
        self._conflicts: list[FileConflict] = []

    def full_path(self, rel_path: str) -> Path:
        return self.base_path / rel_path

    def exists(self, rel_path: str) -> bool:
        return self.full_path(rel_path).is_file()

    # ── Writing ─────────────────────────────────────────────────

    def write_or_skip(self, rel_path: str, content: str, description: str = "") -> bool:
        """Apply the write policy to one file.

        Returns:
            True if the file was written (or would be, in dry run),
            False if it was recorded as a conflict.

        Raises:
            FileSystemError: Creating directories or writing failed.
        """
        target = self.full_path(rel_path)
        exists = target.is_file()

        if self.dry_run:
            (self._updated if exists else self._created).append(rel_path)
            logger.debug("Dry run: would %s %s", "update" if exists else "create", rel_path)
            return True

        if exists and not self.force_overwrite:
            self._conflicts.append(FileConflict(
                path=rel_path,
                description=description or infer_description(rel_path),
                proposed_content=content,
            ))
            logger.warning("File exists, not overwriting: %s", rel_path)
            return False

        self._write(target, rel_path, content)
        (self._updated if exists else self._created).append(rel_path)
        logger.info("%s %s", "Overwrote" if exists else "Wrote", target)
        return True

    def write_file(self, generated: GeneratedFile) -> bool:
        return self.write_or_skip(generated.path, generated.content, generated.description)

    def write_if_absent(self, rel_path: str, content: str) -> bool:
        """Write only when the target does not exist; an existing file is kept silently."""
        if self.exists(rel_path):
            logger.debug("Keeping existing %s", rel_path)
            return False
        return self.write_or_skip(rel_path, content)

    def write_batch(self, files: Iterable[GeneratedFile]) -> bool:
        """Write a set of files all-or-nothing with respect to conflicts.

        Every target is checked before anything is written.  If any of them
        would conflict, all conflicts are recorded and no file in the batch
        is touched.  A path repeated within the batch conflicts with its
        earlier entry.

        Returns:
            True if the batch was written (or classified, in dry run).
        """
        files = list(files)

        if not self.dry_run and not self.force_overwrite:
            seen: set[str] = set()
            blocked = []
            for f in files:
                if f.path in seen or self.exists(f.path):
                    blocked.append(f)
                seen.add(f.path)
            if blocked:
                for f in blocked:
                    self._conflicts.append(FileConflict(
                        path=f.path,
                        description=f.description or infer_description(f.path),
                        proposed_content=f.content,
                    ))
                logger.warning(
                    "Batch of %d file(s) not written: %d would overwrite existing or repeated files",
                    len(files), len(blocked),
                )
                return False

        for f in files:
            self.write_file(f)
        return True

    def ensure_dir(self, rel_path: str) -> None:
        if self.dry_run:
            return
        target = self.full_path(rel_path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(target, f"failed to create directory ({e.strerror or e})") from e

    def _write(self, target: Path, rel_path: str, content: str) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileSystemError(rel_path, f"failed to write file ({e.strerror or e})") from e

    # ── Results ─────────────────────────────────────────────────

    @property
    def has_conflicts(self) -> bool:
        return len(self._conflicts) > 0

    @property
    def conflicts(self) -> list[FileConflict]:
        return list(self._conflicts)

    def result(self) -> GenerationResult:
        return GenerationResult(
            files_created=list(self._created),
            files_updated=list(self._updated),
            conflicts=list(self._conflicts),
        )

    def generated_paths(self) -> list[str]:
        return [*self._created, *self._updated]

    def reset(self) -> None:
        self._created = []
        self._updated = []
        self._conflicts = []

    def summary(self) -> str:
        lines = []
        for label, paths in (("Created", self._created), ("Updated", self._updated)):
            if paths:
                lines.append(f"{label} {len(paths)} file(s):")
                lines.extend(f"  - {p}" for p in paths)
        if not lines:
            lines.append("No files generated.")
        if self._conflicts:
            lines.append(f"Skipped {len(self._conflicts)} existing file(s):")
            lines.extend(f"  - {c.path}" for c in self._conflicts)
        return "\n".join(lines) + "\n"
