"""
Generation results — what a scaffold call wrote, skipped, or refused.

A ``GenerationResult`` is the per-operation ledger kept by the file
writer.  A ``ScaffoldResult`` is what an operation hands back to its
caller: success flag, message, file lists, next steps and, when files
would have been overwritten, the conflicts plus their serialized report.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FileConflict(BaseModel):
    """A write that was refused because the target already exists."""

    model_config = ConfigDict(frozen=True)

    path: str
    description: str = ""
    proposed_content: str = ""


class GenerationResult(BaseModel):
    """Created/updated/conflicting paths of one writer session."""

    files_created: list[str] = Field(default_factory=list)
    files_updated: list[str] = Field(default_factory=list)
    conflicts: list[FileConflict] = Field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return len(self.conflicts) > 0

    @property
    def written(self) -> list[str]:
        """Every path that was (or in dry-run would be) written."""
        return [*self.files_created, *self.files_updated]

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["has_conflicts"] = self.has_conflicts
        return data


class ScaffoldResult(BaseModel):
    """Outcome of a scaffold operation, as returned to the caller."""

    success: bool
    message: str = ""
    dry_run: bool = False
    files_created: list[str] = Field(default_factory=list)
    files_updated: list[str] = Field(default_factory=list)
    files_skipped: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    conflicts: list[FileConflict] = Field(default_factory=list)
    conflict_report: str = ""

    @classmethod
    def ok(
        cls,
        message: str,
        created: list[str] | None = None,
        updated: list[str] | None = None,
        **kwargs: Any,
    ) -> ScaffoldResult:
        """Create a success result."""
        return cls(
            success=True,
            message=message,
            files_created=list(created or []),
            files_updated=list(updated or []),
            **kwargs,
        )

    @classmethod
    def error(cls, message: str, **kwargs: Any) -> ScaffoldResult:
        """Create a failure result."""
        return cls(success=False, message=message, **kwargs)

    @property
    def has_conflicts(self) -> bool:
        return len(self.conflicts) > 0

    def with_next_steps(self, *steps: str) -> ScaffoldResult:
        return self.model_copy(update={"next_steps": list(steps)})

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["has_conflicts"] = self.has_conflicts
        return data
