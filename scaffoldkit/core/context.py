"""
Project context — which project tree scaffold operations act on.

The root is set once by the entry point (CLI: main.py, tests: fixtures).
Operations that only need it for optional features (the audit ledger)
skip those features when it is unset.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_project_root: Optional[Path] = None


def set_project_root(root: Path | None) -> None:
    """Register the project root for the current process (None clears it)."""
    global _project_root
    _project_root = root


def get_project_root() -> Optional[Path]:
    """Return the current project root, or None if not yet set."""
    return _project_root
