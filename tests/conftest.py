"""
Shared test fixtures: a minimal marker-annotated Go project tree.
"""

from pathlib import Path

import pytest

from scaffoldkit.core.context import set_project_root

from go_sources import (
    DATABASE_GO,
    LAYOUT_TEMPL,
    MAIN_GO,
    MODULE_PATH,
    USER_MODEL_GO,
)


@pytest.fixture(autouse=True)
def _clear_project_root():
    """The CLI registers a process-wide project root; never leak it between tests."""
    set_project_root(None)
    yield
    set_project_root(None)


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """A project tree with go.mod, main.go, database.go, layout and a User model."""
    files = {
        "go.mod": f"module {MODULE_PATH}\n\ngo 1.22\n",
        "cmd/web/main.go": MAIN_GO,
        "internal/database/database.go": DATABASE_GO,
        "internal/web/layouts/base_layout.templ": LAYOUT_TEMPL,
        "internal/models/user.go": USER_MODEL_GO,
    }
    for rel, content in files.items():
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return tmp_path
