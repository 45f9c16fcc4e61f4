"""
Scaffold configuration — where the wired files live and how markers look.

Loaded from scaffold.yml.  Every field has a default matching the stock
project layout, so a project without a config file still works.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from scaffoldkit.core.models.wiring import RouteGroup


class ScaffoldConfig(BaseModel):
    """Project-level scaffolding settings."""

    version: int = 1

    module_path: str = ""           # empty → read from go.mod
    marker_prefix: str = "MCP"
    comment_token: str = "//"

    main_file: str = "cmd/web/main.go"
    database_file: str = "internal/database/database.go"
    layout_file: str = "internal/web/layouts/base_layout.templ"
    models_dir: str = "internal/models"

    default_route_group: RouteGroup = RouteGroup.PUBLIC
    nav_icon: str = "folder"
    db_handle: str = "db"

    @field_validator("marker_prefix", "comment_token")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("default_route_group", mode="before")
    @classmethod
    def _parse_group(cls, value: object) -> RouteGroup:
        return RouteGroup.parse(value)  # type: ignore[arg-type]
