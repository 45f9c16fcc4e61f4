"""
Wiring vocabulary — route groups and model relationships.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class RouteGroup(StrEnum):
    """Partition of route registrations, each with its own marker pair."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: str | RouteGroup | None) -> RouteGroup:
        """Resolve a user-supplied group name; empty means public."""
        if not value:
            return cls.PUBLIC
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(g.value for g in cls)
            raise ValueError(f"Unknown route group '{value}' (valid: {valid})") from None

    @property
    def requires_login(self) -> bool:
        return self is not RouteGroup.PUBLIC


class RelationshipType(StrEnum):
    """Association kinds between two domain models."""

    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    MANY_TO_MANY = "many_to_many"


class Relationship(BaseModel):
    """A declared association from the scaffolded domain to ``model``."""

    type: RelationshipType
    model: str
    join_table: str = ""
