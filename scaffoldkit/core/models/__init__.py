"""
Domain models — Pydantic types for scaffoldkit.

All models are re-exported here for convenient access:

    from scaffoldkit.core.models import FileConflict, GenerationResult, ScaffoldResult
"""

from scaffoldkit.core.models.config import ScaffoldConfig
from scaffoldkit.core.models.result import FileConflict, GenerationResult, ScaffoldResult
from scaffoldkit.core.models.template import GeneratedFile
from scaffoldkit.core.models.wiring import Relationship, RelationshipType, RouteGroup

__all__ = [
    # config.py
    "ScaffoldConfig",
    # result.py
    "FileConflict",
    "GenerationResult",
    "ScaffoldResult",
    # template.py
    "GeneratedFile",
    # wiring.py
    "Relationship",
    "RelationshipType",
    "RouteGroup",
]
