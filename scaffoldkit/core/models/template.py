"""
Generated file model — the unit handed to the file writer.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A finished file produced by the template layer.

    Attributes:
        path:        Relative path from the project root.
        content:     Full file content.
        description: What the file is for (shown in conflict reports).
                     Inferred from the path when empty.
    """

    path: str
    content: str
    description: str = ""
