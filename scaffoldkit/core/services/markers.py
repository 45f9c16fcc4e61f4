"""
Marker locator — find anchor comment lines in source text.

A marker is a whole line holding a single comment whose text is the
marker name, e.g.::

        // MCP:REPOS:START
        userRepo := userrepo.NewRepository(db)
        // MCP:REPOS:END

Block markers come in START/END pairs named ``<PREFIX>:<SECTION>:START``
and ``<PREFIX>:<SECTION>:END``.  Location never mutates the text; the
captured leading whitespace is the indentation context used by the
injector.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache

from scaffoldkit.core.errors import MarkerNotFound, MarkerOrderInvalid

DEFAULT_MARKER_PREFIX = "MCP"
DEFAULT_COMMENT_TOKEN = "//"


class Section(StrEnum):
    """Standard marker sections emitted by the project templates."""

    MODELS = "MODELS"
    REPOS = "REPOS"
    SERVICES = "SERVICES"
    CONTROLLERS = "CONTROLLERS"
    ROUTES = "ROUTES"
    ROUTES_PUBLIC = "ROUTES:PUBLIC"
    ROUTES_AUTHENTICATED = "ROUTES:AUTHENTICATED"
    ROUTES_ADMIN = "ROUTES:ADMIN"
    IMPORTS = "IMPORTS"
    RELATIONSHIPS = "RELATIONSHIPS"
    NAV_ITEMS = "NAV_ITEMS"
    NAV_ITEMS_ADMIN = "NAV_ITEMS_ADMIN"


@dataclass(frozen=True)
class MarkerPair:
    """START/END marker names delimiting one injection section."""

    start: str
    end: str

    @classmethod
    def for_section(
        cls,
        section: Section | str,
        prefix: str = DEFAULT_MARKER_PREFIX,
    ) -> MarkerPair:
        base = f"{prefix}:{section}"
        return cls(start=f"{base}:START", end=f"{base}:END")


@dataclass(frozen=True)
class MarkerLocation:
    """Where a marker line sits in the text.

    ``start`` is the offset of the beginning of the line (indentation
    included); ``end`` is the offset just past the marker text, i.e. the
    position of the line's newline.
    """

    name: str
    start: int
    end: int
    indent: str


@dataclass(frozen=True)
class FoundMarker:
    """A marker-shaped comment discovered by ``find_markers``."""

    name: str
    line: int
    indent: str


@lru_cache(maxsize=256)
def marker_pattern(name: str, comment_token: str = DEFAULT_COMMENT_TOKEN) -> re.Pattern[str]:
    """Compile the full-line pattern for one marker name."""
    return re.compile(
        r"^([ \t]*)"
        + re.escape(comment_token)
        + r"[ \t]*"
        + re.escape(name)
        + r"[ \t]*\r?$",
        re.MULTILINE,
    )


def locate(
    text: str,
    name: str,
    comment_token: str = DEFAULT_COMMENT_TOKEN,
) -> MarkerLocation | None:
    """Return the first line carrying marker ``name``, or None."""
    match = marker_pattern(name, comment_token).search(text)
    if match is None:
        return None
    end = match.end()
    if text[end - 1:end] == "\r":
        end -= 1
    return MarkerLocation(name=name, start=match.start(), end=end, indent=match.group(1))


def require(
    text: str,
    name: str,
    kind: str = "",
    comment_token: str = DEFAULT_COMMENT_TOKEN,
) -> MarkerLocation:
    """Like ``locate`` but raise ``MarkerNotFound`` when absent."""
    loc = locate(text, name, comment_token)
    if loc is None:
        raise MarkerNotFound(name, kind)
    return loc


def locate_pair(
    text: str,
    start: str,
    end: str,
    comment_token: str = DEFAULT_COMMENT_TOKEN,
) -> tuple[MarkerLocation, MarkerLocation]:
    """Locate a START/END pair and validate their order.

    Raises:
        MarkerNotFound: Either marker is missing.
        MarkerOrderInvalid: END does not come strictly after START.
    """
    start_loc = require(text, start, "start", comment_token)
    end_loc = require(text, end, "end", comment_token)
    if end_loc.start <= start_loc.start:
        raise MarkerOrderInvalid(start, end)
    return start_loc, end_loc


def has_marker(text: str, name: str, comment_token: str = DEFAULT_COMMENT_TOKEN) -> bool:
    return locate(text, name, comment_token) is not None


def has_pair(text: str, pair: MarkerPair, comment_token: str = DEFAULT_COMMENT_TOKEN) -> bool:
    """True when both markers of ``pair`` are present (order not checked)."""
    return has_marker(text, pair.start, comment_token) and has_marker(
        text, pair.end, comment_token
    )


def missing_markers(
    text: str,
    names: list[str],
    comment_token: str = DEFAULT_COMMENT_TOKEN,
) -> list[str]:
    """Return the subset of ``names`` not present in ``text``, in order."""
    return [n for n in names if not has_marker(text, n, comment_token)]


def find_markers(text: str, comment_token: str = DEFAULT_COMMENT_TOKEN) -> list[FoundMarker]:
    """List every ``...:START`` / ``...:END`` marker line in the text."""
    pattern = re.compile(
        r"^([ \t]*)"
        + re.escape(comment_token)
        + r"[ \t]*([A-Za-z][\w]*(?::[\w]+)*:(?:START|END))[ \t]*\r?$",
        re.MULTILINE,
    )
    found = []
    for match in pattern.finditer(text):
        line = text.count("\n", 0, match.start()) + 1
        found.append(FoundMarker(name=match.group(2), line=line, indent=match.group(1)))
    return found
