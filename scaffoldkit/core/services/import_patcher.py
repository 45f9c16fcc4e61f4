"""
Import block patcher — add an entry to a source file's import list.

Prefers the IMPORTS marker pair.  Files without markers fall back to the
first parenthesised ``import ( ... )`` block; the entry goes right
before its closing paren, one tab deep.
"""

from __future__ import annotations

import logging
import re

from scaffoldkit.core.errors import NoImportBlockFound
from scaffoldkit.core.services.markers import DEFAULT_MARKER_PREFIX, MarkerPair, Section
from scaffoldkit.core.services.source_document import SourceDocument

logger = logging.getLogger(__name__)

_IMPORT_BLOCK_RE = re.compile(r"^import \(\n((?:[ \t]+.*\n|\n)*)\)", re.MULTILINE)


def format_import(import_path: str, alias: str = "") -> str:
    """Render one import entry: ``"path"`` or ``alias "path"``."""
    quoted = f'"{import_path}"'
    return f"{alias} {quoted}" if alias else quoted


def inject_import(
    doc: SourceDocument,
    import_path: str,
    alias: str = "",
    prefix: str = DEFAULT_MARKER_PREFIX,
) -> bool:
    """Add ``import_path`` to the document's imports.

    Returns:
        True if an entry was added, False if the path was already imported.

    Raises:
        NoImportBlockFound: No IMPORTS markers and no ``import (`` block.
    """
    if f'"{import_path}"' in doc.content:
        logger.debug("Import %s already present", import_path)
        return False

    entry = format_import(import_path, alias)

    pair = MarkerPair.for_section(Section.IMPORTS, prefix)
    if doc.has_pair(pair):
        return doc.inject_between(pair.start, pair.end, entry)

    match = _IMPORT_BLOCK_RE.search(doc.content)
    if match is None:
        raise NoImportBlockFound(import_path)

    # Closing paren is the last character of the match
    doc.insert(match.end() - 1, f"\t{entry}\n")
    logger.debug("Added import %s to import block", import_path)
    return True
