"""
Source document — a marker-indexed text buffer for fragment injection.

A ``SourceDocument`` is loaded from a file (or seeded from a string),
mutated in memory by injector calls, and written back only by an
explicit ``save()`` / ``save_to()``.

Every injector call either fully applies or leaves the buffer untouched:
markers are located and validated before the new text is assembled, and
the buffer is swapped in a single assignment.  Markers themselves are
never consumed, so any number of calls can target the same section.
"""

from __future__ import annotations

import logging
from pathlib import Path

from scaffoldkit.core.errors import FileSystemError
from scaffoldkit.core.services import markers as _markers
from scaffoldkit.core.services.markers import DEFAULT_COMMENT_TOKEN, MarkerPair

logger = logging.getLogger(__name__)


def indent_fragment(fragment: str, indent: str, newline: str = "\n") -> str:
    """Trim the fragment and prefix every non-empty line with ``indent``."""
    lines = fragment.strip().splitlines()
    return newline.join(indent + line if line else line for line in lines)


class SourceDocument:
    """In-memory source text, optionally bound to a file path."""

    def __init__(
        self,
        content: str,
        path: Path | None = None,
        comment_token: str = DEFAULT_COMMENT_TOKEN,
    ):
        self._content = content
        self._path = path
        self.comment_token = comment_token
        self.modified = False

    @classmethod
    def from_file(cls, path: Path | str, comment_token: str = DEFAULT_COMMENT_TOKEN) -> SourceDocument:
        """Load a document from disk.

        Raises:
            FileSystemError: The file cannot be read.
        """
        path = Path(path)
        try:
            with path.open(encoding="utf-8", newline="") as fh:
                content = fh.read()
        except OSError as e:
            raise FileSystemError(path, f"failed to read file ({e.strerror or e})") from e
        return cls(content, path=path, comment_token=comment_token)

    @classmethod
    def from_string(cls, content: str, comment_token: str = DEFAULT_COMMENT_TOKEN) -> SourceDocument:
        return cls(content, comment_token=comment_token)

    @property
    def content(self) -> str:
        return self._content

    @property
    def path(self) -> Path | None:
        return self._path

    def __str__(self) -> str:
        return self._content

    def __repr__(self) -> str:
        return f"SourceDocument(path={self._path!s}, size={len(self._content)})"

    # ── Location ────────────────────────────────────────────────

    def has_marker(self, name: str) -> bool:
        return _markers.has_marker(self._content, name, self.comment_token)

    def has_pair(self, pair: MarkerPair) -> bool:
        return _markers.has_pair(self._content, pair, self.comment_token)

    def locate(self, name: str) -> _markers.MarkerLocation | None:
        return _markers.locate(self._content, name, self.comment_token)

    def locate_pair(
        self, start: str, end: str
    ) -> tuple[_markers.MarkerLocation, _markers.MarkerLocation]:
        return _markers.locate_pair(self._content, start, end, self.comment_token)

    def markers(self) -> list[_markers.FoundMarker]:
        return _markers.find_markers(self._content, self.comment_token)

    # ── Injection ───────────────────────────────────────────────

    def inject_between(self, start: str, end: str, fragment: str) -> bool:
        """Append ``fragment`` just before the END marker of a pair.

        The fragment takes the END marker's indentation.  If the text
        between the markers already contains the trimmed fragment, nothing
        changes.

        Returns:
            True if the document changed, False for a duplicate.

        Raises:
            MarkerNotFound: Either marker is missing.
            MarkerOrderInvalid: END precedes START.
        """
        start_loc, end_loc = self.locate_pair(start, end)

        interior = self._content[start_loc.end:end_loc.start]
        newline = self._line_ending(end_loc)
        block = indent_fragment(fragment, end_loc.indent, newline)
        if fragment.strip() in interior or block.strip() in interior:
            logger.debug("Fragment already present between %s and %s, skipping", start, end)
            return False

        self.insert(end_loc.start, block + newline)
        logger.debug("Injected %d line(s) before %s", block.count("\n") + 1, end)
        return True

    def inject_after(self, marker: str, fragment: str) -> bool:
        """Insert ``fragment`` on the line(s) following a point marker."""
        loc = _markers.require(self._content, marker, comment_token=self.comment_token)
        newline = self._line_ending(loc)
        self.insert(loc.end, newline + indent_fragment(fragment, loc.indent, newline))
        return True

    def inject_before(self, marker: str, fragment: str) -> bool:
        """Insert ``fragment`` on the line(s) preceding a point marker."""
        loc = _markers.require(self._content, marker, comment_token=self.comment_token)
        newline = self._line_ending(loc)
        self.insert(loc.start, indent_fragment(fragment, loc.indent, newline) + newline)
        return True

    def replace_between(self, start: str, end: str, fragment: str) -> bool:
        """Replace everything between a marker pair with ``fragment``.

        An empty fragment leaves the section blank (markers on adjacent
        lines).

        Returns:
            True if the document changed.
        """
        start_loc, end_loc = self.locate_pair(start, end)

        # Interior begins on the line after the START marker
        body_start = self._content.index("\n", start_loc.end) + 1
        body = ""
        if fragment.strip():
            newline = self._line_ending(end_loc)
            body = indent_fragment(fragment, end_loc.indent, newline) + newline

        new_content = self._content[:body_start] + body + self._content[end_loc.start:]
        if new_content == self._content:
            return False
        self._content = new_content
        self.modified = True
        return True

    def _line_ending(self, loc: _markers.MarkerLocation) -> str:
        """The newline sequence terminating a marker line."""
        return "\r\n" if self._content.startswith("\r", loc.end) else "\n"

    def inject_section(self, pair: MarkerPair, fragment: str) -> bool:
        return self.inject_between(pair.start, pair.end, fragment)

    def insert(self, pos: int, text: str) -> None:
        """Insert raw text at an offset (no indentation, no dedup)."""
        self._content = self._content[:pos] + text + self._content[pos:]
        self.modified = True

    # ── Persistence ─────────────────────────────────────────────

    def save(self) -> None:
        """Write the buffer back to the path it was loaded from."""
        if self._path is None:
            raise FileSystemError("<unbound>", "no file path set")
        self.save_to(self._path)

    def save_to(self, path: Path | str) -> None:
        """Overwrite ``path`` with the whole buffer."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as fh:
                fh.write(self._content)
        except OSError as e:
            raise FileSystemError(path, f"failed to write file ({e.strerror or e})") from e
        if path == self._path:
            self.modified = False
        logger.info("Saved %s", path)
