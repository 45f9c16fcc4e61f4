"""
Tests for the marker locator — line matching, pairs, listing.
"""

import pytest

from scaffoldkit.core.errors import MarkerNotFound, MarkerOrderInvalid
from scaffoldkit.core.services.markers import (
    MarkerPair,
    Section,
    find_markers,
    has_marker,
    has_pair,
    locate,
    locate_pair,
    missing_markers,
)

TEXT = "func main() {\n\t// MCP:REPOS:START\n\t// MCP:REPOS:END\n}\n"


class TestLocate:
    def test_captures_indent_and_offsets(self):
        loc = locate(TEXT, "MCP:REPOS:END")
        assert loc is not None
        assert loc.indent == "\t"
        assert TEXT[loc.start:loc.end] == "\t// MCP:REPOS:END"

    def test_missing_returns_none(self):
        assert locate(TEXT, "MCP:MODELS:START") is None

    def test_whole_line_only(self):
        """A marker name inside other code is not a marker."""
        text = 'x := "// MCP:REPOS:START"\n'
        assert locate(text, "MCP:REPOS:START") is None

    def test_name_must_match_exactly(self):
        """START is not found as a prefix of a longer name."""
        text = "// MCP:ROUTES:PUBLIC:START\n"
        assert locate(text, "MCP:ROUTES:START") is None
        assert locate(text, "MCP:ROUTES:PUBLIC:START") is not None

    def test_trailing_whitespace_allowed(self):
        loc = locate("    //   MCP:X:START   \n", "MCP:X:START")
        assert loc is not None
        assert loc.indent == "    "

    def test_crlf_line_endings(self):
        text = "a\r\n\t// MCP:X:END\r\nb\r\n"
        loc = locate(text, "MCP:X:END")
        assert loc is not None
        assert text[loc.end] == "\r"

    def test_custom_comment_token(self):
        text = "  # MCP:X:START\n"
        assert locate(text, "MCP:X:START") is None
        assert locate(text, "MCP:X:START", comment_token="#") is not None

    def test_first_occurrence_wins(self):
        text = "// M:A\n  // M:A\n"
        assert locate(text, "M:A").indent == ""


class TestLocatePair:
    def test_ordered_pair(self):
        start, end = locate_pair(TEXT, "MCP:REPOS:START", "MCP:REPOS:END")
        assert start.start < end.start

    def test_missing_start(self):
        with pytest.raises(MarkerNotFound) as exc:
            locate_pair(TEXT, "MCP:NOPE:START", "MCP:REPOS:END")
        assert exc.value.marker == "MCP:NOPE:START"
        assert "start marker not found" in str(exc.value)

    def test_missing_end(self):
        with pytest.raises(MarkerNotFound) as exc:
            locate_pair(TEXT, "MCP:REPOS:START", "MCP:NOPE:END")
        assert exc.value.kind == "end"

    def test_reversed_pair(self):
        text = "// A:END\n// A:START\n"
        with pytest.raises(MarkerOrderInvalid):
            locate_pair(text, "A:START", "A:END")


class TestHelpers:
    def test_section_pair_names(self):
        pair = MarkerPair.for_section(Section.ROUTES_ADMIN)
        assert pair.start == "MCP:ROUTES:ADMIN:START"
        assert pair.end == "MCP:ROUTES:ADMIN:END"

    def test_custom_prefix(self):
        assert MarkerPair.for_section(Section.MODELS, "GEN").start == "GEN:MODELS:START"

    def test_has_marker_and_pair(self):
        assert has_marker(TEXT, "MCP:REPOS:START")
        assert has_pair(TEXT, MarkerPair.for_section(Section.REPOS))
        assert not has_pair(TEXT, MarkerPair.for_section(Section.SERVICES))

    def test_missing_markers_keeps_order(self):
        names = ["MCP:SERVICES:START", "MCP:REPOS:START", "MCP:MODELS:START"]
        assert missing_markers(TEXT, names) == ["MCP:SERVICES:START", "MCP:MODELS:START"]

    def test_find_markers(self):
        found = find_markers(TEXT + "\t\t// MCP:ROUTES:ADMIN:START\n// not a marker\n")
        assert [m.name for m in found] == [
            "MCP:REPOS:START",
            "MCP:REPOS:END",
            "MCP:ROUTES:ADMIN:START",
        ]
        assert found[0].line == 2
        assert found[2].indent == "\t\t"
