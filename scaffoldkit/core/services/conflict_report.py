"""
Conflict reporter — serialize refused writes for an upstream decision.

The report is a small XML document.  Paths and descriptions are
entity-escaped; proposed file content is carried verbatim in CDATA so
generated code stays readable.  A ``]]>`` inside the content is split
across two adjacent CDATA sections, which any XML parser joins back
into the original text.

The suggested actions are labels only.  Nothing here resolves a conflict.
"""

from __future__ import annotations

import logging
from xml.sax.saxutils import escape, quoteattr

from scaffoldkit.core.models.result import FileConflict, GenerationResult, ScaffoldResult

logger = logging.getLogger(__name__)

SUGGESTED_ACTIONS = ("manual_merge", "skip", "backup_and_replace")

CONFLICT_INSTRUCTION = (
    "These files already exist and were not overwritten. "
    "Review each proposed content and choose one of the suggested actions; "
    "re-run with force overwrite only after the existing files are safe to replace."
)

_CDATA_END = "]]>"


def cdata(payload: str) -> str:
    """Wrap ``payload`` in CDATA, splitting any embedded terminator."""
    return "<![CDATA[" + payload.replace(_CDATA_END, "]]]]><![CDATA[>") + "]]>"


def render_conflict_report(conflicts: list[FileConflict]) -> str:
    """Render the conflict list as an XML report (empty string for no conflicts)."""
    if not conflicts:
        return ""

    lines = [
        f'<file_conflicts count="{len(conflicts)}">',
        "  <summary>",
        f"    <count>{len(conflicts)}</count>",
        f"    <instruction>{escape(CONFLICT_INSTRUCTION)}</instruction>",
        "  </summary>",
    ]
    for index, conflict in enumerate(conflicts, start=1):
        lines.append(f"  <conflict index={quoteattr(str(index))}>")
        lines.append(f"    <path>{escape(conflict.path)}</path>")
        lines.append(f"    <description>{escape(conflict.description)}</description>")
        lines.append(f"    <proposed_content>{cdata(conflict.proposed_content)}</proposed_content>")
        lines.append("    <suggested_actions>")
        lines.extend(f"      <action>{action}</action>" for action in SUGGESTED_ACTIONS)
        lines.append("    </suggested_actions>")
        lines.append("  </conflict>")
    lines.append("</file_conflicts>")
    return "\n".join(lines) + "\n"


def conflict_result(result: GenerationResult) -> ScaffoldResult | None:
    """Turn a writer result with conflicts into a failed ScaffoldResult.

    Returns None when there is nothing to report, so callers can write::

        if (failed := conflict_result(writer.result())) is not None:
            return failed
    """
    if not result.has_conflicts:
        return None

    count = len(result.conflicts)
    logger.warning("%d file conflict(s), operation needs confirmation", count)

    steps = [
        "Review the proposed content for each conflicting file",
        "Merge the changes you want by hand, or skip the file",
        "Back up the existing files and re-run with --force to replace them",
    ]
    if result.written:
        steps.insert(0, f"{len(result.written)} other file(s) were written; see files_created/files_updated")

    return ScaffoldResult.error(
        f"{count} file(s) already exist and were not overwritten",
        files_created=list(result.files_created),
        files_updated=list(result.files_updated),
        files_skipped=[c.path for c in result.conflicts],
        conflicts=list(result.conflicts),
        conflict_report=render_conflict_report(result.conflicts),
        next_steps=steps,
    )
