"""
Report Formatter
================
THE SINGLE SOURCE OF TRUTH for all rendered lint reports.

STRICT DETERMINISM CONTRACT:
  - This module NEVER runs an external tool.
  - This module NEVER reads environment variables or the working directory.
  - Given the same violations and root directory, it ALWAYS returns the
    exact same string.

FORMATS (closed set, dispatched once in render_report):
  text - path, then "  <startLine>: <rule> (P<priority>) <message>" per line
  pmd  - PMD-style XML understood by CI dashboards
  json - pretty-printed mapping path → violations, oclint field names

Paths without violations are skipped by text and pmd; json keeps them.
"""
import json
from enum import Enum
from typing import Optional
from xml.sax.saxutils import escape, quoteattr

from xclint.core.constants import PMD_VERSION
from xclint.models.violation import ViolationRecord
from xclint.models.violation_store import FilteredViolationSet


class ReportFormat(str, Enum):
    TEXT = "text"
    PMD = "pmd"
    JSON = "json"


# ---------------------------------------------------------------------------
# PMD attribute order
# ---------------------------------------------------------------------------
# Wire field → PMD attribute.  Attribute names are the wire names lowercased
# with the "start" prefix replaced by "begin".
PMD_ATTRIBUTES: list[tuple[str, str]] = [
    ("startColumn", "begincolumn"),
    ("endColumn",   "endcolumn"),
    ("startLine",   "beginline"),
    ("endLine",     "endline"),
    ("priority",    "priority"),
    ("rule",        "rule"),
]


def _sorted_by_line(records: tuple[ViolationRecord, ...]) -> list[ViolationRecord]:
    return sorted(records, key=lambda v: v.start_line)


def relativize(path: str, root_dir: Optional[str]) -> str:
    """Strip the repository root from a linter path when it is a prefix."""
    if not root_dir:
        return path
    prefix = root_dir.rstrip("/") + "/"
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------
def format_violation_line(violation: ViolationRecord) -> str:
    return (
        f"  {violation.start_line}: {violation.rule}"
        f" (P{violation.priority}) {violation.message}"
    )


def render_text(violations: FilteredViolationSet, root_dir: Optional[str] = None) -> str:
    lines: list[str] = []
    for path, records in violations.items():
        if not records:
            continue
        lines.append(relativize(path, root_dir))
        lines.extend(format_violation_line(v) for v in _sorted_by_line(records))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# PMD
# ---------------------------------------------------------------------------
def format_pmd_violation(violation: ViolationRecord) -> str:
    wire = violation.to_wire()
    attrs = "".join(
        f" {attr}={quoteattr(str(wire[field]))}" for field, attr in PMD_ATTRIBUTES
    )
    return f"  <violation{attrs}>{escape(violation.message)}</violation>"


def render_pmd(violations: FilteredViolationSet) -> str:
    lines = [f'<pmd version="{PMD_VERSION}">']
    for path, records in violations.items():
        # One <file> wrapper per violation, matching oclint's own PMD reporter
        for v in _sorted_by_line(records):
            lines.append(f"<file name={quoteattr(path)}>")
            lines.append(format_pmd_violation(v))
            lines.append("</file>")
    lines.append("</pmd>")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------
def render_json(violations: FilteredViolationSet) -> str:
    return json.dumps(violations.to_wire(), indent=2)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------
def render_report(
    violations: FilteredViolationSet,
    fmt: ReportFormat,
    root_dir: Optional[str] = None,
) -> str:
    """
    Render a violation set in the requested format.

    Parameters
    ----------
    violations : FilteredViolationSet
        Grouped (and possibly filtered) violations.
    fmt : ReportFormat
        One of TEXT, PMD, JSON.
    root_dir : str | None
        Repository root; only the text format relativizes paths against it.

    Returns
    -------
    str
        The rendered report.  Never raises on well-formed violations.
    """
    fmt = ReportFormat(fmt)
    if fmt is ReportFormat.PMD:
        return render_pmd(violations)
    if fmt is ReportFormat.JSON:
        return render_json(violations)
    return render_text(violations, root_dir)
