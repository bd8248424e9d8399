"""
Unit Tests - Report Formatter
=============================
Validates exact text, PMD and JSON renderings.
Every assertion on rendered output uses exact string equality.
"""
import json

import pytest

from xclint.core.report_formatter import (
    PMD_ATTRIBUTES,
    ReportFormat,
    format_violation_line,
    relativize,
    render_json,
    render_pmd,
    render_report,
    render_text,
)
from xclint.models.violation import ViolationRecord
from xclint.models.violation_store import ViolationStore


def make_violation(path="A.m", line=1, priority=1, rule="R", message="m", **extra):
    fields = dict(
        path=path, startLine=line, endLine=line, startColumn=1, endColumn=2,
        priority=priority, rule=rule, message=message,
    )
    fields.update(extra)
    return ViolationRecord(**fields)


@pytest.fixture
def example_set():
    return ViolationStore.group([
        make_violation("A.m", 10, 1, "R1", "m1"),
        make_violation("A.m", 5, 2, "R2", "m2"),
    ])


# ---------------------------------------------------------------------------
# 1. Text
# ---------------------------------------------------------------------------
class TestRenderText:

    def test_example_output(self, example_set):
        assert render_text(example_set) == "A.m\n  5: R2 (P2) m2\n  10: R1 (P1) m1"

    def test_empty_set_is_empty_string(self):
        assert render_text(ViolationStore()) == ""

    def test_only_clean_paths_is_empty_string(self):
        assert render_text(ViolationStore({"B.m": []})) == ""

    def test_skips_clean_paths(self):
        store = ViolationStore({"B.m": [], "A.m": [make_violation("A.m", 1, 3, "R", "x")]})
        assert render_text(store) == "A.m\n  1: R (P3) x"

    def test_multiple_paths_keep_store_order(self):
        store = ViolationStore.group([
            make_violation("B.m", 2, 1, "R", "b"),
            make_violation("A.m", 1, 1, "R", "a"),
        ])
        assert render_text(store) == "B.m\n  2: R (P1) b\nA.m\n  1: R (P1) a"

    def test_relativizes_against_root(self):
        store = ViolationStore.group([make_violation("/repo/src/A.m", 4, 2, "R", "m")])
        assert render_text(store, "/repo") == "src/A.m\n  4: R (P2) m"

    def test_root_with_trailing_slash(self):
        store = ViolationStore.group([make_violation("/repo/A.m", 4, 2, "R", "m")])
        assert render_text(store, "/repo/") == "A.m\n  4: R (P2) m"

    def test_path_outside_root_is_unchanged(self):
        store = ViolationStore.group([make_violation("/other/A.m", 4, 2, "R", "m")])
        assert render_text(store, "/repo") == "/other/A.m\n  4: R (P2) m"

    def test_violation_line(self):
        v = make_violation("A.m", 12, 3, "long line", "Line with 120 characters")
        assert format_violation_line(v) == "  12: long line (P3) Line with 120 characters"


class TestRelativize:

    def test_prefix_only_at_directory_boundary(self):
        assert relativize("/repository/A.m", "/repo") == "/repository/A.m"

    def test_no_root(self):
        assert relativize("/repo/A.m", None) == "/repo/A.m"


# ---------------------------------------------------------------------------
# 2. PMD
# ---------------------------------------------------------------------------
class TestRenderPmd:

    def test_empty_set(self):
        assert render_pmd(ViolationStore()) == '<pmd version="oclint-0.8dev">\n</pmd>'

    def test_clean_paths_render_no_files(self):
        assert render_pmd(ViolationStore({"B.m": []})) == '<pmd version="oclint-0.8dev">\n</pmd>'

    def test_single_violation(self):
        store = ViolationStore.group([ViolationRecord(
            path="/repo/A.m", startLine=3, endLine=4, startColumn=5, endColumn=6,
            priority=2, rule="unused method parameter", message="The parameter 'x' is unused.",
        )])
        assert render_pmd(store) == (
            '<pmd version="oclint-0.8dev">\n'
            '<file name="/repo/A.m">\n'
            '  <violation begincolumn="5" endcolumn="6" beginline="3" endline="4"'
            ' priority="2" rule="unused method parameter">'
            "The parameter 'x' is unused.</violation>\n"
            "</file>\n"
            "</pmd>"
        )

    def test_one_file_wrapper_per_violation_sorted_by_line(self, example_set):
        lines = render_pmd(example_set).split("\n")
        assert lines.count('<file name="A.m">') == 2
        violations = [l for l in lines if l.startswith("  <violation")]
        assert 'beginline="5"' in violations[0]
        assert 'beginline="10"' in violations[1]

    def test_escapes_markup(self):
        store = ViolationStore.group([make_violation("A.m", 1, 1, "R", "a < b && c")])
        assert "a &lt; b &amp;&amp; c</violation>" in render_pmd(store)

    def test_attribute_names(self):
        assert [attr for _, attr in PMD_ATTRIBUTES] == [
            "begincolumn", "endcolumn", "beginline", "endline", "priority", "rule",
        ]
        for field, attr in PMD_ATTRIBUTES:
            assert attr == field.replace("start", "begin").lower()


# ---------------------------------------------------------------------------
# 3. JSON
# ---------------------------------------------------------------------------
class TestRenderJson:

    def test_round_trips_wire_fields(self, example_set):
        data = json.loads(render_json(example_set))
        assert list(data) == ["A.m"]
        assert data["A.m"][0] == {
            "path": "A.m", "startLine": 10, "endLine": 10, "startColumn": 1,
            "endColumn": 2, "priority": 1, "rule": "R1", "message": "m1",
        }

    def test_keeps_clean_paths(self):
        assert json.loads(render_json(ViolationStore({"B.m": []}))) == {"B.m": []}

    def test_keeps_category(self):
        store = ViolationStore.group([make_violation(category="basic")])
        assert json.loads(render_json(store))["A.m"][0]["category"] == "basic"

    def test_is_pretty_printed(self, example_set):
        assert render_json(example_set).startswith('{\n  "A.m": [\n')

    def test_empty(self):
        assert render_json(ViolationStore()) == "{}"


# ---------------------------------------------------------------------------
# 4. Dispatch
# ---------------------------------------------------------------------------
class TestRenderReport:

    def test_dispatches_each_format(self, example_set):
        assert render_report(example_set, ReportFormat.TEXT) == render_text(example_set)
        assert render_report(example_set, ReportFormat.PMD) == render_pmd(example_set)
        assert render_report(example_set, ReportFormat.JSON) == render_json(example_set)

    def test_accepts_format_value(self, example_set):
        assert render_report(example_set, "pmd") == render_pmd(example_set)

    def test_only_text_uses_root(self):
        store = ViolationStore.group([make_violation("/repo/A.m")])
        assert render_report(store, ReportFormat.TEXT, "/repo").startswith("A.m\n")
        assert '<file name="/repo/A.m">' in render_report(store, ReportFormat.PMD, "/repo")

    def test_rejects_unknown_format(self, example_set):
        with pytest.raises(ValueError):
            render_report(example_set, "html")
