"""
OCLint Runner
=============
Runs OCLint against the compilation database and converts its JSON report
into ViolationRecord objects.

The linter is always asked for its JSON report: rendering into text, PMD or
JSON is done by the report formatter, so every run mode sees the same
structured data regardless of the format the user asked for.

OUTPUT CONTRACT:
  run_full_lint() / run_incremental_lint() -> raw JSON report string
  parse_lint_report(raw) -> List[ViolationRecord] (report order)
"""
import json
import logging
import os
import shutil
from typing import List, Optional, Sequence

from pydantic import ValidationError

from xclint.core.config import LINT_EXCLUDE, MAX_PRIORITY_THRESHOLD
from xclint.core.errors import CollaboratorFailure, MalformedDataError
from xclint.executor.process_runner import run_command
from xclint.models.violation import ViolationRecord

logger = logging.getLogger(__name__)

REPORT_TYPE = "json"


# ===================================================================
# Binary Discovery
# ===================================================================
def oclint_bin_dir() -> str:
    """
    Directory holding the oclint binaries (oclint, oclint-xcodebuild,
    oclint-json-compilation-database), found from `oclint` on PATH.
    """
    oclint = shutil.which("oclint")
    if oclint is None:
        raise CollaboratorFailure("oclint not found", ["which", "oclint"])
    bin_dir = os.path.dirname(os.path.realpath(oclint))
    if not os.path.isdir(bin_dir):
        raise CollaboratorFailure(f"oclint not found in '{bin_dir}'", ["which", "oclint"])
    return bin_dir


# ===================================================================
# Command Builders
# ===================================================================
def priority_threshold_args(threshold: int = MAX_PRIORITY_THRESHOLD) -> list[str]:
    return [f"-max-priority-{p}={threshold}" for p in (1, 2, 3)]


def build_full_lint_command(bin_dir: str, exclude: str = LINT_EXCLUDE) -> list[str]:
    cmd = [os.path.join(bin_dir, "oclint-json-compilation-database")]
    if exclude:
        cmd += ["-e", exclude]
    cmd += ["--", "--report-type", REPORT_TYPE, *priority_threshold_args()]
    return cmd


def build_incremental_lint_command(bin_dir: str, files: Sequence[str]) -> list[str]:
    return [
        os.path.join(bin_dir, "oclint"),
        "--report-type", REPORT_TYPE,
        *priority_threshold_args(),
        *files,
    ]


# ===================================================================
# Runners
# ===================================================================
def run_full_lint(bin_dir: Optional[str] = None, cwd: Optional[str] = None) -> str:
    """Lint every file in the compilation database; returns the raw JSON report."""
    cmd = build_full_lint_command(bin_dir or oclint_bin_dir())
    logger.info("Running full linter")
    result = run_command(cmd, "Failed running full linter", cwd=cwd, discard_stderr=True)
    return result.stdout


def run_incremental_lint(
    files: Sequence[str],
    bin_dir: Optional[str] = None,
    cwd: Optional[str] = None,
) -> str:
    """Lint only `files`; an empty file list lints nothing and returns ''."""
    if not files:
        return ""
    cmd = build_incremental_lint_command(bin_dir or oclint_bin_dir(), files)
    logger.info("Running incremental linter")
    result = run_command(
        cmd, "Failed running incremental linter", cwd=cwd, discard_stderr=True,
    )
    return result.stdout


# ===================================================================
# Report Parsing
# ===================================================================
def parse_lint_report(raw: str) -> List[ViolationRecord]:
    """
    Parse oclint's JSON report into ViolationRecords.

    An empty report (nothing was linted) yields no violations.  Anything
    that is not a JSON object with a `violation` array of well-formed
    entries raises MalformedDataError.
    """
    if not raw or not raw.strip():
        return []

    try:
        report = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedDataError(f"lint report is not valid JSON: {e}") from e

    if not isinstance(report, dict):
        raise MalformedDataError("lint report must be a JSON object")

    entries = report.get("violation", [])
    if not isinstance(entries, list):
        raise MalformedDataError("lint report 'violation' must be an array")

    records: list[ViolationRecord] = []
    for index, entry in enumerate(entries):
        try:
            records.append(ViolationRecord.model_validate(entry))
        except ValidationError as e:
            raise MalformedDataError(f"violation #{index} is malformed: {e}") from e

    logger.info("Lint report contains %d violations", len(records))
    return records
