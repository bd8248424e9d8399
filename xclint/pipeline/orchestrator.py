"""
Lint Orchestrator
=================
Drives one lint run from build-command generation to the final report.

Pipeline (linear, no retries):
    [generate build log → convert to compilation database]   unless incremental
    → lint (whole database, or only files that differ from <remote>/<branch>)
    → parse JSON report → group by file
    → [filter to lines changed since the first unpushed commit]   new-only mode
    → render report (text / pmd / json) → summarize

Any collaborator failure raises out of run() before a report is written.
The repository root is resolved once and passed down explicitly; full mode
tolerates running outside a git checkout.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from xclint.core.constants import CLEAN_MESSAGE
from xclint.core.errors import CollaboratorFailure, OutputError
from xclint.core.report_formatter import ReportFormat, render_report
from xclint.executor.xcodebuild import convert_build_log, generate_build_log
from xclint.models.lint_options import LintOptions
from xclint.models.violation_store import FilteredViolationSet, ViolationStore
from xclint.services.changed_line_filter import ChangedLines, filter_violations
from xclint.services.git_client import GitClient
from xclint.services.oclint_runner import (
    oclint_bin_dir,
    parse_lint_report,
    run_full_lint,
    run_incremental_lint,
)
from xclint.services.summary import summarize

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lint Outcome (returned to the CLI)
# ---------------------------------------------------------------------------
@dataclass
class LintOutcome:
    """
    Result of a completed lint run.

    Fields
    ------
    violations : FilteredViolationSet
        Grouped violations after the optional changed-line filter.
    report : str
        Violations rendered in the requested format.
    details : str
        Violations rendered as text; drives the exit code.
    summary : str | None
        Summary line, or None when no file was reported at all.
    exit_code : int
        1 when the text details are non-empty, else 0.
    """
    violations: FilteredViolationSet
    report: str
    details: str
    summary: Optional[str]
    exit_code: int

    @property
    def clean(self) -> bool:
        return self.summary is None

    @property
    def message(self) -> str:
        return CLEAN_MESSAGE if self.clean else self.summary


class LintOrchestrator:
    """
    Composes the external collaborators and the violation pipeline.
    """

    def __init__(self, git: Optional[GitClient] = None, root_dir: Optional[str] = None) -> None:
        self.git = git or GitClient()
        self._root_dir = root_dir

    def resolve_root_dir(self, required: bool) -> Optional[str]:
        """
        Repository root used to relativize text paths and anchor diffed files.
        Diff mode cannot run without it; full mode falls back to None, which
        leaves linter paths unchanged.
        """
        if self._root_dir is not None:
            return self._root_dir
        try:
            self._root_dir = self.git.top_level_dir()
        except CollaboratorFailure:
            if required:
                raise
            logger.warning("Not inside a git checkout, reporting paths unchanged")
            return None
        return self._root_dir

    # -------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------
    def prepare_compilation_database(self, options: LintOptions, bin_dir: str) -> None:
        generate_build_log(options.workspace, options.scheme)
        convert_build_log(bin_dir)

    def collect_violations(
        self, options: LintOptions, bin_dir: str, root_dir: Optional[str] = None,
    ) -> ViolationStore:
        if options.use_diff:
            # git reports paths relative to the repository root, not the cwd
            files = [
                os.path.join(root_dir, f) if root_dir else f
                for f in self.git.diff_files(options.branch)
            ]
            raw = run_incremental_lint(files, bin_dir=bin_dir)
        else:
            raw = run_full_lint(bin_dir=bin_dir)
        return ViolationStore.group(parse_lint_report(raw))

    def changed_lines(self, store: ViolationStore, branch: str) -> ChangedLines:
        base = self.git.pr_base_commit(branch)
        return self.git.changed_lines(store.paths(), base)

    # -------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------
    def run(self, options: LintOptions) -> LintOutcome:
        root_dir = self.resolve_root_dir(required=options.use_diff)
        bin_dir = oclint_bin_dir()

        if not options.skip_generation:
            self.prepare_compilation_database(options, bin_dir)

        store = self.collect_violations(options, bin_dir, root_dir)

        changed: Optional[ChangedLines] = None
        if options.new_violations_only:
            changed = self.changed_lines(store, options.branch)
        violations = filter_violations(store, changed)

        report = render_report(violations, options.report_format, root_dir)
        if options.output:
            write_report(report, options.output)

        if len(violations) == 0:
            logger.info(CLEAN_MESSAGE)
            return LintOutcome(violations, report, "", None, 0)

        details = render_report(violations, ReportFormat.TEXT, root_dir)
        summary = summarize(violations)
        exit_code = 1 if details.strip() else 0
        logger.info("Lint finished: %s", summary)
        return LintOutcome(violations, report, details, summary, exit_code)


def write_report(report: str, output_path: str) -> None:
    logger.info("Writing report to %s", output_path)
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report)
    except OSError as e:
        logger.error("Failed writing report to %s: %s", output_path, e)
        raise OutputError(f"Failed writing report to {output_path}: {e}") from e
