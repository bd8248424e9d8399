"""
Lint Options Model
==================
Pydantic model for one run's configuration, as collected by the CLI.

Fields:
    skip_generation     - reuse the existing compilation database (-i)
    use_diff            - lint only files that differ from <remote>/<branch> (-d)
    branch              - branch to diff against (-b)
    scheme / workspace  - Xcode scheme and workspace for the dry-run build
    report_format       - text, pmd or json
    new_violations_only - keep only violations on lines changed since the
                          first unpushed commit (-n); implies use_diff
    verbose             - echo executed commands
    output              - file the rendered report is written to
"""
from typing import Optional

from pydantic import BaseModel, model_validator

from xclint.core.config import DEFAULT_BRANCH
from xclint.core.report_formatter import ReportFormat


class LintOptions(BaseModel):
    skip_generation: bool = False
    use_diff: bool = False
    branch: str = DEFAULT_BRANCH
    scheme: Optional[str] = None
    workspace: Optional[str] = None
    report_format: ReportFormat = ReportFormat.TEXT
    new_violations_only: bool = False
    verbose: bool = False
    output: Optional[str] = None

    @model_validator(mode="after")
    def _new_only_implies_diff(self) -> "LintOptions":
        if self.new_violations_only:
            self.use_diff = True
        return self
