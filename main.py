import argparse
import logging
import sys
from typing import Optional

from xclint.core.config import DEFAULT_BRANCH, LOG_FILE
from xclint.core.errors import XclintError
from xclint.core.report_formatter import ReportFormat
from xclint.models.lint_options import LintOptions
from xclint.pipeline.orchestrator import LintOrchestrator, LintOutcome
from xclint.utils.logging_config import setup_logging

logger = logging.getLogger("main")

EXAMPLES = """\
Examples:
     xclint -s 'Demo'              # Lint the 'Demo' xcode scheme
     xclint -w 'Demo.xcworkspace'  # Use the 'Demo.xcworkspace' workspace
     xclint -i                     # Run in fast mode
     xclint -d -b release/1.0      # Only lint the diff against the release/1.0 branch
     xclint -d -n                  # Lint against origin/master and report new committed unpushed violations
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="xclint",
        description="Run OCLint over an Xcode project and report violations.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "-i", "--incremental",
        dest="skip_generation",
        action="store_true",
        help="Run the lint operation, but don't update the compile commands database that "
             "oclint uses to determine how to build each file. Do this if you're confident "
             "that the xcode project hasn't changed since the last time you linted.",
    )
    p.add_argument(
        "-d", "--diff",
        dest="use_diff",
        action="store_true",
        help="Only lint the files that have changed according to git diff origin/<branch>. "
             "See -b to choose the branch.",
    )
    p.add_argument(
        "-b", "--branch",
        default=DEFAULT_BRANCH,
        help=f"Branch to diff against with -d or -n (default: {DEFAULT_BRANCH}).",
    )
    p.add_argument("-s", "--scheme", help="Xcode scheme to lint against.")
    p.add_argument("-w", "--workspace", help="Xcode workspace to lint against.")
    p.add_argument(
        "-f", "--format",
        dest="report_format",
        default=ReportFormat.TEXT.value,
        choices=[f.value for f in ReportFormat],
        help="Report format (default: text).",
    )
    p.add_argument(
        "-o", "--output",
        help="Path where the report should be saved (defaults to screen).",
    )
    p.add_argument(
        "-n", "--new-only",
        dest="new_violations_only",
        action="store_true",
        help="Report only violations on lines committed since origin/<branch> (implies -d).",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print commands executed to screen.",
    )
    return p


def parse_arguments(argv: Optional[list[str]] = None) -> LintOptions:
    args = build_parser().parse_args(argv)
    return LintOptions(**vars(args))


def print_outcome(outcome: LintOutcome, options: LintOptions) -> None:
    # Machine-readable reports own stdout unless they went to a file
    if options.report_format is not ReportFormat.TEXT and not options.output:
        logger.info(outcome.message)
        sys.stdout.write(outcome.report + "\n")
        return

    if outcome.clean:
        print(outcome.message)
        return

    print("\n")
    print(outcome.summary)
    print("\n")
    print(outcome.details)


def main(argv: Optional[list[str]] = None) -> int:
    options = parse_arguments(argv)
    setup_logging(level=logging.DEBUG if options.verbose else logging.INFO, log_file=LOG_FILE)

    try:
        outcome = LintOrchestrator().run(options)
    except XclintError as e:
        logger.error("%s", e)
        return 1

    print_outcome(outcome, options)
    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
