"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    XCLINT_DEFAULT_BRANCH   - Branch to diff against in diff mode (default: master)
    XCLINT_REMOTE           - Remote that holds the branch (default: origin)
    XCLINT_SDK              - SDK passed to xcodebuild (default: iphonesimulator)
    XCLINT_BUILD_LOG        - Where the dry-run build log is written (default: xcodebuild.log)
    XCLINT_EXCLUDE          - Path filter excluded from full lint runs (default: Pods)
    XCLINT_SOURCE_SUFFIXES  - Comma-separated suffixes linted in diff mode (default: .m)
    XCLINT_MAX_PRIORITY     - Per-priority violation threshold handed to oclint (default: 99999)
    XCLINT_COMMAND_TIMEOUT  - Max seconds for a single external command (default: 1800)
    XCLINT_LOG_FILE         - Optional file that receives a copy of the log

Threshold Philosophy:
    oclint exits non-zero once a priority exceeds its threshold. The
    thresholds are raised far above any realistic count so the exit status
    only reflects tool failures; violations are judged by this tool instead.
"""
import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_BRANCH = os.getenv("XCLINT_DEFAULT_BRANCH", "master")
REMOTE = os.getenv("XCLINT_REMOTE", "origin")
XCODE_SDK = os.getenv("XCLINT_SDK", "iphonesimulator")
BUILD_LOG = os.getenv("XCLINT_BUILD_LOG", "xcodebuild.log")
LINT_EXCLUDE = os.getenv("XCLINT_EXCLUDE", "Pods")

SOURCE_SUFFIXES: tuple[str, ...] = tuple(
    s.strip() for s in os.getenv("XCLINT_SOURCE_SUFFIXES", ".m").split(",") if s.strip()
)

MAX_PRIORITY_THRESHOLD = int(os.getenv("XCLINT_MAX_PRIORITY", 99999))

# Execution timeout in seconds for a single external command
COMMAND_TIMEOUT = int(os.getenv("XCLINT_COMMAND_TIMEOUT", 1800))

LOG_FILE = os.getenv("XCLINT_LOG_FILE") or None
