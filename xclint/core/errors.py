"""
Errors
======
Every failure this tool can raise is fatal: nothing is retried and no
partial report is produced.  Only the CLI entry point catches XclintError.

    CollaboratorFailure  - an external tool (xcodebuild, oclint, git) exited
                           non-zero, was not found, or timed out.
    MalformedDataError   - linter output could not be parsed into violations.
    OutputError          - the report file could not be written.
"""
import shlex
from typing import Optional, Sequence


class XclintError(Exception):
    """Base class for all errors raised by xclint."""


class CollaboratorFailure(XclintError, RuntimeError):
    def __init__(
        self,
        description: str,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        self.description = description
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"{description} - command ran was : '{format_command(self.command)}'"
        )


class MalformedDataError(XclintError, ValueError):
    pass


def format_command(command: Sequence[str]) -> str:
    """Render an argument list the way it would be typed in a shell."""
    return " ".join(shlex.quote(part) for part in command)


class OutputError(XclintError):
    """The rendered report could not be written to its destination."""
