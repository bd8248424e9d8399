"""
Process Runner
==============
Runs one external command to completion and returns its output.

BOUNDARY RULES:
    - Runner ONLY executes; it never interprets tool output.
    - Every call blocks until the process exits or the timeout expires.
    - Non-zero exit, missing binary and timeout all raise CollaboratorFailure.
      Nothing is retried.
"""
import logging
import subprocess
from typing import IO, Optional, Sequence

from xclint.core.config import COMMAND_TIMEOUT
from xclint.core.errors import CollaboratorFailure, format_command

logger = logging.getLogger(__name__)


def run_command(
    command: Sequence[str],
    description: str,
    *,
    cwd: Optional[str] = None,
    stdout: Optional[IO[str]] = None,
    discard_stderr: bool = False,
    check: bool = True,
    timeout: Optional[float] = COMMAND_TIMEOUT,
) -> subprocess.CompletedProcess:
    """
    Execute `command` and return the completed process.

    Parameters
    ----------
    command : Sequence[str]
        Argument list; never passed through a shell.
    description : str
        What failed, used as the CollaboratorFailure message.
    stdout : IO[str] | None
        Open file to stream stdout into instead of capturing it.
    discard_stderr : bool
        Send stderr to /dev/null (tools that are noisy on stderr).
    check : bool
        When False a non-zero exit is returned to the caller instead of raised.
    """
    argv = list(command)
    logger.debug("  [executing] %s", format_command(argv))

    try:
        result = subprocess.run(
            argv,
            cwd=cwd,
            stdout=stdout if stdout is not None else subprocess.PIPE,
            stderr=subprocess.DEVNULL if discard_stderr else subprocess.PIPE,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        logger.error("%s: executable not found: %s", description, argv[0])
        raise CollaboratorFailure(description, argv) from e
    except subprocess.TimeoutExpired as e:
        logger.error("%s: timed out after %ss", description, timeout)
        raise CollaboratorFailure(description, argv) from e

    if check and result.returncode != 0:
        stderr = result.stderr or ""
        logger.error("%s (exit %d): %s", description, result.returncode, stderr.strip())
        raise CollaboratorFailure(description, argv, result.returncode, stderr)

    return result
