"""
Xcode Build Commands
====================
Produces the compilation database oclint needs to know how each file is built.

Two steps, both blocking:
    1. `xcodebuild -dry-run ... clean build` prints every compiler invocation
       without compiling; stdout is saved as the build log.
    2. `oclint-xcodebuild <log>` converts that log into compile_commands.json
       in the working directory.

Skipping both (incremental mode) reuses the last compilation database.
"""
import logging
import os
from typing import Optional

from xclint.core.config import BUILD_LOG, XCODE_SDK
from xclint.executor.process_runner import run_command

logger = logging.getLogger(__name__)


def build_xcodebuild_command(
    workspace: Optional[str] = None,
    scheme: Optional[str] = None,
    sdk: str = XCODE_SDK,
) -> list[str]:
    cmd = ["xcodebuild", "-dry-run", "-sdk", sdk]
    if workspace:
        cmd += ["-workspace", workspace]
    if scheme:
        cmd += ["-scheme", scheme]
    cmd += ["clean", "build"]
    return cmd


def generate_build_log(
    workspace: Optional[str] = None,
    scheme: Optional[str] = None,
    log_path: str = BUILD_LOG,
    cwd: Optional[str] = None,
) -> str:
    """Run the dry-run build, writing its stdout to `log_path`. Returns the log path."""
    cmd = build_xcodebuild_command(workspace, scheme)
    logger.info("Generating build commands")
    with open(log_path, "w", encoding="utf-8") as log_file:
        run_command(
            cmd,
            "Failed generating build commands",
            cwd=cwd,
            stdout=log_file,
            discard_stderr=True,
        )
    logger.debug("  XCode build commands saved as %s", log_path)
    return log_path


def convert_build_log(
    oclint_bin_dir: str,
    log_path: str = BUILD_LOG,
    cwd: Optional[str] = None,
) -> None:
    """Turn the build log into compile_commands.json via oclint-xcodebuild."""
    cmd = [os.path.join(oclint_bin_dir, "oclint-xcodebuild"), log_path]
    logger.info("Converting xcodebuild output to json")
    run_command(cmd, "Failed converting xcodebuild output to json", cwd=cwd)
