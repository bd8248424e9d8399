"""
Git Client
==========
Read-only repository queries used by diff mode and new-violations mode.

Queries:
    - top-level directory of the repository
    - source files that differ from <remote>/<branch>
    - first commit on HEAD that is not on <remote>/<branch>
    - line numbers changed since a commit, per file (git blame)

The client never writes to the repository.
"""
import logging
import subprocess
from typing import Dict, Iterable, List, Optional, Set

from xclint.core.config import DEFAULT_BRANCH, REMOTE, SOURCE_SUFFIXES
from xclint.core.constants import NO_FILES_MESSAGE
from xclint.executor.process_runner import run_command

logger = logging.getLogger(__name__)


def parse_blame_line_numbers(blame_output: str) -> Set[int]:
    """
    Extract final line numbers from `git blame -s` output.

    Typical line:  3f1c0a...e9 12) [self doSomething];
    Lines attributed to the boundary commit start with '^' and did not
    change inside the blamed range.
    """
    lines: Set[int] = set()
    for raw in blame_output.splitlines():
        if not raw or raw.startswith("^"):
            continue
        head = raw.split(")", 1)[0].split()
        if len(head) < 2:
            continue
        try:
            lines.add(int(head[-1]))
        except ValueError:
            logger.debug("blame: unparseable line '%s', skipping", raw)
    return lines


class GitClient:
    """
    Thin wrapper over the git CLI, bound to one working directory.
    """

    def __init__(self, cwd: Optional[str] = None, remote: str = REMOTE) -> None:
        self.cwd = cwd
        self.remote = remote

    def _git(self, *args: str, description: str, check: bool = True) -> subprocess.CompletedProcess:
        return run_command(["git", *args], description, cwd=self.cwd, check=check)

    def remote_ref(self, branch: str = DEFAULT_BRANCH) -> str:
        return f"{self.remote}/{branch}"

    def top_level_dir(self) -> str:
        """Absolute path of the repository root."""
        res = self._git(
            "rev-parse", "--show-toplevel",
            description="Failed locating the repository top level directory",
        )
        return res.stdout.strip()

    def diff_files(
        self,
        branch: str = DEFAULT_BRANCH,
        suffixes: Iterable[str] = SOURCE_SUFFIXES,
    ) -> List[str]:
        """Source files that differ from <remote>/<branch>, in git's order."""
        suffixes = tuple(suffixes)
        logger.info("Generating list of files that differ from %s", self.remote)
        res = self._git(
            "diff", self.remote_ref(branch), "--name-only",
            description="Failed listing files that differ from origin",
        )
        files = [
            line.strip() for line in res.stdout.splitlines()
            if line.strip().endswith(suffixes)
        ]
        if files:
            logger.debug("  - %s", "\n  - ".join(files))
        else:
            logger.info(NO_FILES_MESSAGE)
        return files

    def pr_base_commit(self, branch: str = DEFAULT_BRANCH) -> Optional[str]:
        """Oldest commit reachable from HEAD but not from <remote>/<branch>."""
        res = self._git(
            "log", f"{self.remote_ref(branch)}..HEAD", "--reverse", "--format=%H",
            description="Failed listing commits since origin",
        )
        commits = res.stdout.split()
        if not commits:
            logger.info("No commits on HEAD beyond %s", self.remote_ref(branch))
            return None
        return commits[0]

    def changed_lines_since(self, path: str, sha: str) -> Optional[Set[int]]:
        """
        Lines of `path` changed in <sha>^..HEAD.
        Returns None when git cannot blame the file (e.g. untracked).
        """
        res = self._git(
            "blame", "-s", "--abbrev=0", f"{sha}^..HEAD", "--", path,
            description=f"Failed blaming {path}",
            check=False,
        )
        if res.returncode != 0:
            logger.warning("git blame failed for %s: %s", path, (res.stderr or "").strip())
            return None
        return parse_blame_line_numbers(res.stdout)

    def changed_lines(self, paths: Iterable[str], sha: Optional[str]) -> Dict[str, Set[int]]:
        """
        ChangedLines for every path git can blame.
        Paths git cannot blame are left out and so contribute nothing.
        """
        if not sha:
            return {}
        changed: Dict[str, Set[int]] = {}
        for path in paths:
            lines = self.changed_lines_since(path, sha)
            if lines is not None:
                changed[path] = lines
        return changed
