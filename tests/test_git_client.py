"""
Unit Tests - Git Client
=======================
All git invocations are mocked through subprocess.run.
"""
from unittest.mock import MagicMock, patch

import pytest

from xclint.core.errors import CollaboratorFailure
from xclint.services.git_client import GitClient, parse_blame_line_numbers

SHA = "3f1c0a5b7e2d9c4f6a8b1e0d3c5f7a9b2e4d6c8a"
OLD = "9a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f1a0b"


def completed(stdout="", returncode=0, stderr=""):
    return MagicMock(stdout=stdout, returncode=returncode, stderr=stderr)


@pytest.fixture
def git():
    return GitClient(cwd="/repo")


# ===================================================================
# Blame parsing
# ===================================================================
class TestParseBlame:

    def test_changed_lines(self):
        out = (
            f"{SHA} 1) #import \"A.h\"\n"
            f"^{OLD} 2) \n"
            f"{SHA} 3) - (void)foo {{\n"
        )
        assert parse_blame_line_numbers(out) == {1, 3}

    def test_line_number_is_not_read_from_sha(self):
        assert parse_blame_line_numbers("1234567890abcdef 42) x\n") == {42}

    def test_renamed_file_column(self):
        assert parse_blame_line_numbers(f"{SHA} Old/A.m 7) code)\n") == {7}

    def test_uncommitted_lines_count_as_changed(self):
        assert parse_blame_line_numbers("0000000000000000000000000000000000000000 5) x\n") == {5}

    def test_empty(self):
        assert parse_blame_line_numbers("") == set()

    def test_garbage_is_skipped(self):
        assert parse_blame_line_numbers("fatal\nabc def)\n") == set()


# ===================================================================
# Queries
# ===================================================================
class TestGitClient:

    @patch("subprocess.run")
    def test_top_level_dir(self, mock_run, git):
        mock_run.return_value = completed("/Users/me/repo\n")
        assert git.top_level_dir() == "/Users/me/repo"
        assert mock_run.call_args.args[0] == ["git", "rev-parse", "--show-toplevel"]
        assert mock_run.call_args.kwargs["cwd"] == "/repo"

    @patch("subprocess.run")
    def test_top_level_dir_failure(self, mock_run, git):
        mock_run.return_value = completed("", returncode=128, stderr="not a git repository")
        with pytest.raises(CollaboratorFailure):
            git.top_level_dir()

    @patch("subprocess.run")
    def test_diff_files_filters_suffix(self, mock_run, git):
        mock_run.return_value = completed("A.m\nA.h\nREADME.md\nsub/B.m\n")
        assert git.diff_files("develop") == ["A.m", "sub/B.m"]
        assert mock_run.call_args.args[0] == ["git", "diff", "origin/develop", "--name-only"]

    @patch("subprocess.run")
    def test_diff_files_custom_suffixes(self, mock_run, git):
        mock_run.return_value = completed("A.m\nB.mm\n")
        assert git.diff_files("master", suffixes=(".m", ".mm")) == ["A.m", "B.mm"]

    @patch("subprocess.run")
    def test_diff_files_none(self, mock_run, git):
        mock_run.return_value = completed("Podfile\n")
        assert git.diff_files() == []

    @patch("subprocess.run")
    def test_pr_base_commit_is_oldest(self, mock_run, git):
        mock_run.return_value = completed(f"{OLD}\n{SHA}\n")
        assert git.pr_base_commit("master") == OLD
        assert mock_run.call_args.args[0] == [
            "git", "log", "origin/master..HEAD", "--reverse", "--format=%H",
        ]

    @patch("subprocess.run")
    def test_pr_base_commit_none(self, mock_run, git):
        mock_run.return_value = completed("")
        assert git.pr_base_commit() is None

    def test_remote_is_configurable(self):
        assert GitClient(remote="upstream").remote_ref("main") == "upstream/main"

    @patch("subprocess.run")
    def test_changed_lines_since(self, mock_run, git):
        mock_run.return_value = completed(f"{SHA} 4) x\n^{OLD} 5) y\n")
        assert git.changed_lines_since("/repo/A.m", SHA) == {4}
        assert mock_run.call_args.args[0] == [
            "git", "blame", "-s", "--abbrev=0", f"{SHA}^..HEAD", "--", "/repo/A.m",
        ]

    @patch("subprocess.run")
    def test_changed_lines_skips_unblamable_paths(self, mock_run, git):
        mock_run.side_effect = [
            completed(f"{SHA} 1) x\n"),
            completed("", returncode=128, stderr="no such path"),
        ]
        assert git.changed_lines(["A.m", "Gone.m"], SHA) == {"A.m": {1}}

    @patch("subprocess.run")
    def test_changed_lines_without_base(self, mock_run, git):
        assert git.changed_lines(["A.m"], None) == {}
        mock_run.assert_not_called()
