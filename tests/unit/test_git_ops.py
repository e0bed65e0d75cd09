"""
Tests for Git Operations.

This test suite covers:
1. Output capture and exit status handling (mocked subprocess)
2. Diff exit status interpretation
3. Branch detection and release steps against a real repository
"""

import shutil
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from pluginctl.errors import ProcessExecutionError
from pluginctl.plugin import git_ops

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _completed(returncode: int, stdout: str = "") -> MagicMock:
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    return result


class TestRunGit:
    """Test the process runner with a mocked subprocess."""

    def test_success_returns_output(self):
        with patch("subprocess.run", return_value=_completed(0, "ok\n")) as run:
            result = git_ops.run_git(["status"])

        assert result.ok
        assert result.output == "ok\n"
        args, kwargs = run.call_args
        assert args[0] == ["git", "status"]
        assert kwargs["stderr"] == subprocess.STDOUT

    def test_non_zero_exit_raises_with_output(self):
        """Should attach captured output to the error."""
        with patch("subprocess.run", return_value=_completed(128, "fatal: boom\n")):
            with pytest.raises(ProcessExecutionError, match="exit code 128") as exc_info:
                git_ops.run_git(["checkout", "-b", "release_v1.0.0"])

        assert exc_info.value.output == "fatal: boom\n"
        assert exc_info.value.returncode == 128

    def test_non_zero_exit_without_check(self):
        with patch("subprocess.run", return_value=_completed(1, "x")):
            result = git_ops.run_git(["diff"], check=False)

        assert not result.ok
        assert result.returncode == 1

    def test_git_not_installed(self):
        with patch("subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(ProcessExecutionError, match="git command not found") as exc_info:
                git_ops.run_git(["status"])

        assert exc_info.value.returncode is None


class TestDiff:
    """Test diff exit status handling."""

    def test_differences_found_is_not_an_error(self):
        with patch("subprocess.run", return_value=_completed(1, "-a\n+b\n")) as run:
            result = git_ops.diff(["plugin.json"])

        assert result.output == "-a\n+b\n"
        assert run.call_args[0][0] == ["git", "diff", "--exit-code", "--", "plugin.json"]

    def test_no_differences(self):
        with patch("subprocess.run", return_value=_completed(0, "")):
            assert git_ops.diff(["plugin.json"]).output == ""

    def test_real_failure(self):
        """Exit status above 1 is a failure."""
        with patch("subprocess.run", return_value=_completed(129, "not a git repository")):
            with pytest.raises(ProcessExecutionError, match="git diff failed") as exc_info:
                git_ops.diff(["plugin.json"])

        assert "not a git repository" in exc_info.value.output


class TestReleaseSteps:
    """Test release command construction."""

    def test_steps_in_order(self):
        steps = git_ops.release_steps(
            branch="release_v1.3.0",
            files=["plugin.json", "server/manifest.go"],
            message="Bump version to 1.3.0",
            return_to="main",
        )

        assert steps == [
            ["checkout", "-b", "release_v1.3.0"],
            ["add", "--", "plugin.json", "server/manifest.go"],
            ["commit", "-m", "Bump version to 1.3.0"],
            ["push", "--set-upstream", "origin", "release_v1.3.0"],
            ["checkout", "main"],
        ]

    def test_custom_remote(self):
        steps = git_ops.release_steps("b", ["plugin.json"], "m", "main", remote="upstream")
        assert ["push", "--set-upstream", "upstream", "b"] in steps


@requires_git
class TestRealRepository:
    """Test against a throwaway repository."""

    def test_current_branch(self, tmp_path):
        git_ops.run_git(["init", "-q"], cwd=tmp_path)
        git_ops.run_git(["checkout", "-q", "-b", "trunk"], cwd=tmp_path)
        git_ops.run_git(["config", "user.email", "dev@example.com"], cwd=tmp_path)
        git_ops.run_git(["config", "user.name", "Dev"], cwd=tmp_path)
        (tmp_path / "a.txt").write_text("a\n")
        git_ops.run_git(["add", "a.txt"], cwd=tmp_path)
        git_ops.run_git(["commit", "-q", "-m", "init"], cwd=tmp_path)

        assert git_ops.current_branch(cwd=tmp_path) == "trunk"

    def test_diff_reports_changes(self, tmp_path):
        git_ops.run_git(["init", "-q"], cwd=tmp_path)
        git_ops.run_git(["config", "user.email", "dev@example.com"], cwd=tmp_path)
        git_ops.run_git(["config", "user.name", "Dev"], cwd=tmp_path)
        (tmp_path / "a.txt").write_text("a\n")
        git_ops.run_git(["add", "a.txt"], cwd=tmp_path)
        git_ops.run_git(["commit", "-q", "-m", "init"], cwd=tmp_path)

        (tmp_path / "a.txt").write_text("b\n")
        result = git_ops.diff(["a.txt"], cwd=tmp_path)

        assert result.returncode == 1
        assert "+b" in result.output
