"""
Git Operations for Plugin Releases.

This module shells out to the git executable for the release workflow.

Key features:
- Combined stdout/stderr capture
- Exit status checking with the captured output attached to the error
- Diff with "differences found" kept apart from real failures
- Branch, stage, commit and push helpers
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from pluginctl.errors import ProcessExecutionError

GIT = "git"


@dataclass
class GitResult:
    """
    Outcome of a git invocation.

    Attributes:
        args: Arguments passed after the git executable
        returncode: Process exit status
        output: Combined stdout and stderr
    """

    args: list[str]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_git(args: list[str], cwd: Path | None = None, check: bool = True) -> GitResult:
    """
    Run git with the given arguments.

    Args:
        args: Arguments after the git executable
        cwd: Working directory (default: current directory)
        check: Raise on non-zero exit status

    Returns:
        GitResult with the combined output

    Raises:
        ProcessExecutionError: If git cannot be launched, or exits non-zero
            while check is set
    """
    try:
        result = subprocess.run(
            [GIT, *args],
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise ProcessExecutionError("git command not found. Please install git.") from e
    except OSError as e:
        raise ProcessExecutionError(f"Failed to run git {' '.join(args)}: {e}") from e

    git_result = GitResult(args=list(args), returncode=result.returncode, output=result.stdout or "")

    if check and not git_result.ok:
        raise ProcessExecutionError(
            f"git {' '.join(args)} failed with exit code {git_result.returncode}",
            output=git_result.output,
            returncode=git_result.returncode,
        )

    return git_result


def diff(files: list[str], cwd: Path | None = None) -> GitResult:
    """
    Show the working-tree diff restricted to files.

    Exit status 1 means "differences found" and is returned like a clean
    run; anything above that is a real failure.

    Raises:
        ProcessExecutionError: If git cannot be launched or the diff fails
    """
    result = run_git(["diff", "--exit-code", "--", *files], cwd=cwd, check=False)
    if result.returncode not in (0, 1):
        raise ProcessExecutionError(
            f"git diff failed with exit code {result.returncode}",
            output=result.output,
            returncode=result.returncode,
        )
    return result


def current_branch(cwd: Path | None = None) -> str:
    """
    Get the name of the checked-out branch.

    Returns:
        Branch name, or the commit hash when HEAD is detached

    Raises:
        ProcessExecutionError: If git fails
    """
    branch = run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd).output.strip()
    if branch == "HEAD":
        return run_git(["rev-parse", "HEAD"], cwd=cwd).output.strip()
    return branch


def release_steps(branch: str, files: list[str], message: str, return_to: str, remote: str = "origin") -> list[list[str]]:
    """
    Build the ordered git commands that publish a release branch.

    Args:
        branch: Release branch to create
        files: Paths to stage
        message: Commit message
        return_to: Branch to check out once the push succeeded
        remote: Remote to push to

    Returns:
        List of git argument vectors
    """
    return [
        ["checkout", "-b", branch],
        ["add", "--", *files],
        ["commit", "-m", message],
        ["push", "--set-upstream", remote, branch],
        ["checkout", return_to],
    ]
