"""
Version Bump Workflow.

Bumps the manifest version, regenerates the derived sources, shows the diff,
and after confirmation publishes a release branch through git.

Stages run strictly in order and the first failure aborts the rest. Nothing
is rolled back: a failure after the release branch was created leaves the
repository as it is for the operator to clean up.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pluginctl.errors import ProcessExecutionError, VersionParseError
from pluginctl.plugin import git_ops
from pluginctl.plugin.manifest import apply_manifest, find_manifest, write_manifest
from pluginctl.plugin.version import BumpMode, SemanticVersion, bump, parse_version

CONFIRM_QUESTION = "Does the diff look good"
RELEASE_BRANCH_PREFIX = "release_v"


@dataclass
class BumpResult:
    """
    Outcome of a version bump.

    Attributes:
        old_version: Version found in the manifest
        new_version: Version written to the manifest
        files: Files considered part of the bump
        branch: Release branch name
        confirmed: False when the operator declined the diff
    """

    old_version: SemanticVersion
    new_version: SemanticVersion
    files: list[str] = field(default_factory=list)
    branch: str = ""
    confirmed: bool = False


def prompt_confirm(question: str) -> bool:
    """
    Ask a yes/no question on the terminal.

    Anything other than "y" or "yes" declines, including end of input.
    """
    try:
        answer = input(f"{question} [y/N]: ")
    except EOFError:
        print()
        return False
    return answer.strip().lower() in ("y", "yes")


def release_branch(version: SemanticVersion) -> str:
    return f"{RELEASE_BRANCH_PREFIX}{version}"


def _echo(output: str) -> None:
    if output:
        print(output, end="" if output.endswith("\n") else "\n")


def bump_version(
    mode: "str | BumpMode",
    plugin_dir: Path | None = None,
    confirm: Callable[[str], bool] = prompt_confirm,
    remote: str = "origin",
) -> BumpResult:
    """
    Run the full bump workflow.

    Args:
        mode: "major", "minor" or "patch"
        plugin_dir: Plugin root containing plugin.json (default: cwd)
        confirm: Callback asked whether the diff looks good
        remote: Git remote the release branch is pushed to

    Returns:
        BumpResult; confirmed is False if the operator declined

    Raises:
        ManifestNotFoundError: If plugin.json is missing
        VersionParseError: If the manifest version is not semver
        InvalidModeError: If mode is not recognized
        FileWriteError: If the manifest or generated files cannot be written
        ProcessExecutionError: If a git step fails
    """
    # Validate the mode before touching anything on disk.
    mode = BumpMode.parse(mode)

    manifest = find_manifest(plugin_dir)

    try:
        old_version = parse_version(manifest.version)
    except VersionParseError as e:
        raise VersionParseError(f"failed to parse version in manifest: {e}") from e

    new_version = bump(old_version, mode)

    manifest.version = str(new_version)
    write_manifest(manifest)
    apply_manifest(manifest)

    files = manifest.generated_files()
    cwd = manifest.root
    result = BumpResult(
        old_version=old_version,
        new_version=new_version,
        files=files,
        branch=release_branch(new_version),
    )

    try:
        changes = git_ops.diff(files, cwd=cwd)
    except ProcessExecutionError as e:
        _echo(e.output)
        raise
    _echo(changes.output)

    # A prompt that fails or is interrupted counts as a decline.
    try:
        confirmed = confirm(CONFIRM_QUESTION)
    except (Exception, KeyboardInterrupt):
        print()
        confirmed = False

    if not confirmed:
        print("Diff wasn't confirmed. Exiting.")
        return result

    result.confirmed = True
    original_branch = git_ops.current_branch(cwd=cwd)
    steps = git_ops.release_steps(
        branch=result.branch,
        files=files,
        message=f"Bump version to {new_version}",
        return_to=original_branch,
        remote=remote,
    )

    for args in steps:
        try:
            step = git_ops.run_git(args, cwd=cwd)
        except ProcessExecutionError as e:
            _echo(e.output)
            raise
        _echo(step.output)

    return result
