"""
Semantic Version Arithmetic.

This module parses semantic version strings and computes the next
major/minor/patch release.

Key features:
- Full semver 2.0.0 grammar (pre-release and build metadata)
- Precedence ordering between versions
- Increment rules that reset lower-order components
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

from pluginctl.errors import InvalidModeError, VersionParseError

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


class BumpMode(Enum):
    """Which version component to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @classmethod
    def parse(cls, value: "str | BumpMode") -> "BumpMode":
        """
        Convert a mode name into a BumpMode.

        Raises:
            InvalidModeError: If value is not major, minor or patch
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidModeError(f"unknown mode {value}") from None


@total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """
    A parsed semantic version.

    Attributes:
        major: Major component
        minor: Minor component
        patch: Patch component
        prerelease: Dot-separated pre-release identifiers
        build: Dot-separated build metadata identifiers
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def _precedence_key(self) -> tuple:
        # A release sorts after any of its pre-releases.
        if not self.prerelease:
            pre: tuple = ((1,),)
        else:
            pre = tuple(
                (0, int(part), "") if part.isdigit() else (1, 0, part)
                for part in self.prerelease
            )
            pre = ((0,), pre)
        return (self.major, self.minor, self.patch, pre)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())


def parse_version(text: str) -> SemanticVersion:
    """
    Parse a semantic version string.

    Args:
        text: Version string (e.g., "1.2.3", "2.0.0-rc.1+build.5")

    Returns:
        SemanticVersion object

    Raises:
        VersionParseError: If text does not follow the semver grammar
    """
    if not isinstance(text, str):
        raise VersionParseError(f"Invalid version: {text!r} is not a string")

    match = _SEMVER_RE.match(text.strip())
    if not match:
        raise VersionParseError(
            f"Invalid version: {text!r}. Must be semantic version (e.g., '1.0.0')"
        )

    major, minor, patch, prerelease, build = match.groups()
    return SemanticVersion(
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
        build=tuple(build.split(".")) if build else (),
    )


def bump(version: SemanticVersion, mode: "str | BumpMode") -> SemanticVersion:
    """
    Compute the next version for the given mode.

    Lower-order components are reset to zero; pre-release and build
    metadata are always cleared.

    Args:
        version: Current version
        mode: "major", "minor", "patch" or a BumpMode

    Returns:
        New SemanticVersion

    Raises:
        InvalidModeError: If mode is not recognized
    """
    mode = BumpMode.parse(mode)

    if mode is BumpMode.MAJOR:
        return SemanticVersion(version.major + 1, 0, 0)
    if mode is BumpMode.MINOR:
        return SemanticVersion(version.major, version.minor + 1, 0)
    return SemanticVersion(version.major, version.minor, version.patch + 1)
