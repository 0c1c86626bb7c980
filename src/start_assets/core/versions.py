"""Semantic version parsing and precedence (SemVer 2.0).

A leading "v" is optional and "v1" / "v1.2" are shorthand for "v1.0.0" /
"v1.2.0". Build metadata is accepted but ignored when ordering.
"""

import re
from dataclasses import dataclass
from functools import total_ordering

_SEMVER_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)"
    r"(?:\.(?P<minor>0|[1-9]\d*)(?:\.(?P<patch>0|[1-9]\d*))?)?"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    # numeric identifiers sort numerically and before alphanumeric ones
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


@total_ordering
@dataclass(frozen=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @property
    def _precedence(self) -> tuple:
        # a release sorts after every prerelease of the same core version
        release_rank = 1 if not self.prerelease else 0
        identifiers = tuple(_identifier_key(part) for part in self.prerelease)
        return (self.major, self.minor, self.patch, release_rank, identifiers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence == other._precedence

    def __lt__(self, other: "SemVer") -> bool:
        return self._precedence < other._precedence

    def __hash__(self) -> int:
        return hash(self._precedence)


def parse_version(value: str) -> SemVer | None:
    """Parse a semantic version with or without a leading "v".

    Returns:
        SemVer, or None when value is empty or not a valid version
    """
    match = _SEMVER_RE.match(value.strip())
    if match is None:
        return None
    prerelease = match.group("prerelease")
    if prerelease is not None and any(
        part.isdigit() and len(part) > 1 and part.startswith("0")
        for part in prerelease.split(".")
    ):
        return None
    build = match.group("build")
    return SemVer(
        major=int(match.group("major")),
        minor=int(match.group("minor") or 0),
        patch=int(match.group("patch") or 0),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
        build=tuple(build.split(".")) if build else (),
    )


def is_newer(candidate: str, installed: str) -> bool:
    """True when candidate has higher precedence than installed.

    Unparseable versions are never newer, on either side.
    """
    candidate_version = parse_version(candidate)
    installed_version = parse_version(installed)
    if candidate_version is None or installed_version is None:
        return False
    return candidate_version > installed_version
