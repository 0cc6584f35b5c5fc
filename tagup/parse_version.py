"""Release tag parsing and semantic version ordering."""

import re
from collections.abc import Iterable

from packaging.version import InvalidVersion
from packaging.version import Version as Pep440Version

from .errors import ParseError
from .models import Version

TAG_PATTERN = re.compile(
    r"^(?P<prefix>[A-Za-z][A-Za-z_-]*)?"
    r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<pre>[0-9A-Za-z][0-9A-Za-z.-]*))?"
    r"(?:\s+(?P<message>.*\S))?\s*$"
)


class VersionParser:
    """Parser and comparator for release tags."""

    def __init__(self, stable_first: bool = True):
        """Initialize version parser.

        Args:
            stable_first: Rank a stable release above prereleases of the
                same numeric version (the semver convention)
        """
        self.stable_first = stable_first

    def parse(self, tag: str) -> Version:
        """Parse a tag string such as ``v1.2.3`` or ``v1.3.0-beta.2 Notes``.

        Args:
            tag: Raw tag name, optionally followed by an annotation

        Returns:
            Parsed Version

        Raises:
            ParseError: If the tag is not a semantic version
        """
        match = TAG_PATTERN.match(tag.strip()) if tag else None
        if not match:
            raise ParseError(f"Not a semantic version tag: {tag!r}")

        return Version(
            raw=tag,
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease_tag=match.group("pre"),
            message=match.group("message"),
        )

    def sort_key(self, version: Version) -> tuple:
        """Total ordering key; the raw tag breaks any remaining tie."""
        stable_rank = 0 if version.is_prerelease else 1
        if not self.stable_first:
            stable_rank = 1 - stable_rank
        return (
            version.core,
            stable_rank,
            _prerelease_key(version.prerelease_tag),
            version.raw,
        )

    def compare(self, a: Version, b: Version) -> int:
        """Three-way comparison: -1 if a < b, 0 if equal, 1 if a > b."""
        key_a, key_b = self.sort_key(a), self.sort_key(b)
        return (key_a > key_b) - (key_a < key_b)

    def sort_desc(self, versions: Iterable[Version]) -> list[Version]:
        """Sort versions newest first."""
        return sorted(versions, key=self.sort_key, reverse=True)


def _prerelease_key(prerelease_tag: str | None) -> tuple[str, int]:
    """Order prerelease labels, using PEP 440 where it understands them."""
    if prerelease_tag is None:
        return ("", 0)

    try:
        pre = Pep440Version(f"0.0.0-{prerelease_tag}").pre
    except InvalidVersion:
        pre = None

    if pre is None:
        return (prerelease_tag, 0)
    return pre


def parse_version(tag: str) -> Version:
    """Parse a release tag with the default ordering settings.

    Args:
        tag: Raw tag name

    Returns:
        Parsed Version
    """
    return VersionParser().parse(tag)


def try_parse(tag: str, parser: VersionParser | None = None) -> Version | None:
    """Parse a tag, returning None instead of raising on malformed input."""
    try:
        return (parser or VersionParser()).parse(tag)
    except ParseError:
        return None


def semver_delta(old: Version, new: Version) -> str:
    """Calculate semantic version delta.

    Args:
        old: Version currently checked out
        new: Candidate version

    Returns:
        Semver delta: "major", "minor", "patch", or "unknown"
    """
    if new.core > old.core:
        if new.major > old.major:
            return "major"
        elif new.minor > old.minor:
            return "minor"
        elif new.patch > old.patch:
            return "patch"

    return "unknown"
