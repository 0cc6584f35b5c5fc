"""Core data models for tagup."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Version:
    """A release tag parsed into a comparable semantic version."""

    raw: str
    major: int
    minor: int
    patch: int
    prerelease_tag: str | None = None  # alpha, beta, rc.1, ...
    message: str | None = None  # trailing tag annotation

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease_tag is not None

    @property
    def core(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return self.raw


@dataclass
class RepoState:
    """Snapshot of the managed repository taken for a single update check."""

    current_commit: str
    current_version: Version | None
    available_versions: list[Version] = field(default_factory=list)  # newest first

    @property
    def latest_version(self) -> Version | None:
        return self.available_versions[0] if self.available_versions else None


class ErrorKind(Enum):
    """Kinds of failure an update check or update attempt can end with."""

    FETCH = "fetch_error"
    INSPECT = "inspect_error"
    NO_VERSION_FOUND = "no_version_found"
    DIRTY_TREE = "dirty_tree"
    MERGE = "merge_error"
    PARSE = "parse_error"


@dataclass(frozen=True)
class UpToDate:
    """The checkout already sits on the latest available version."""

    version: Version

    def to_dict(self) -> dict:
        return {"status": "up_to_date", "version": self.version.raw}


@dataclass(frozen=True)
class UpdateAvailable:
    """A newer tag than the current one exists upstream."""

    current: Version
    latest: Version
    semver_delta: str = "unknown"  # patch, minor, major, unknown

    def to_dict(self) -> dict:
        return {
            "status": "update_available",
            "current_version": self.current.raw,
            "latest_version": self.latest.raw,
            "semver_delta": self.semver_delta,
        }


@dataclass(frozen=True)
class MergeSucceeded:
    """The target tag was merged into the current branch."""

    version: Version

    def to_dict(self) -> dict:
        return {"status": "merge_succeeded", "version": self.version.raw}


@dataclass(frozen=True)
class MergeRejected:
    """The merge was refused before it was attempted."""

    reason: str

    def to_dict(self) -> dict:
        return {"status": "merge_rejected", "reason": self.reason}


@dataclass(frozen=True)
class UpdateError:
    """A check or update failed; detail carries any captured git output."""

    kind: ErrorKind
    detail: str

    def to_dict(self) -> dict:
        return {"status": "error", "kind": self.kind.value, "detail": self.detail}


UpdateOutcome = UpToDate | UpdateAvailable | MergeSucceeded | MergeRejected | UpdateError


def is_failure(outcome: UpdateOutcome) -> bool:
    """Check whether an outcome should be reported as a failure."""
    return isinstance(outcome, (MergeRejected, UpdateError))
