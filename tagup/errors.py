"""Exceptions raised while inspecting or updating a repository."""

from .models import ErrorKind


class UpdaterError(Exception):
    """Base error for the update workflow.

    Attributes:
        kind: Error kind reported in the final outcome.
        message: Human-readable error message.
        output: Captured stdout/stderr of the failing git command, if any.
    """

    kind = ErrorKind.INSPECT

    def __init__(self, message: str, output: str | None = None):
        self.message = message
        self.output = output
        super().__init__(message)

    @property
    def detail(self) -> str:
        """Message followed by the captured command output."""
        if self.output:
            return f"{self.message} \n\n {self.output}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class FetchError(UpdaterError):
    """Fetching tags from the remote failed."""

    kind = ErrorKind.FETCH


class InspectError(UpdaterError):
    """Reading commits or tags failed or returned an unexpected shape."""

    kind = ErrorKind.INSPECT


class NoVersionFound(UpdaterError):
    """No usable version tag could be determined."""

    kind = ErrorKind.NO_VERSION_FOUND


class DirtyTree(UpdaterError):
    """The working tree has uncommitted changes."""

    kind = ErrorKind.DIRTY_TREE


class MergeError(UpdaterError):
    """The merge command failed."""

    kind = ErrorKind.MERGE


class ParseError(UpdaterError, ValueError):
    """A tag is not a recognisable semantic version."""

    kind = ErrorKind.PARSE
