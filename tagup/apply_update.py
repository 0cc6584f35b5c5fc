"""Applying an update by merging a release tag."""

import logging

from .errors import DirtyTree, UpdaterError
from .inspect_repo import RepoInspector
from .models import MergeRejected, MergeSucceeded, UpdateError, UpdateOutcome, Version

logger = logging.getLogger(__name__)


class UpdateExecutor:
    """Merges a target version into the current branch."""

    def __init__(self, inspector: RepoInspector):
        self.inspector = inspector

    async def apply(self, target: Version) -> UpdateOutcome:
        """Merge a release tag, refusing if the working tree is dirty.

        Args:
            target: Version to merge into the current branch

        Returns:
            MergeSucceeded, MergeRejected for a dirty tree, or UpdateError
        """
        try:
            await self._ensure_clean(target)
            await self.inspector.merge(target.raw)
        except DirtyTree as e:
            return MergeRejected(reason=e.message)
        except UpdaterError as e:
            logger.debug("Update to %s failed: %r", target, e)
            return UpdateError(kind=e.kind, detail=e.detail)

        return MergeSucceeded(version=target)

    async def _ensure_clean(self, target: Version) -> None:
        if not await self.inspector.is_tree_clean():
            raise DirtyTree(
                f"Tried to update to new version {target.raw} but could not due to "
                "uncommitted changes.  Please commit or stash your changes before trying again."
            )
