"""Current/latest version resolution."""

import asyncio
import logging

from .config import UpdateSettings
from .errors import NoVersionFound, UpdaterError
from .inspect_repo import RepoInspector
from .models import RepoState, UpdateAvailable, UpdateError, UpdateOutcome, UpToDate, Version
from .parse_version import VersionParser, semver_delta, try_parse

logger = logging.getLogger(__name__)


class UpdateResolver:
    """Works out the current and latest versions of the managed repository."""

    def __init__(
        self,
        inspector: RepoInspector,
        settings: UpdateSettings,
        parser: VersionParser | None = None,
    ):
        """Initialize update resolver.

        Args:
            inspector: Git access for the managed repository
            settings: Update settings (unstable filter, ordering)
            parser: Version parser; built from settings when omitted
        """
        self.inspector = inspector
        self.settings = settings
        self.parser = parser or VersionParser(stable_first=settings.stable_first)

    async def inspect(self) -> RepoState:
        """Fetch tags and gather the repository state.

        Returns:
            Repository state with versions sorted newest first

        Raises:
            UpdaterError: If any git step fails or no version can be found
        """
        await self.inspector.fetch_all_tags()
        commit = await self.inspector.current_commit()
        logger.debug("Current commit is %s", commit)

        reachable, available = await asyncio.gather(
            self.inspector.tags_reachable_from(commit),
            self.inspector.list_tags(self.settings.allow_unstable),
            return_exceptions=True,
        )
        # Both lookups have finished; surface the first failure
        for result in (reachable, available):
            if isinstance(result, BaseException):
                raise result

        if len(reachable) <= 1:
            raise NoVersionFound("Error getting current version... No output.")
        if len(available) <= 1:
            raise NoVersionFound("Error getting latest version.  The versions list is empty!")

        current_versions = self._parse_tags(reachable)
        available_versions = self._parse_tags(available)
        if not current_versions:
            raise NoVersionFound(
                "Error getting current version... No semantic version tags.",
                output="\n".join(reachable),
            )
        if not available_versions:
            raise NoVersionFound(
                "Error getting latest version... No semantic version tags.",
                output="\n".join(available),
            )

        return RepoState(
            current_commit=commit,
            current_version=current_versions[0],
            available_versions=available_versions,
        )

    async def resolve(self) -> UpdateOutcome:
        """Compare the current version with the latest available one."""
        try:
            state = await self.inspect()
        except UpdaterError as e:
            logger.debug("Update check failed: %r", e)
            return UpdateError(kind=e.kind, detail=e.detail)

        current = state.current_version
        latest = state.latest_version

        # Tag identity, not semantic equality
        if current.raw == latest.raw:
            return UpToDate(version=current)

        if self.parser.compare(latest, current) < 0:
            logger.warning("Latest tag %s is older than the checked out %s", latest, current)

        return UpdateAvailable(
            current=current,
            latest=latest,
            semver_delta=semver_delta(current, latest),
        )

    def _parse_tags(self, tags: list[str]) -> list[Version]:
        """Parse tags into versions, newest first, skipping non-version tags."""
        versions = []
        for tag in tags:
            version = try_parse(tag, self.parser)
            if version is None:
                logger.debug("Skipping non-version tag %s", tag)
                continue
            versions.append(version)
        return self.parser.sort_desc(versions)
