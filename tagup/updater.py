"""Check-for-updates and update workflows."""

import logging

from .apply_update import UpdateExecutor
from .config import UpdateSettings
from .inspect_repo import RepoInspector
from .models import UpdateAvailable, UpdateOutcome
from .resolve_update import UpdateResolver

logger = logging.getLogger(__name__)


def build_inspector(settings: UpdateSettings) -> RepoInspector:
    return RepoInspector(
        settings.repo_path,
        git_executable=settings.git_executable,
        remote=settings.remote,
    )


def build_resolver(settings: UpdateSettings) -> UpdateResolver:
    return UpdateResolver(build_inspector(settings), settings)


def build_executor(settings: UpdateSettings) -> UpdateExecutor:
    return UpdateExecutor(build_inspector(settings))


async def check_updates(settings: UpdateSettings) -> UpdateOutcome:
    """Fetch tags and report whether a newer version is available."""
    logger.info("Checking %s for updates", settings.repo_path)
    return await build_resolver(settings).resolve()


async def try_update(settings: UpdateSettings, dry_run: bool = False) -> UpdateOutcome:
    """Check for updates and merge the latest version if there is one.

    Args:
        settings: Update settings
        dry_run: Stop after the check instead of merging

    Returns:
        The check outcome when there is nothing to merge (or on dry run),
        otherwise the merge outcome
    """
    outcome = await check_updates(settings)
    if not isinstance(outcome, UpdateAvailable) or dry_run:
        return outcome

    logger.info("Updating %s from %s to %s", settings.repo_path, outcome.current, outcome.latest)
    return await build_executor(settings).apply(outcome.latest)
