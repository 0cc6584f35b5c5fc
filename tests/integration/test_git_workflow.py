"""End-to-end tests against real git repositories."""

import pytest

from conftest import commit_file, git, requires_git
from tagup.config import UpdateSettings
from tagup.errors import InspectError
from tagup.inspect_repo import RepoInspector
from tagup.models import ErrorKind, MergeRejected, MergeSucceeded, UpdateAvailable, UpdateError, UpToDate
from tagup.updater import check_updates, try_update

pytestmark = requires_git


class TestRepoInspectorWithGit:
    """Run the inspector against a cloned repository."""

    @pytest.mark.asyncio
    async def test_inspection(self, local_repo, upstream_repo):
        inspector = RepoInspector(local_repo)

        await inspector.fetch_all_tags()
        commit = await inspector.current_commit()

        assert commit == git(upstream_repo, "rev-parse", "v1.0.0")
        assert await inspector.tags_reachable_from(commit) == ["v1.0.0", "v0.9.0"]
        assert await inspector.list_tags() == ["v1.2.0", "v1.1.0", "v1.0.0", "v0.9.0"]
        assert await inspector.is_tree_clean() is True

    @pytest.mark.asyncio
    async def test_dirty_tree(self, local_repo):
        (local_repo / "VERSION").write_text("local edit\n")

        assert await RepoInspector(local_repo).is_tree_clean() is False

    @pytest.mark.asyncio
    async def test_fetch_picks_up_new_tags(self, local_repo, upstream_repo):
        commit_file(upstream_repo, "VERSION", "v1.3.0\n", "Release v1.3.0")
        git(upstream_repo, "tag", "v1.3.0")
        inspector = RepoInspector(local_repo)

        await inspector.fetch_all_tags()

        assert (await inspector.list_tags())[0] == "v1.3.0"

    @pytest.mark.asyncio
    async def test_not_a_repository(self, tmp_path):
        inspector = RepoInspector(tmp_path)

        with pytest.raises(InspectError, match="Error getting current commit"):
            await inspector.current_commit()


class TestWorkflowWithGit:
    """Check and update a cloned repository end to end."""

    @pytest.mark.asyncio
    async def test_check_reports_update(self, local_repo):
        outcome = await check_updates(UpdateSettings(repo_path=local_repo))

        assert isinstance(outcome, UpdateAvailable)
        assert outcome.current.raw == "v1.0.0"
        assert outcome.latest.raw == "v1.2.0"

    @pytest.mark.asyncio
    async def test_update_fast_forwards(self, local_repo, upstream_repo):
        """Should merge the latest tag and then be up to date."""
        settings = UpdateSettings(repo_path=local_repo)

        outcome = await try_update(settings)

        assert isinstance(outcome, MergeSucceeded)
        assert outcome.version.raw == "v1.2.0"
        assert git(local_repo, "rev-parse", "HEAD") == git(upstream_repo, "rev-parse", "v1.2.0")
        assert (local_repo / "VERSION").read_text() == "v1.2.0\n"

        again = await try_update(settings)
        assert again == UpToDate(outcome.version)

    @pytest.mark.asyncio
    async def test_update_refuses_dirty_tree(self, local_repo, upstream_repo):
        """Should leave HEAD alone when there are local changes."""
        (local_repo / "VERSION").write_text("local edit\n")
        head = git(local_repo, "rev-parse", "HEAD")

        outcome = await try_update(UpdateSettings(repo_path=local_repo))

        assert isinstance(outcome, MergeRejected)
        assert git(local_repo, "rev-parse", "HEAD") == head
        assert (local_repo / "VERSION").read_text() == "local edit\n"

    @pytest.mark.asyncio
    async def test_fetch_failure(self, local_repo):
        """Should report a fetch error for an unreachable remote."""
        git(local_repo, "remote", "set-url", "origin", str(local_repo.parent / "missing"))

        outcome = await check_updates(UpdateSettings(repo_path=local_repo))

        assert isinstance(outcome, UpdateError)
        assert outcome.kind == ErrorKind.FETCH
