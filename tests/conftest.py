"""Pytest configuration and fixtures."""

import shutil
import subprocess
from unittest.mock import AsyncMock, MagicMock

import pytest

from tagup.config import UpdateSettings
from tagup.inspect_repo import RepoInspector

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def git(repo, *args):
    """Run a git command in a test repository."""
    return subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    ).stdout.strip()


def commit_file(repo, name, content, message):
    (repo / name).write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-m", message)


@pytest.fixture
def settings(tmp_path):
    """Default settings pointing at a temporary directory."""
    return UpdateSettings(repo_path=tmp_path)


@pytest.fixture
def mock_inspector():
    """Inspector double with a repository one minor release behind."""
    inspector = MagicMock(spec=RepoInspector)
    inspector.fetch_all_tags = AsyncMock(return_value=None)
    inspector.current_commit = AsyncMock(return_value="9c3239bc5f99b85be1123107f7290d16a68f8e64")
    inspector.tags_reachable_from = AsyncMock(return_value=["v1.0.0", "v0.9.0"])
    inspector.list_tags = AsyncMock(return_value=["v1.2.0", "v1.1.0", "v1.0.0"])
    inspector.is_tree_clean = AsyncMock(return_value=True)
    inspector.merge = AsyncMock(return_value=None)
    return inspector


@pytest.fixture
def upstream_repo(tmp_path):
    """Create an upstream repository with four release tags."""
    repo = tmp_path / "upstream"
    repo.mkdir()

    git(repo, "init")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test User")

    for tag in ["v0.9.0", "v1.0.0", "v1.1.0", "v1.2.0"]:
        commit_file(repo, "VERSION", f"{tag}\n", f"Release {tag}")
        git(repo, "tag", tag)

    return repo


@pytest.fixture
def local_repo(tmp_path, upstream_repo):
    """Clone the upstream repository and rewind it to v1.0.0."""
    repo = tmp_path / "local"
    subprocess.run(
        ["git", "clone", str(upstream_repo), str(repo)],
        check=True,
        capture_output=True,
    )
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test User")
    git(repo, "reset", "--hard", "v1.0.0")
    return repo
