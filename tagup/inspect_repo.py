"""Git queries against the managed repository.

Every operation shells out to the git executable in the repository root
and parses its line-oriented output:

1. fetch --tags --all              (refresh release tags)
2. rev-parse HEAD                  (current commit)
3. tag -l --sort -version:refname  (all release tags, newest first)
4. ... --merged <commit>           (tags contained in the current history)
5. diff --quiet                    (working tree cleanliness)
6. merge <tag>                     (apply an update)
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import FetchError, InspectError, MergeError

logger = logging.getLogger(__name__)

@dataclass
class GitCommandResult:
    """Captured result of a single git invocation."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def lines(self) -> list[str]:
        """Non-empty stdout lines, stripped."""
        return [line.strip() for line in self.stdout.splitlines() if line.strip()]

    @property
    def output(self) -> str:
        """Combined stdout and stderr, for error reports."""
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


def filter_unstable(tags: list[str], allow_unstable: bool) -> list[str]:
    """Drop development tags from a tag listing.

    Alpha tags are kept only when ``allow_unstable`` is set. Beta tags are
    dropped regardless of the flag.
    """

    def keep(tag: str) -> bool:
        if not allow_unstable and "alpha" in tag or "beta" in tag:
            return False
        return True

    return [tag for tag in tags if keep(tag)]


class RepoInspector:
    """Runs git commands in a fixed working directory."""

    def __init__(
        self,
        repo_path: str | Path,
        git_executable: str = "git",
        remote: str | None = None,
    ):
        """Initialize repository inspector.

        Args:
            repo_path: Root of the managed working copy
            git_executable: Name or path of the git binary
            remote: Remote to fetch tags from (None fetches from all remotes)
        """
        self.repo_path = Path(repo_path)
        self.git_executable = git_executable
        self.remote = remote

    async def _run(self, *args: str) -> GitCommandResult:
        """Run a git subcommand and capture its output."""
        cmd = [self.git_executable, *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.repo_path)

        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0", "GIT_MERGE_AUTOEDIT": "no"}
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=self.repo_path,
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise InspectError(f"Could not run {self.git_executable} in {self.repo_path}: {e}")

        stdout, stderr = await process.communicate()
        result = GitCommandResult(
            args=list(args),
            returncode=process.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
        logger.debug("git %s exited with %d", args[0], result.returncode)
        return result

    async def fetch_all_tags(self) -> None:
        """Fetch all tags from the configured remote (or all remotes)."""
        if self.remote:
            result = await self._run("fetch", "--tags", self.remote)
        else:
            result = await self._run("fetch", "--tags", "--all")

        if not result.ok:
            raise FetchError("Error pulling tags...", output=result.output)

    async def current_commit(self) -> str:
        """Get the commit sha HEAD points at."""
        result = await self._run("rev-parse", "HEAD")
        if not result.ok:
            raise InspectError("Error getting current commit...", output=result.output)

        lines = result.lines
        if len(lines) != 1:
            raise InspectError("Error getting current commit... No output.", output=result.output)
        return lines[0]

    async def list_tags(self, allow_unstable: bool = False) -> list[str]:
        """List release tags newest first, without development tags."""
        result = await self._run("tag", "-l", "--sort", "-version:refname")
        if not result.ok:
            raise InspectError("Error listing versions...", output=result.output)
        return filter_unstable(result.lines, allow_unstable)

    async def tags_reachable_from(self, commit: str) -> list[str]:
        """List tags merged into the history of a commit, newest first."""
        result = await self._run("tag", "-l", "--sort", "-version:refname", "--merged", commit)
        if not result.ok:
            raise InspectError("Error getting current version...", output=result.output)
        return result.lines

    async def is_tree_clean(self) -> bool:
        """Check for uncommitted changes to tracked files."""
        result = await self._run("diff", "--quiet")
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        raise InspectError("Error checking working tree...", output=result.output)

    async def merge(self, tag: str) -> GitCommandResult:
        """Merge a tag into the current branch."""
        result = await self._run("merge", tag)
        if not result.ok:
            raise MergeError(f"Error merging {tag}...", output=result.output)
        logger.info("Merged %s into %s", tag, self.repo_path)
        return result
