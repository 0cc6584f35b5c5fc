"""Update settings.

Settings are built once at startup (from CLI options or the environment)
and passed explicitly to the inspector, resolver and executor.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_REPO = "TAGUP_REPO"
ENV_UNSTABLE = "TAGUP_UNSTABLE"
ENV_REMOTE = "TAGUP_REMOTE"
ENV_GIT = "TAGUP_GIT"
ENV_CHANGELOG_URL = "TAGUP_CHANGELOG_URL"
ENV_STABLE_FIRST = "TAGUP_STABLE_FIRST"

# Environment variable -> settings field
ENV_FIELDS = {
    ENV_REPO: "repo_path",
    ENV_UNSTABLE: "allow_unstable",
    ENV_REMOTE: "remote",
    ENV_GIT: "git_executable",
    ENV_CHANGELOG_URL: "changelog_url",
    ENV_STABLE_FIRST: "stable_first",
}


class UpdateSettings(BaseModel):
    """Read-only configuration for an update check or update attempt."""

    model_config = ConfigDict(frozen=True)

    repo_path: Path = Field(
        default_factory=Path.cwd,
        description="Root of the managed git working copy",
    )
    allow_unstable: bool = Field(
        default=False,
        description="Include alpha tags in the candidates",
    )
    remote: str | None = Field(
        default=None,
        description="Remote to fetch tags from (None fetches from every remote)",
    )
    git_executable: str = "git"
    changelog_url: str | None = Field(
        default=None,
        description="Changelog URL template with a {tag} placeholder",
    )
    stable_first: bool = True

    @field_validator("repo_path", mode="before")
    @classmethod
    def expand_repo_path(cls, v: Any) -> Any:
        """Expand a leading ~ in the repository path."""
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "UpdateSettings":
        """Build settings from TAGUP_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Settings with defaults for anything unset

        Raises:
            pydantic.ValidationError: If a variable cannot be coerced
        """
        env = os.environ if environ is None else environ
        values = {name: env[var] for var, name in ENV_FIELDS.items() if env.get(var)}
        return cls.model_validate(values)

    def changelog_for(self, tag: str) -> str | None:
        """Changelog link for a tag, if a template is configured."""
        if not self.changelog_url:
            return None
        return self.changelog_url.replace("{tag}", tag)
