"""CLI application for tagup."""

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from tagup.config import (
    ENV_CHANGELOG_URL,
    ENV_GIT,
    ENV_REMOTE,
    ENV_REPO,
    ENV_STABLE_FIRST,
    ENV_UNSTABLE,
    UpdateSettings,
)
from tagup.models import MergeSucceeded, UpdateOutcome, is_failure
from tagup.notify import ConsoleNotifier, announce, notify_outcome
from tagup.updater import check_updates, try_update

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def format_json_output(outcome: UpdateOutcome) -> str:
    """Format JSON output."""
    return json.dumps(outcome.to_dict(), indent=2)


def report(outcome: UpdateOutcome, action: str, settings: UpdateSettings, format_type: str) -> None:
    """Print an outcome and exit with the matching status code."""
    if format_type == "json":
        console.print_json(format_json_output(outcome))
    else:
        changelog_url = None
        if isinstance(outcome, MergeSucceeded):
            changelog_url = settings.changelog_for(outcome.version.raw)
        notify_outcome(ConsoleNotifier(console, err_console), outcome, action, changelog_url)

    if is_failure(outcome):
        raise typer.Exit(1)


app = typer.Typer(
    name="tagup",
    help="tagup - Keep a git checkout on its latest release tag",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    repo: Path = typer.Option(
        Path("."), "--repo", "-C", envvar=ENV_REPO, help="Path to the managed git repository"
    ),
    unstable: bool = typer.Option(
        False, "--unstable/--stable-only", envvar=ENV_UNSTABLE, help="Include alpha tags"
    ),
    remote: str | None = typer.Option(
        None, "--remote", envvar=ENV_REMOTE, help="Remote to fetch tags from (default: all)"
    ),
    git: str = typer.Option("git", "--git", envvar=ENV_GIT, help="git executable"),
    changelog_url: str | None = typer.Option(
        None, "--changelog-url", envvar=ENV_CHANGELOG_URL, help="Changelog URL template with {tag}"
    ),
    stable_first: bool = typer.Option(
        True,
        "--stable-first/--prerelease-first",
        envvar=ENV_STABLE_FIRST,
        help="Rank stable releases above prereleases of the same version",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """tagup - Check for and apply release updates to a git checkout."""
    configure_logging(verbose)
    ctx.obj = UpdateSettings(
        repo_path=repo.expanduser().resolve(),
        allow_unstable=unstable,
        remote=remote,
        git_executable=git,
        changelog_url=changelog_url,
        stable_first=stable_first,
    )


@app.command()
def check(
    ctx: typer.Context,
    format_type: str = typer.Option("text", "--format", help="Output format: text or json"),
) -> None:
    """Fetch tags and report whether a newer version is available."""
    settings: UpdateSettings = ctx.obj

    try:
        if format_type != "json":
            announce(ConsoleNotifier(console, err_console), "check")
        outcome = asyncio.run(check_updates(settings))
        report(outcome, "check", settings, format_type)

    except typer.Exit:
        raise
    except Exception as e:
        err_console.print(f"Error: {e}", style="red", soft_wrap=True)
        raise typer.Exit(1)


@app.command()
def update(
    ctx: typer.Context,
    format_type: str = typer.Option("text", "--format", help="Output format: text or json"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report the update without merging"),
) -> None:
    """Check for updates and merge the latest version into the current branch."""
    settings: UpdateSettings = ctx.obj

    try:
        if format_type != "json":
            announce(ConsoleNotifier(console, err_console), "update")
        outcome = asyncio.run(try_update(settings, dry_run=dry_run))
        report(outcome, "update", settings, format_type)

    except typer.Exit:
        raise
    except Exception as e:
        err_console.print(f"Error: {e}", style="red", soft_wrap=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
