"""User-facing reporting of update outcomes."""

import logging
from typing import Protocol

from rich.console import Console

from .models import (
    ErrorKind,
    MergeRejected,
    MergeSucceeded,
    UpdateAvailable,
    UpdateError,
    UpdateOutcome,
    UpToDate,
)

logger = logging.getLogger(__name__)

PREFIX = "tagup"

# Failures raised while merging rather than while checking
MERGE_KINDS = {ErrorKind.DIRTY_TREE, ErrorKind.MERGE}


class Notifier(Protocol):
    """Sink for status and error messages."""

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Prints messages to the terminal with rich."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def info(self, message: str) -> None:
        logger.info(message)
        self.console.print(f"{PREFIX}: {message}", markup=False, highlight=False, soft_wrap=True)

    def error(self, message: str) -> None:
        logger.error(message)
        self.err_console.print(f"{PREFIX}: {message}", style="red", markup=False, highlight=False, soft_wrap=True)


class RecordingNotifier:
    """Keeps (level, message) pairs instead of printing them."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))


def format_outcome(
    outcome: UpdateOutcome, action: str = "check", changelog_url: str | None = None
) -> tuple[str, str]:
    """Format an outcome as a (level, message) pair.

    Args:
        outcome: Result of a check or update
        action: "check" or "update", the command that produced the outcome
        changelog_url: Changelog link for the version updated to

    Returns:
        Tuple of ("info" | "error", message)
    """
    if isinstance(outcome, UpToDate):
        if action == "update":
            return "info", f"You are already using the latest version! ({outcome.version})"
        return "info", f"You are up to date! ({outcome.version})"

    if isinstance(outcome, UpdateAvailable):
        return "info", (
            f"There is a new version ({outcome.latest}).  You are currently on "
            f"{outcome.current}.  Run `{PREFIX} update` to update."
        )

    if isinstance(outcome, MergeSucceeded):
        message = f"Updated to version {outcome.version}!"
        if changelog_url:
            message += f"  Check the changelog at {changelog_url}"
        return "info", message

    if isinstance(outcome, MergeRejected):
        return "error", f"Error updating... {outcome.reason}"

    if isinstance(outcome, UpdateError):
        if action == "update" and outcome.kind in MERGE_KINDS:
            return "error", f"Error updating... {outcome.detail}"
        return "error", f"Error checking updates... {outcome.detail}"

    raise TypeError(f"Unknown outcome: {outcome!r}")


def notify_outcome(
    notifier: Notifier,
    outcome: UpdateOutcome,
    action: str = "check",
    changelog_url: str | None = None,
) -> None:
    """Send a formatted outcome to a notifier."""
    level, message = format_outcome(outcome, action, changelog_url)
    if level == "error":
        notifier.error(message)
    else:
        notifier.info(message)


def announce(notifier: Notifier, action: str) -> None:
    """Tell the user work has started."""
    if action == "update":
        notifier.info("Attempting to update...")
    else:
        notifier.info("Checking updates...")
