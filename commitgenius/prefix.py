"""Ticket prefixes from the command line or the current branch name."""
import re
from typing import Optional

from rich.console import Console

from .errors import GitError
from .git import GitRepository
from .models import Prefix, PrefixFormat, PrefixSource

VALID_PREFIX_PATTERNS = (
    re.compile(r"^[A-Za-z][A-Za-z0-9]*-\d+$"),
    re.compile(r"^#\d+$"),
)

# Checked in order, first match wins
BRANCH_PATTERNS = (
    re.compile(r"^[a-z]+/([a-z][a-z0-9]*-\d+)", re.IGNORECASE),
    re.compile(r"^([a-z][a-z0-9]*-\d+)", re.IGNORECASE),
    re.compile(r"^[a-z]+/([a-z]+\d+)(?:[-_/]|$)", re.IGNORECASE),
    re.compile(r"^([a-z]+\d+)(?:[-_/]|$)", re.IGNORECASE),
)


def is_valid_prefix(value: str) -> bool:
    return any(pattern.match(value) for pattern in VALID_PREFIX_PATTERNS)


def prefix_from_branch(branch: str) -> Optional[str]:
    """Extract an uppercased ticket id such as ``JR-1234`` from a branch name."""
    for pattern in BRANCH_PATTERNS:
        match = pattern.match(branch)
        if match:
            return match.group(1).upper()
    return None


def render_prefix(value: str, style: PrefixFormat) -> str:
    if style == PrefixFormat.COLON:
        return f"{value}: "
    return f"[{value}] "


def format_message(message: str, prefix: Optional[Prefix], style: PrefixFormat = PrefixFormat.BRACKETS) -> str:
    """Prepend the prefix in the configured style; no prefix means no change."""
    if prefix is None:
        return message
    rendered = render_prefix(prefix.value, style)
    if message.startswith(rendered):
        return message
    return f"{rendered}{message}"


class PrefixResolver:
    """Chooses the prefix for a run: explicit override, then branch name."""

    def __init__(self, git: GitRepository, auto_detect: bool = True, console: Optional[Console] = None):
        self.git = git
        self.auto_detect = auto_detect
        self.console = console or Console()

    def resolve(self, override: Optional[str] = None) -> Optional[Prefix]:
        if override is not None and override.strip():
            value = override.strip()
            valid = is_valid_prefix(value)
            if not valid:
                self.console.print(
                    f"[yellow]Warning: Prefix '{value}' doesn't look like a ticket id "
                    "(e.g. ABC-123 or #123). Using it anyway.[/yellow]"
                )
            return Prefix(value=value, source=PrefixSource.CLI, valid=valid)

        if not self.auto_detect:
            return None

        try:
            branch = self.git.current_branch()
        except GitError:
            return None
        if not branch:
            return None

        value = prefix_from_branch(branch)
        if value is None:
            return None
        return Prefix(value=value, source=PrefixSource.BRANCH, valid=True)
