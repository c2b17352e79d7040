"""Decide how much of a change set to show the model."""
from typing import Callable, Optional

from rich.console import Console

from .errors import GitError
from .git import GitRepository
from .models import DiffPayload

DEFAULT_MAX_DIFF_LENGTH = 30000
DEFAULT_MAX_BUFFER = 10 * 1024 * 1024


class DiffTooLargeError(Exception):
    """The raw diff exceeded the read buffer."""


class DiffSummarizer:
    """Builds a DiffPayload from the staged changes or the last commit.

    Diffs below ``max_diff_length`` are passed through untouched. Larger diffs
    are replaced by the file status listing, ``--stat`` block and file names.
    If the diff can't be read at all (git fails or the output overflows
    ``max_buffer``) only the status listing and stat block are used.
    """

    def __init__(
        self,
        git: GitRepository,
        max_diff_length: int = DEFAULT_MAX_DIFF_LENGTH,
        max_buffer: int = DEFAULT_MAX_BUFFER,
        console: Optional[Console] = None,
    ):
        self.git = git
        self.max_diff_length = max_diff_length
        self.max_buffer = max_buffer
        self.console = console or Console()

    def summarize_staged(self) -> Optional[DiffPayload]:
        """Payload for the staged changes, or None when nothing is staged."""
        return self._summarize(
            name_status=self.git.staged_name_status,
            diff=self.git.staged_diff,
            stat=self.git.staged_stat,
            name_only=self.git.staged_name_only,
        )

    def summarize_last_commit(self) -> Optional[DiffPayload]:
        """Payload for HEAD, carrying its current message."""
        payload = self._summarize(
            name_status=self.git.last_commit_name_status,
            diff=self.git.last_commit_diff,
            stat=self.git.last_commit_stat,
            name_only=self.git.last_commit_name_only,
        )
        previous = self.git.last_commit_message()
        if payload is None:
            # Empty commits still have a message worth rewriting
            return DiffPayload(content="", is_summary=True, file_count=0, previous_message=previous)
        return DiffPayload(
            content=payload.content,
            is_summary=payload.is_summary,
            file_count=payload.file_count,
            previous_message=previous,
        )

    def _fetch_diff(self, diff: Callable[[], str]) -> str:
        raw = diff()
        if len(raw) > self.max_buffer:
            raise DiffTooLargeError(f"diff is {len(raw)} bytes")
        return raw.strip()

    def _summarize(
        self,
        name_status: Callable[[], str],
        diff: Callable[[], str],
        stat: Callable[[], str],
        name_only: Callable[[], str],
    ) -> Optional[DiffPayload]:
        file_changes = name_status()
        if not file_changes:
            return None

        file_count = len(file_changes.splitlines())
        self.console.print(f"[dim]Files changed: {file_count}[/dim]")

        try:
            full_diff = self._fetch_diff(diff)
        except (GitError, DiffTooLargeError):
            self.console.print(
                "[yellow]Diff too large for processing. Using file change summary for AI analysis...[/yellow]"
            )
            content = (
                f"Files changed:\n{file_changes}\n\n"
                f"File statistics:\n{stat()}\n\n"
                "Note: This is a very large commit. The commit message is generated "
                "based on file changes and statistics."
            )
            return DiffPayload(content=content, is_summary=True, file_count=file_count)

        if len(full_diff) >= self.max_diff_length:
            size_kb = round(len(full_diff) / 1024)
            self.console.print(
                f"[yellow]Large diff detected ({size_kb}KB). "
                "Using file summary for AI analysis...[/yellow]"
            )
            content = (
                f"Files changed:\n{file_changes}\n\n"
                f"File statistics:\n{stat()}\n\n"
                f"Files modified:\n{name_only()}\n\n"
                f"Note: This is a large commit with {size_kb}KB of changes.\n"
                "The commit message is generated based on file changes rather than "
                "detailed diff content."
            )
            return DiffPayload(content=content, is_summary=True, file_count=file_count)

        return DiffPayload(content=full_diff, is_summary=False, file_count=file_count)
