"""Observer pattern for git operations."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape


class GitOperationObserver(ABC):
    """Abstract base class for git operation observers."""

    @abstractmethod
    async def on_commit_created(self, message: str, commit_sha: str) -> None:
        """Called when a commit is created."""
        pass

    @abstractmethod
    async def on_commit_amended(self, message: str, commit_sha: str) -> None:
        """Called when the last commit's message is rewritten."""
        pass

    @abstractmethod
    async def on_notes_cleared(self, count: int) -> None:
        """Called when notes are consumed by a successful write."""
        pass


async def notify_observers(
    observers: Sequence[GitOperationObserver], event: str, *args, console: Optional[Console] = None
) -> None:
    """Call ``event`` on each observer.

    A failing observer only produces a warning: the write it reports on has
    already happened and the rest of the run must still see it as done.
    """
    console = console or Console()
    for observer in observers:
        try:
            await getattr(observer, event)(*args)
        except Exception as e:
            console.print(
                f"[yellow]Warning: {type(observer).__name__} failed: {escape(str(e))}[/yellow]"
            )


class ConsoleLogObserver(GitOperationObserver):
    """Observer that logs git operations to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def on_commit_created(self, message: str, commit_sha: str) -> None:
        self.console.print(f"[green]Created commit {commit_sha[:7]}: {escape(message)}[/green]")

    async def on_commit_amended(self, message: str, commit_sha: str) -> None:
        self.console.print(f"[green]Amended commit {commit_sha[:7]}: {escape(message)}[/green]")

    async def on_notes_cleared(self, count: int) -> None:
        noun = "note" if count == 1 else "notes"
        self.console.print(f"[dim]Cleared {count} {noun}[/dim]")


class FileLogObserver(GitOperationObserver):
    """Observer that logs git operations to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_commit_created(self, message: str, commit_sha: str) -> None:
        await self._log(f"Created commit {commit_sha}: {message}")

    async def on_commit_amended(self, message: str, commit_sha: str) -> None:
        await self._log(f"Amended commit {commit_sha}: {message}")

    async def on_notes_cleared(self, count: int) -> None:
        await self._log(f"Cleared {count} notes")
