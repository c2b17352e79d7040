"""Base command class for git write operations.

This module provides the abstract base class for the commands that change the
repository, implementing the Command Pattern with observer support.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from rich.console import Console

from ..git import GitRepository
from ..observers import GitOperationObserver, notify_observers


class GitCommand(ABC):
    """Abstract base class for git commands.

    Attributes:
        git (GitRepository): The repository to operate on
        console (Console): Rich console for output
        observers (List[GitOperationObserver]): List of observers to notify
    """

    def __init__(self, git: GitRepository, console: Optional[Console] = None):
        self.git = git
        self.console = console or Console()
        self.observers: List[GitOperationObserver] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        self.observers.remove(observer)

    async def notify(self, event: str, *args) -> None:
        """Report a write that git already accepted to every observer."""
        await notify_observers(self.observers, event, *args, console=self.console)

    @abstractmethod
    async def execute(self) -> str:
        """Execute the git command.

        Returns:
            str: The hash of the resulting commit

        Raises:
            CommitError: If git refuses the write
        """
        pass
