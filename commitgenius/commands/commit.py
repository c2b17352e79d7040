"""Command for creating git commits."""

from typing import Optional

from rich.console import Console

from ..git import GitRepository
from .base import GitCommand


class CommitCommand(GitCommand):
    """Commit the staged changes with a prepared message.

    Attributes:
        message (str): The final commit message
        commit_hash (Optional[str]): The hash of the created commit
    """

    def __init__(
        self,
        git: GitRepository,
        message: str,
        console: Optional[Console] = None,
        no_verify: bool = False,
    ):
        super().__init__(git, console)
        self.message = message
        self.no_verify = no_verify
        self.commit_hash: Optional[str] = None

    async def execute(self) -> str:
        self.commit_hash = self.git.commit(self.message, no_verify=self.no_verify)

        await self.notify("on_commit_created", self.message, self.commit_hash)

        return self.commit_hash
