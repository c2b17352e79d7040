"""Command for rewriting the last commit message."""

from typing import Optional

from rich.console import Console

from ..git import GitRepository
from .base import GitCommand


class AmendCommand(GitCommand):
    """Replace the message of HEAD without touching its content.

    Attributes:
        message (str): The new commit message
        previous_hash (Optional[str]): HEAD before the amend
        commit_hash (Optional[str]): HEAD after the amend
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
        self.previous_hash: Optional[str] = None
        self.commit_hash: Optional[str] = None

    async def execute(self) -> str:
        self.previous_hash = self.git.last_commit_hash()
        self.commit_hash = self.git.amend_message(self.message, no_verify=self.no_verify)

        await self.notify("on_commit_amended", self.message, self.commit_hash)

        return self.commit_hash
