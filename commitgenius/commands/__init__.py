"""Git write operations using the Command Pattern.

Each write the tool performs is a command object that reports to the
registered observers once git has accepted it.

Example:
    ```python
    from commitgenius.commands import CommitCommand
    from commitgenius.observers import FileLogObserver

    command = CommitCommand(git, "feat(auth): add login endpoint")
    command.add_observer(FileLogObserver("git.log"))
    commit_hash = await command.execute()
    ```
"""

from .amend import AmendCommand
from .base import GitCommand
from .commit import CommitCommand

__all__ = [
    "GitCommand",
    "AmendCommand",
    "CommitCommand",
]
