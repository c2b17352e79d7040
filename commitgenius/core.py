"""Core functionality for commit-genius."""
from typing import List, Optional

from rich.console import Console

from .commands import AmendCommand, CommitCommand, GitCommand
from .commit_message import CommitMessageGenerator
from .errors import NoCommitsError, NothingStagedError
from .git import GitRepository
from .models import DiffPayload, Note, PrefixFormat, RunResult, WorkflowState
from .notes import NotesStore
from .observers import GitOperationObserver, notify_observers
from .prefix import PrefixResolver, format_message
from .prompts import build_prompt
from .summarizer import DiffSummarizer


class GitCommitter:
    """Handles git writes using the Command Pattern."""

    def __init__(self, git: GitRepository, console: Optional[Console] = None, no_verify: bool = False):
        self.git = git
        self.console = console or Console()
        self.no_verify = no_verify
        self.observers: List[GitOperationObserver] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        """Add an observer to be notified of git operations."""
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    async def execute_command(self, command: GitCommand) -> str:
        for observer in self.observers:
            command.add_observer(observer)
        return await command.execute()

    async def commit(self, message: str) -> str:
        command = CommitCommand(self.git, message, self.console, no_verify=self.no_verify)
        return await self.execute_command(command)

    async def amend(self, message: str) -> str:
        command = AmendCommand(self.git, message, self.console, no_verify=self.no_verify)
        return await self.execute_command(command)

    async def notify_notes_cleared(self, count: int) -> None:
        await notify_observers(self.observers, "on_notes_cleared", count, console=self.console)


class CommitOrchestrator:
    """Runs one generate-and-commit (or regenerate-and-amend) pass.

    The pass moves through :class:`WorkflowState` in order. Anything that goes
    wrong raises and leaves the repository and the notes as they were.
    Notes are deleted only after git has accepted the new commit.
    """

    def __init__(
        self,
        git: GitRepository,
        notes_store: NotesStore,
        summarizer: DiffSummarizer,
        generator: CommitMessageGenerator,
        prefix_resolver: PrefixResolver,
        committer: GitCommitter,
        prefix_format: PrefixFormat = PrefixFormat.BRACKETS,
        console: Optional[Console] = None,
    ):
        self.git = git
        self.notes_store = notes_store
        self.summarizer = summarizer
        self.generator = generator
        self.prefix_resolver = prefix_resolver
        self.committer = committer
        self.prefix_format = prefix_format
        self.console = console or Console()
        self.state = WorkflowState.IDLE

    def _check_changes(self, regenerate: bool) -> DiffPayload:
        if regenerate:
            if not self.git.has_commits():
                raise NoCommitsError()
            self.console.print("[blue]Loading last commit...[/blue]")
            payload = self.summarizer.summarize_last_commit()
        else:
            self.console.print("[blue]Checking for staged changes...[/blue]")
            payload = self.summarizer.summarize_staged()
            if payload is None:
                raise NothingStagedError()
        self.state = WorkflowState.CHANGES_CHECKED
        return payload

    def _load_notes(self) -> List[Note]:
        notes = self.notes_store.load()
        if notes:
            noun = "note" if len(notes) == 1 else "notes"
            self.console.print(f"[dim]Using {len(notes)} {noun} as context[/dim]")
        self.state = WorkflowState.NOTES_LOADED
        return notes

    async def run(
        self,
        dry_run: bool = False,
        regenerate: bool = False,
        prefix_override: Optional[str] = None,
    ) -> RunResult:
        self.state = WorkflowState.IDLE

        payload = self._check_changes(regenerate)
        notes = self._load_notes()

        self.console.print("[blue]Generating commit message with AI...[/blue]")
        prompt = build_prompt(payload, notes)
        message = await self.generator.generate(prompt, has_notes=bool(notes))
        self.state = WorkflowState.MESSAGE_GENERATED

        prefix = self.prefix_resolver.resolve(prefix_override)
        message = format_message(message, prefix, self.prefix_format)
        self.state = WorkflowState.PREFIX_APPLIED

        result = RunResult(state=self.state, message=message, prefix=prefix, notes_used=len(notes))

        if dry_run:
            self.state = WorkflowState.DRY_RUN_STOPPED
            result.state = self.state
            return result

        if regenerate:
            result.commit_sha = await self.committer.amend(message)
            self.state = WorkflowState.AMENDED
        else:
            result.commit_sha = await self.committer.commit(message)
            self.state = WorkflowState.COMMITTED
        result.state = self.state

        if notes and self.notes_store.clear():
            await self.committer.notify_notes_cleared(len(notes))

        return result
