#!/usr/bin/env python3
import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
import pyperclip
from rich.console import Console
from rich.markup import escape

from . import __version__
from .commit_message import CommitMessageGenerator, GeminiCommitStrategy
from .config import Config, config_candidates, load_env_file
from .core import CommitOrchestrator, GitCommitter
from .errors import CommitGeniusError
from .git import GitRepository
from .models import PrefixFormat, WorkflowState
from .notes import NotesStore
from .observers import ConsoleLogObserver, FileLogObserver
from .prefix import PrefixResolver
from .summarizer import DEFAULT_MAX_DIFF_LENGTH, DiffSummarizer

console = Console()


def run_async(coro):
    """Run a coroutine to completion from synchronous click code."""
    return asyncio.run(coro)


def fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    sys.exit(1)


def show_notes(store: NotesStore) -> None:
    notes = store.list()
    if not notes:
        console.print("[dim]No notes for this repository.[/dim]")
        return
    console.print(f"\n[bold]Notes ({len(notes)}):[/bold]")
    for i, note in enumerate(notes, start=1):
        stamp = note.timestamp.astimezone().strftime("%Y-%m-%d %H:%M")
        console.print(f"  {i}. {escape(note.message)} [dim]({stamp})[/dim]", highlight=False)


def show_config(config: Config) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config.config_path:
        console.print(f"[dim]Config file: {config.config_path.as_posix()}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<26} {'Value':<26} {'Source':<10}")
    console.print("-" * 64)

    def print_setting(name: str, value: object, source: str):
        console.print(f"{name:<26} {str(value):<26} {source:<10}", highlight=False)

    api_key = f"{config.api_key[:4]}..." if config.api_key else "None"
    print_setting("api_key", api_key, config.sources.get("api_key", "default"))
    print_setting("model", config.model, config.sources.get("model", "default"))
    print_setting("prefix_format", config.prefix_format.value, config.sources.get("prefix_format", "default"))
    print_setting(
        "auto_prefix_from_branch",
        config.auto_prefix_from_branch,
        config.sources.get("auto_prefix_from_branch", "default"),
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-d", "--dry-run", is_flag=True, help="Generate the commit message without committing"
)
@click.option(
    "-m",
    "--model",
    help="Gemini model to use (default: gemini-2.5-flash-lite, or COMMIT_GENIUS_MODEL / GEMINI_MODEL)",
)
@click.option(
    "--api-key",
    help="Gemini API key. Can also be set via COMMIT_GENIUS_API_KEY, the config file, or GEMINI_API_KEY.",
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("--prefix", help="Ticket prefix for the message, e.g. JR-1234 (overrides branch detection)")
@click.option(
    "--no-auto-prefix", is_flag=True, help="Don't detect a ticket prefix from the branch name"
)
@click.option(
    "--prefix-format",
    type=click.Choice([f.value for f in PrefixFormat], case_sensitive=False),
    help="Render the prefix as [PREFIX] message (brackets) or PREFIX: message (colon)",
)
@click.option("-n", "--note", "note", help="Add a note to give the next commit message context")
@click.option("--notes", "list_notes", is_flag=True, help="List the notes for this repository")
@click.option("--clear-notes", is_flag=True, help="Delete the notes for this repository")
@click.option(
    "-r", "--regenerate", is_flag=True, help="Regenerate the last commit's message and amend it"
)
@click.option("--init-config", is_flag=True, help="Create a config file with default values")
@click.option("--config-list", is_flag=True, help="Display current configuration settings")
@click.option("--no-verify", is_flag=True, help="Skip pre-commit hooks when committing")
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log git operations",
)
@click.option("--copy", is_flag=True, help="Copy the generated message to the clipboard")
@click.option(
    "--max-diff-length",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_DIFF_LENGTH,
    show_default=True,
    help="Diffs this long or longer are summarized before being sent to the model",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    dry_run: bool,
    model: Optional[str],
    api_key: Optional[str],
    path: Path,
    prefix: Optional[str],
    no_auto_prefix: bool,
    prefix_format: Optional[str],
    note: Optional[str],
    list_notes: bool,
    clear_notes: bool,
    regenerate: bool,
    init_config: bool,
    config_list: bool,
    no_verify: bool,
    log_file: Optional[Path],
    copy: bool,
    max_diff_length: int,
    version: bool,
):
    """
    Commit Genius: generate commit messages from staged changes with Gemini.

    This tool will:
    1. Read your staged changes (or the last commit with --regenerate)
    2. Add any notes you left with --note as context
    3. Generate a conventional commit message
    4. Prefix it with a ticket id from --prefix or your branch name
    5. Commit (or amend), then clear the notes

    Configuration is read from ~/.commit-genius.json or
    ~/.config/commit-genius/config.json, and API keys also from the
    environment or a .env file. Command line options override both.
    """
    try:
        if version:
            console.print(f"commit-genius {__version__}")
            return

        load_env_file(path.absolute())

        if init_config:
            config_path = config_candidates()[0]
            if Config.write_template(config_path):
                console.print(f"[green]Created config file:[/green] {config_path}")
                console.print("Add your Gemini API key as \"apiKey\" to start generating messages.")
            else:
                console.print(f"[yellow]Config file already exists:[/yellow] {config_path}")
            return

        config = Config.load(
            model=model,
            api_key=api_key,
            prefix_format=PrefixFormat(prefix_format.lower()) if prefix_format else None,
            auto_prefix_from_branch=False if no_auto_prefix else None,
            console=console,
        )

        if config_list:
            show_config(config)
            return

        git = GitRepository(str(path.absolute()))
        notes_store = NotesStore(git, console)

        if note is not None:
            try:
                added = notes_store.add(note)
            except ValueError as e:
                fail(str(e))
            count = len(notes_store.list())
            console.print(f"[green]Added note ({count} total):[/green] {escape(added.message)}", highlight=False)
            return

        if list_notes:
            show_notes(notes_store)
            return

        if clear_notes:
            if notes_store.clear():
                console.print("[green]Cleared notes.[/green]")
            else:
                console.print("[dim]No notes to clear.[/dim]")
            return

        summarizer = DiffSummarizer(git, max_diff_length=max_diff_length, console=console)
        # Nothing staged is reported ahead of a missing API key
        if not regenerate and not git.staged_name_status():
            fail("No staged changes found. Stage your changes first with: git add <files>")

        strategy = GeminiCommitStrategy(model=config.model, api_key=config.require_api_key())
        committer = GitCommitter(git, console, no_verify=no_verify)
        committer.add_observer(ConsoleLogObserver(console))
        if log_file is not None:
            committer.add_observer(FileLogObserver(str(log_file)))

        orchestrator = CommitOrchestrator(
            git=git,
            notes_store=notes_store,
            summarizer=summarizer,
            generator=CommitMessageGenerator(strategy, console),
            prefix_resolver=PrefixResolver(git, auto_detect=config.auto_prefix_from_branch, console=console),
            committer=committer,
            prefix_format=config.prefix_format,
            console=console,
        )

        result = run_async(
            orchestrator.run(dry_run=dry_run, regenerate=regenerate, prefix_override=prefix)
        )

        console.print("\n[bold]Generated commit message:[/bold]")
        console.print(f"   {escape(result.message)}", highlight=False)

        if copy:
            try:
                pyperclip.copy(result.message)
                console.print("[green]Message copied to clipboard![/green]")
            except pyperclip.PyperclipException as e:
                console.print(f"[yellow]Warning: Could not copy to clipboard: {e}[/yellow]")

        if result.state == WorkflowState.DRY_RUN_STOPPED:
            console.print("\n[yellow]Dry run mode - not committing changes[/yellow]")
        elif result.state == WorkflowState.AMENDED:
            console.print("[green]Successfully amended the last commit![/green]")
        else:
            console.print("[green]Successfully committed changes![/green]")
    except (CommitGeniusError, OSError) as e:
        fail(str(e))
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
