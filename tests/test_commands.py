"""Tests for git write commands and observers."""
from unittest.mock import AsyncMock, Mock

import pytest
from git import Repo
from rich.console import Console

from commitgenius.commands import AmendCommand, CommitCommand
from commitgenius.errors import CommitError
from commitgenius.git import GitRepository
from commitgenius.observers import ConsoleLogObserver, FileLogObserver, GitOperationObserver


@pytest.fixture
def mock_console():
    """Mock console for testing."""
    console = Mock(spec=Console)
    console.print = Mock()
    return console


@pytest.fixture
def mock_observer():
    observer = Mock(spec=GitOperationObserver)
    observer.on_commit_created = AsyncMock()
    observer.on_commit_amended = AsyncMock()
    return observer


@pytest.mark.asyncio
async def test_commit_command(git, mock_console, mock_observer):
    command = CommitCommand(git, "feat(test): add a line", mock_console)
    command.add_observer(mock_observer)

    commit_hash = await command.execute()

    repo = Repo(git.root)
    assert repo.head.commit.hexsha == commit_hash == command.commit_hash
    assert repo.head.commit.message.strip() == "feat(test): add a line"
    assert len(list(repo.iter_commits())) == 2
    mock_observer.on_commit_created.assert_awaited_once_with("feat(test): add a line", commit_hash)


@pytest.mark.asyncio
async def test_commit_message_is_not_shell_interpreted(git, mock_console):
    message = 'fix: handle "quotes" and $(echo injected) `ticks`'

    await CommitCommand(git, message, mock_console).execute()

    assert Repo(git.root).head.commit.message.strip() == message


@pytest.mark.asyncio
async def test_commit_without_staged_changes_raises(temp_git_repo, mock_console, mock_observer):
    command = CommitCommand(GitRepository(temp_git_repo), "feat: nothing", mock_console)
    command.add_observer(mock_observer)

    with pytest.raises(CommitError):
        await command.execute()
    mock_observer.on_commit_created.assert_not_called()


@pytest.mark.asyncio
async def test_amend_command_rewrites_message_only(git, mock_console, mock_observer):
    repo = Repo(git.root)
    original = repo.head.commit
    command = AmendCommand(git, "chore: initial import", mock_console)
    command.add_observer(mock_observer)

    commit_hash = await command.execute()

    assert command.previous_hash == original.hexsha
    assert commit_hash != original.hexsha
    assert repo.head.commit.message.strip() == "chore: initial import"
    assert repo.head.commit.tree == original.tree
    mock_observer.on_commit_amended.assert_awaited_once_with("chore: initial import", commit_hash)


@pytest.mark.asyncio
async def test_remove_observer(git, mock_console, mock_observer):
    command = CommitCommand(git, "feat: x", mock_console)
    command.add_observer(mock_observer)
    command.remove_observer(mock_observer)

    await command.execute()

    mock_observer.on_commit_created.assert_not_called()


@pytest.mark.asyncio
async def test_console_log_observer(mock_console):
    observer = ConsoleLogObserver(mock_console)

    await observer.on_commit_created("feat: x", "abcdef1234567")
    await observer.on_commit_amended("fix: y", "1234567abcdef")
    await observer.on_notes_cleared(2)

    printed = [c[0][0] for c in mock_console.print.call_args_list]
    assert "Created commit abcdef1: feat: x" in printed[0]
    assert "Amended commit 1234567: fix: y" in printed[1]
    assert "Cleared 2 notes" in printed[2]


@pytest.mark.asyncio
async def test_file_log_observer(tmp_path):
    log_file = tmp_path / "logs" / "git.log"
    observer = FileLogObserver(str(log_file))

    await observer.on_commit_created("feat: x", "abc123")
    await observer.on_notes_cleared(1)

    lines = log_file.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith(" - Created commit abc123: feat: x")
    assert lines[1].endswith(" - Cleared 1 notes")


@pytest.mark.asyncio
async def test_observer_failure_is_a_warning(git, mock_console, mock_observer):
    failing = Mock(spec=GitOperationObserver)
    failing.on_commit_created = AsyncMock(side_effect=OSError("disk full"))
    command = CommitCommand(git, "feat: x", mock_console)
    command.add_observer(failing)
    command.add_observer(mock_observer)

    commit_hash = await command.execute()

    assert Repo(git.root).head.commit.hexsha == commit_hash
    mock_observer.on_commit_created.assert_awaited_once_with("feat: x", commit_hash)
    assert "disk full" in mock_console.print.call_args[0][0]
