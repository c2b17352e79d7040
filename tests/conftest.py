import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from git import Repo

from commitgenius.commit_message import CommitMessageStrategy
from commitgenius.git import GitRepository

pytest_plugins = ('pytest_asyncio',)


def _configure(repo: Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository with one commit."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        _configure(repo)

        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content\n")

        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")

        yield tmp_dir


@pytest.fixture
def empty_git_repo():
    """Create a temporary git repository without commits."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        _configure(repo)
        yield tmp_dir


@pytest.fixture
def staged_repo(temp_git_repo):
    """A repository with one modified file staged."""
    repo = Repo(temp_git_repo)
    test_file = Path(temp_git_repo) / "test.txt"
    test_file.write_text("Initial content\nAdded a line\n")
    repo.index.add(["test.txt"])
    return temp_git_repo


@pytest.fixture
def git(staged_repo):
    return GitRepository(staged_repo)


@pytest.fixture
def mock_strategy():
    """A strategy that answers every prompt with a fixed message."""
    strategy = AsyncMock(spec=CommitMessageStrategy)
    strategy.generate = AsyncMock(return_value="feat(test): add a line")
    return strategy
