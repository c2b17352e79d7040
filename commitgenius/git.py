"""Typed access to the git operations commit-genius depends on.

Every call goes through GitPython's command wrapper, which passes arguments as
an argument list. Commit messages are never interpolated into a shell string.
"""
from pathlib import Path
from typing import Optional

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from .errors import CommitError, GitError, NotARepositoryError


def _describe(error: GitCommandError) -> str:
    """Reduce a GitCommandError to the text git printed on stderr."""
    stderr = (error.stderr or "").strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip().strip("'")
    return stderr or str(error)


class GitRepository:
    """Facade over a GitPython ``Repo``.

    Read operations raise :class:`GitError`, write operations raise
    :class:`CommitError`.
    """

    def __init__(self, path: str = "."):
        try:
            self.repo = Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotARepositoryError(
                f"Not a git repository: {path}. Run this command inside a git working tree."
            ) from e
        if self.repo.bare or self.repo.working_tree_dir is None:
            raise NotARepositoryError(f"Repository at {path} has no working tree")

    @property
    def root(self) -> Path:
        """Absolute path of the working tree root."""
        return Path(self.repo.working_tree_dir).resolve()

    @property
    def git_dir(self) -> Path:
        """The repository's control directory (``.git`` or a worktree's own dir)."""
        return Path(self.repo.git_dir).resolve()

    def _read(self, command: str, *args: str) -> str:
        try:
            return getattr(self.repo.git, command)(*args)
        except GitCommandError as e:
            raise GitError(f"git {command} failed: {_describe(e)}") from e

    # Staged changes

    def staged_name_status(self) -> str:
        return self._read("diff", "--cached", "--name-status").strip()

    def staged_diff(self) -> str:
        return self._read("diff", "--cached")

    def staged_stat(self) -> str:
        return self._read("diff", "--cached", "--stat").strip()

    def staged_name_only(self) -> str:
        return self._read("diff", "--cached", "--name-only").strip()

    # Last commit

    def has_commits(self) -> bool:
        return self.repo.head.is_valid()

    def last_commit_name_status(self) -> str:
        return self._read("show", "--format=", "--name-status", "HEAD").strip()

    def last_commit_diff(self) -> str:
        return self._read("show", "--format=", "HEAD")

    def last_commit_stat(self) -> str:
        return self._read("show", "--format=", "--stat", "HEAD").strip()

    def last_commit_name_only(self) -> str:
        return self._read("show", "--format=", "--name-only", "HEAD").strip()

    def last_commit_message(self) -> str:
        return self.repo.head.commit.message.strip()

    def last_commit_hash(self) -> str:
        return self.repo.head.commit.hexsha

    def current_branch(self) -> Optional[str]:
        """Name of the checked-out branch, or None on a detached HEAD."""
        branch = self._read("branch", "--show-current").strip()
        return branch or None

    # Writes

    def commit(self, message: str, no_verify: bool = False) -> str:
        args = ["-m", message]
        if no_verify:
            args.append("--no-verify")
        try:
            self.repo.git.commit(*args)
        except GitCommandError as e:
            raise CommitError(f"Failed to commit changes: {_describe(e)}") from e
        return self.last_commit_hash()

    def amend_message(self, message: str, no_verify: bool = False) -> str:
        """Rewrite the last commit's message, leaving staged content out of it."""
        args = ["--amend", "--only", "-m", message]
        if no_verify:
            args.append("--no-verify")
        try:
            self.repo.git.commit(*args)
        except GitCommandError as e:
            raise CommitError(f"Failed to amend commit: {_describe(e)}") from e
        return self.last_commit_hash()
