"""Exception types for commit-genius."""


class CommitGeniusError(Exception):
    """Base class for errors that end a run with a diagnostic."""


class NotARepositoryError(CommitGeniusError):
    """Raised when the target path is not inside a git working tree."""


class GitError(CommitGeniusError):
    """Raised when a read-only git query fails."""


class NothingStagedError(CommitGeniusError):
    """Raised when there are no staged changes to describe."""

    def __init__(self, message: str = "No staged changes found. Stage your changes first with: git add <files>"):
        super().__init__(message)


class NoCommitsError(CommitGeniusError):
    """Raised when regenerating in a repository without commits."""

    def __init__(self, message: str = "No commits found to regenerate"):
        super().__init__(message)


class MissingApiKeyError(CommitGeniusError):
    """Raised when no Gemini API key could be resolved."""


class GenerationError(CommitGeniusError):
    """Raised when the model call fails or produces no usable message."""


class CommitError(CommitGeniusError):
    """Raised when writing the commit (or amending it) fails."""
