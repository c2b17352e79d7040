"""Commit message generation package."""

from .generator import CommitMessageGenerator, normalize_message
from .strategy import DEFAULT_MODEL, CommitMessageStrategy, GeminiCommitStrategy
from .validator import CommitMessageValidator

__all__ = [
    'DEFAULT_MODEL',
    'CommitMessageStrategy',
    'GeminiCommitStrategy',
    'CommitMessageGenerator',
    'CommitMessageValidator',
    'normalize_message',
]
