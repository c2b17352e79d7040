"""Commit message validation."""
from typing import Tuple

from .validation import create_validation_chain

SHORT_SUBJECT_LENGTH = 50
NOTES_SUBJECT_LENGTH = 72


class CommitMessageValidator:
    """Checks generated messages against the conventional commit rules."""

    def __init__(self, max_subject_length: int = SHORT_SUBJECT_LENGTH):
        self.max_subject_length = max_subject_length
        self.validation_chain = create_validation_chain(max_subject_length)

    @classmethod
    def for_notes(cls, has_notes: bool) -> 'CommitMessageValidator':
        """Validator with the length cap the prompt asked for."""
        return cls(NOTES_SUBJECT_LENGTH if has_notes else SHORT_SUBJECT_LENGTH)

    def validate(self, message: str) -> Tuple[bool, str]:
        """Validate a commit message against standards."""
        return self.validation_chain.handle(message)
