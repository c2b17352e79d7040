"""Commit message validation using Chain of Responsibility pattern."""
import re
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..prompts import COMMIT_TYPES

CONVENTIONAL_PATTERN = re.compile(
    r"^(?:" + "|".join(COMMIT_TYPES) + r")(?:\([^()]+\))?!?: \S"
)


class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, message: str) -> Tuple[bool, str]:
        """Handle validation and pass to next handler if valid."""
        result = self.validate(message)
        if not result[0] or not self.next_handler:
            return result
        return self.next_handler.handle(message)

    @abstractmethod
    def validate(self, message: str) -> Tuple[bool, str]:
        """Validate the commit message."""
        pass


class EmptyMessageHandler(ValidationHandler):
    """Validates that the message is not empty."""

    def validate(self, message: str) -> Tuple[bool, str]:
        if not message.strip():
            return False, "Empty commit message"
        return True, ""


class SingleLineHandler(ValidationHandler):
    """Validates that the message is one line.

    Generated messages are already one line after normalization; this guards
    messages passed to CommitMessageValidator directly.
    """

    def validate(self, message: str) -> Tuple[bool, str]:
        if "\n" in message:
            return False, "Commit message must be a single line"
        return True, ""


class ConventionalFormatHandler(ValidationHandler):
    """Validates conventional commit format."""

    def validate(self, message: str) -> Tuple[bool, str]:
        if not CONVENTIONAL_PATTERN.match(message):
            return False, "Message does not follow format: type(scope): description"
        return True, ""


class SubjectPeriodHandler(ValidationHandler):
    """Validates that the subject line doesn't end with a period."""

    def validate(self, message: str) -> Tuple[bool, str]:
        if message.endswith('.'):
            return False, "Subject line should not end with a period"
        return True, ""


class SubjectLengthHandler(ValidationHandler):
    """Validates the subject line length."""

    def __init__(self, max_length: int = 50, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.max_length = max_length

    def validate(self, message: str) -> Tuple[bool, str]:
        if len(message) > self.max_length:
            return False, f"Subject line too long ({len(message)} > {self.max_length})"
        return True, ""


def create_validation_chain(max_subject_length: int = 50) -> ValidationHandler:
    """Create the default validation chain."""
    subject_length = SubjectLengthHandler(max_subject_length)
    subject_period = SubjectPeriodHandler(subject_length)
    conventional = ConventionalFormatHandler(subject_period)
    single_line = SingleLineHandler(conventional)
    empty_message = EmptyMessageHandler(single_line)

    return empty_message
