"""Turn a prompt into one clean commit message line."""
import re
from typing import Optional

from rich.console import Console

from ..errors import GenerationError
from .strategy import CommitMessageStrategy
from .validator import CommitMessageValidator

_COMMAND_ECHO = re.compile(r"^git\s+commit\s+-m\s*", re.IGNORECASE)
_QUOTES = ('"', "'", "`")


def normalize_message(raw: str) -> str:
    """Reduce raw model output to a single commit message line.

    Keeps the first line after any leading code fence, then drops an echoed
    ``git commit -m`` and a pair of wrapping quotes until neither is left, so
    running it on its own output changes nothing.
    """
    lines = raw.strip().splitlines()
    while lines and (lines[0].strip().startswith("```") or not lines[0].strip()):
        lines.pop(0)
    if not lines:
        return ""

    message = lines[0].strip()
    previous = None
    while message != previous:
        previous = message
        message = _COMMAND_ECHO.sub("", message).strip()
        if len(message) >= 2 and message[0] == message[-1] and message[0] in _QUOTES:
            message = message[1:-1].strip()
    return message


class CommitMessageGenerator:
    """Runs the model once and normalizes what it returns."""

    def __init__(self, strategy: CommitMessageStrategy, console: Optional[Console] = None):
        if strategy is None:
            raise ValueError("Strategy must be provided to CommitMessageGenerator")
        self.strategy = strategy
        self.console = console or Console()

    async def generate(self, prompt: str, has_notes: bool = False) -> str:
        """Generate a commit message for the prompt.

        Raises:
            GenerationError: If the model call fails or returns nothing usable
        """
        try:
            raw = await self.strategy.generate(prompt)
        except Exception as e:
            raise GenerationError(f"Failed to generate commit message: {e}") from e

        message = normalize_message(raw or "")
        if not message:
            raise GenerationError("Failed to generate commit message: the model returned an empty response")

        is_valid, reason = CommitMessageValidator.for_notes(has_notes).validate(message)
        if not is_valid:
            self.console.print(f"[yellow]Warning: {reason}[/yellow]")
        return message
