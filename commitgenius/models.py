"""Shared models for commit-genius."""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PrefixFormat(str, Enum):
    BRACKETS = "brackets"
    COLON = "colon"


class PrefixSource(str, Enum):
    CLI = "cli"
    BRANCH = "branch"


class WorkflowState(str, Enum):
    IDLE = "idle"
    CHANGES_CHECKED = "changes_checked"
    NOTES_LOADED = "notes_loaded"
    MESSAGE_GENERATED = "message_generated"
    PREFIX_APPLIED = "prefix_applied"
    COMMITTED = "committed"
    AMENDED = "amended"
    DRY_RUN_STOPPED = "dry_run_stopped"


class Note(BaseModel):
    """A piece of developer context attached before committing."""

    model_config = ConfigDict(frozen=True)

    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("message")
    @classmethod
    def _strip_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Note message must not be empty")
        return value


class NoteCollection(BaseModel):
    """The on-disk shape of the notes file."""

    notes: List[Note] = Field(default_factory=list)
    repository: str


@dataclass(frozen=True)
class DiffPayload:
    content: str
    is_summary: bool
    file_count: int
    previous_message: Optional[str] = None


@dataclass(frozen=True)
class Prefix:
    value: str
    source: PrefixSource
    valid: bool = True


@dataclass
class RunResult:
    state: WorkflowState
    message: Optional[str] = None
    prefix: Optional[Prefix] = None
    commit_sha: Optional[str] = None
    notes_used: int = 0
