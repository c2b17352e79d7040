"""Per-repository storage for developer notes.

Notes live in a JSON file inside the repository's ``.git`` directory, so they
are never tracked or pushed. The file records which working tree it belongs to
and is ignored when read from any other repository.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .git import GitRepository
from .models import Note, NoteCollection

NOTES_FILENAME = "commit-genius-notes.json"


class NotesStore:
    """Single-use developer context for the next generated commit message."""

    def __init__(self, git: GitRepository, console: Optional[Console] = None):
        self.repository = str(git.root)
        self.path: Path = git.git_dir / NOTES_FILENAME
        self.console = console or Console()

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> List[Note]:
        """Return the stored notes, or an empty list if they can't be used."""
        if not self.path.exists():
            return []

        try:
            collection = NoteCollection.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, ValidationError) as e:
            self.console.print(f"[yellow]Warning: Ignoring unreadable notes file {escape(str(self.path))}: {escape(str(e))}[/yellow]")
            return []

        if collection.repository != self.repository:
            return []
        return list(collection.notes)

    def list(self) -> List[Note]:
        return self.load()

    def add(self, message: str) -> Note:
        """Append a note and rewrite the whole file.

        Raises:
            ValueError: If the message is blank
        """
        if not message or not message.strip():
            raise ValueError("Note message must not be empty")

        note = Note(message=message)
        collection = NoteCollection(notes=[*self.load(), note], repository=self.repository)
        self._write(collection)
        return note

    def clear(self) -> bool:
        """Delete the notes file. Returns True if there was one."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        return True

    def _write(self, collection: NoteCollection) -> None:
        # Write to a sibling temp file and swap it in so readers never see half a file
        data = json.dumps(collection.model_dump(mode="json"), indent=2)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".commit-genius-notes-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
