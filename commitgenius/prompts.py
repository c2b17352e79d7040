"""Prompt construction for commit message generation."""
from typing import List, Sequence

from .models import DiffPayload, Note

COMMIT_TYPES = ("feat", "fix", "docs", "style", "refactor", "test", "chore", "perf", "ci", "build")

NOTES_START = "--- DEVELOPER CONTEXT ---"
NOTES_END = "--- END DEVELOPER CONTEXT ---"
PREVIOUS_START = "--- PREVIOUS COMMIT MESSAGE ---"
PREVIOUS_END = "--- END PREVIOUS COMMIT MESSAGE ---"

PROMPT_INTRO = "You are an expert developer who writes clear, concise commit messages following conventional commit format."

DIFF_TASK = "Analyze the following git diff and generate a single, well-formatted commit message."
SUMMARY_TASK = "Analyze the following file changes and statistics to generate a single, well-formatted commit message."

DIFF_FOCUS = "Focus on the specific code changes"
SUMMARY_FOCUS = (
    'Focus on the overall purpose based on file patterns '
    '(e.g., "docs: add README files", "feat: add new components")'
)

SHORT_LENGTH_RULE = "Keep the description under 50 characters for the first line"
NOTES_LENGTH_RULE = (
    "Keep the first line under 72 characters; clarity matters more than brevity "
    "when explaining the developer context"
)
NOTES_RULE = (
    "Use the developer context above to explain WHY the change was made. "
    "Prefer including that context over a terse description"
)


def _rules(payload: DiffPayload, has_notes: bool) -> List[str]:
    basis = "file names and change types" if payload.is_summary else "the actual code changes"
    rules = [
        "Use conventional commit format: type(scope): description",
        f"Types: {', '.join(COMMIT_TYPES)}",
        NOTES_LENGTH_RULE if has_notes else SHORT_LENGTH_RULE,
        f"Be specific about what changed based on {basis}",
        'Use present tense ("add" not "added")',
        "Write a single line only",
        "Don't wrap the message in quotes",
        "Don't include \"git commit -m\"",
        "Return ONLY the commit message, nothing else",
        SUMMARY_FOCUS if payload.is_summary else DIFF_FOCUS,
    ]
    if has_notes:
        rules.append(NOTES_RULE)
    return rules


def build_prompt(payload: DiffPayload, notes: Sequence[Note] = ()) -> str:
    """Compose the full model prompt.

    The result depends only on the arguments: equal payloads and notes always
    give the same text.
    """
    sections = [
        PROMPT_INTRO,
        SUMMARY_TASK if payload.is_summary else DIFF_TASK,
    ]

    if notes:
        context = "\n".join(f"- {note.message}" for note in notes)
        sections.append(
            "The developer left these notes about the intent of this change:\n"
            f"{NOTES_START}\n{context}\n{NOTES_END}"
        )

    if payload.previous_message:
        sections.append(
            "This commit already has a message. Write a better one:\n"
            f"{PREVIOUS_START}\n{payload.previous_message}\n{PREVIOUS_END}"
        )

    rules = _rules(payload, has_notes=bool(notes))
    sections.append("Rules:\n" + "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, start=1)))

    heading = "File changes and statistics:" if payload.is_summary else "Git diff:"
    sections.append(f"{heading}\n{payload.content}")
    sections.append("Commit message:")

    return "\n\n".join(sections)
