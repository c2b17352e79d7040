"""Model backends for commit message generation."""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic_ai import Agent
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

DEFAULT_MODEL = "gemini-2.5-flash-lite"

_MODEL_PREFIXES = ("google-gla:", "google:")


def normalize_model_name(model: str) -> str:
    """Strip a pydantic-ai style provider prefix from a Gemini model name."""
    for prefix in _MODEL_PREFIXES:
        if model.startswith(prefix):
            return model[len(prefix):]
    return model


class CommitMessageStrategy(ABC):
    """Abstract base class for commit message generation strategies."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the raw model text for the given prompt."""
        pass


class GeminiCommitStrategy(CommitMessageStrategy):
    """Strategy that asks a Google Gemini model for the commit message."""

    def __init__(self, model: str = DEFAULT_MODEL, api_key: Optional[str] = None):
        self.model_name = normalize_model_name(model)
        provider = GoogleProvider(api_key=api_key) if api_key else GoogleProvider()
        self.agent = Agent(
            model=GoogleModel(self.model_name, provider=provider),
            output_type=str,
        )

    async def generate(self, prompt: str) -> str:
        result = await self.agent.run(prompt)
        return result.output
