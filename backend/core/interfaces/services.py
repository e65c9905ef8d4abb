"""Service interfaces for external integrations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

# Fixed decoding parameters for article generation
TEMPERATURE = 0.7
TOP_P = 0.9
FREQUENCY_PENALTY = 0.1
PRESENCE_PENALTY = 0.1
MAX_TOKENS_CAP = 4000

SYSTEM_PROMPT = (
    "You are an expert content writer who creates engaging, well-researched articles. "
    "Write in a natural, human-like style that matches the user's preferences."
)


def token_budget(word_count: int) -> int:
    """Completion token budget for a target word count."""
    return min(word_count * 2, MAX_TOKENS_CAP)


@dataclass
class GenerationResult:
    """Raw provider output."""

    text: str
    model: str


class GenerationClient(ABC):
    """A single call to a generative text provider."""

    @property
    @abstractmethod
    def model(self) -> str:
        ...

    @abstractmethod
    async def generate(self, prompt: str, word_count: int) -> GenerationResult:
        """
        Generate raw text for ``prompt``.

        Makes exactly one provider call.

        Raises:
            GenerationError: On provider error, timeout or empty output
        """
        ...
