"""
Offline generation client for development without a provider key.
"""

import re

from core.interfaces.services import GenerationClient, GenerationResult

_TOPIC = re.compile(r'about "(.+?)" in the (\S+) niche')


class MockGenerationClient(GenerationClient):
    """Returns a deterministic article in the TITLE:/CONTENT: format."""

    @property
    def model(self) -> str:
        return "mock"

    async def generate(self, prompt: str, word_count: int) -> GenerationResult:
        match = _TOPIC.search(prompt)
        topic, niche = match.groups() if match else ("your topic", "general")
        text = (
            f"TITLE: A Practical Guide to {topic}\n\n"
            "CONTENT:\n"
            f"## Why {topic} matters\n\n"
            f"This is a development article about {topic} for the {niche} niche. "
            "Configure a generation provider API key to produce real content.\n\n"
            "## Key takeaways\n\n"
            "- Start small\n"
            "- Measure what works\n"
            "- Iterate\n"
        )
        return GenerationResult(text=text, model=self.model)
