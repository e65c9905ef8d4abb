# AI Adapters
# Generative text providers for article generation

from .anthropic_adapter import AnthropicGenerationClient
from .mock_adapter import MockGenerationClient
from .openai_adapter import OpenAIGenerationClient

__all__ = [
    "OpenAIGenerationClient",
    "AnthropicGenerationClient",
    "MockGenerationClient",
]
