"""
Anthropic Claude adapter for article generation.
"""

import logging
from typing import Optional

import anthropic

from core.exceptions import GenerationError
from core.interfaces.services import (
    SYSTEM_PROMPT,
    TEMPERATURE,
    TOP_P,
    GenerationClient,
    GenerationResult,
    token_budget,
)
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)


class AnthropicGenerationClient(GenerationClient):
    """
    Article generation via the Anthropic Messages API.

    The Messages API has no frequency/presence penalties, so only temperature
    and top_p are sent. SDK retries are disabled: one call per generation.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        self._model = model or settings.anthropic_model
        self._client = client or anthropic.AsyncAnthropic(
            api_key=api_key or settings.anthropic_api_key,
            timeout=float(timeout or settings.generation_timeout),
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, prompt: str, word_count: int) -> GenerationResult:
        try:
            message = await self._client.messages.create(
                model=self._model,
                max_tokens=token_budget(word_count),
                system=SYSTEM_PROMPT,
                temperature=TEMPERATURE,
                top_p=TOP_P,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APITimeoutError as e:
            logger.error("Anthropic request timed out", extra={"provider": "anthropic"})
            raise GenerationError("Anthropic request timed out") from e
        except anthropic.APIStatusError as e:
            logger.error(
                "Anthropic API error: %s - %s",
                e.status_code,
                str(e)[:200],
                extra={"provider": "anthropic"},
            )
            raise GenerationError(f"Anthropic API error: {e.status_code}") from e
        except anthropic.APIError as e:
            logger.error("Anthropic request failed: %s", e, extra={"provider": "anthropic"})
            raise GenerationError(f"Anthropic request failed: {e}") from e

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            logger.error(
                "Anthropic returned an empty message (stop_reason=%s)",
                message.stop_reason,
                extra={"provider": "anthropic"},
            )
            raise GenerationError("Anthropic returned an empty response")

        if message.stop_reason == "max_tokens":
            logger.warning(
                "Generation hit the token budget (%d) and may be truncated",
                token_budget(word_count),
                extra={"provider": "anthropic"},
            )

        return GenerationResult(text=text, model=getattr(message, "model", None) or self._model)
