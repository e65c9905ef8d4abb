"""
OpenAI chat-completions adapter for article generation.

Talks to the REST API directly over httpx; one request per call, no retry.
"""

import logging
from typing import Optional

import httpx

from core.exceptions import GenerationError
from core.interfaces.services import (
    FREQUENCY_PENALTY,
    PRESENCE_PENALTY,
    SYSTEM_PROMPT,
    TEMPERATURE,
    TOP_P,
    GenerationClient,
    GenerationResult,
    token_budget,
)
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)


class OpenAIGenerationClient(GenerationClient):
    """Article generation via OpenAI chat completions."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.openai_api_key
        self._model = model or settings.openai_model
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.timeout = timeout or settings.generation_timeout

    @property
    def model(self) -> str:
        return self._model

    def _build_payload(self, prompt: str, word_count: int) -> dict:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": token_budget(word_count),
            "temperature": TEMPERATURE,
            "top_p": TOP_P,
            "frequency_penalty": FREQUENCY_PENALTY,
            "presence_penalty": PRESENCE_PENALTY,
        }

    async def generate(self, prompt: str, word_count: int) -> GenerationResult:
        """
        Generate article text.

        Args:
            prompt: Full user prompt
            word_count: Target length, used for the token budget

        Returns:
            Raw completion text and the model that produced it

        Raises:
            GenerationError: On HTTP error, timeout, bad payload or empty output
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=self._build_payload(prompt, word_count),
                )
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "OpenAI API error: %s - %s",
                e.response.status_code,
                e.response.text[:200],
                extra={"provider": "openai"},
            )
            raise GenerationError(f"OpenAI API error: {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            logger.error("OpenAI request timed out after %ss", self.timeout, extra={"provider": "openai"})
            raise GenerationError("OpenAI request timed out") from e
        except httpx.HTTPError as e:
            logger.error("OpenAI request failed: %s", e, extra={"provider": "openai"})
            raise GenerationError(f"OpenAI request failed: {e}") from e
        except ValueError as e:
            logger.error("OpenAI returned invalid JSON: %s", e, extra={"provider": "openai"})
            raise GenerationError("OpenAI returned an invalid response") from e

        choices = data.get("choices") or []
        text = ""
        if choices:
            text = (choices[0].get("message") or {}).get("content") or ""

        if not text.strip():
            logger.error("OpenAI returned an empty completion", extra={"provider": "openai"})
            raise GenerationError("OpenAI returned an empty response")

        usage = data.get("usage") or {}
        logger.info(
            "Generated %d chars with %s (%s completion tokens)",
            len(text),
            data.get("model", self._model),
            usage.get("completion_tokens", "?"),
            extra={"provider": "openai"},
        )
        return GenerationResult(text=text, model=data.get("model") or self._model)
