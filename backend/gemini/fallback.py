"""
Shared Gemini fallback caller.

FallbackCaller.call() tries each model in the chain in order, one request per
model. Quota/permission errors, other API errors, transport failures and empty
responses are logged and the next model is tried. The first non-empty text is
returned. AllModelsUnavailableError is raised only once every model has failed.
"""

import logging
from typing import Optional, Sequence

from google import genai
from google.genai import errors, types

from gemini.client import extract_text
from gemini.config import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TEMPERATURE,
    QUOTA_STATUS_CODES,
)

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "All Gemini models are currently unavailable. Please try again later."


class AllModelsUnavailableError(RuntimeError):
    """Every model in the chain was tried and none produced text."""

    def __init__(self, message: str = UNAVAILABLE_MESSAGE):
        super().__init__(message)


class FallbackCaller:
    def __init__(self, client: Optional[genai.Client], models: Sequence[str]):
        self.client = client
        self.models = tuple(models)

    async def call(
        self,
        prompt: str,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
    ) -> str:
        """
        Generate text for a single-turn prompt.

        Args:
            prompt: full prompt text, sent as one user turn
            temperature: sampling temperature
            max_output_tokens: output token ceiling

        Returns:
            The trimmed text of the first model that answered.

        Raises:
            AllModelsUnavailableError: every model failed or returned nothing.
        """
        if self.client is None:
            logger.error("No Gemini client configured — cannot try %s", self.models)
            raise AllModelsUnavailableError()

        contents = [{"role": "user", "parts": [{"text": prompt}]}]
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )

        for model in self.models:
            try:
                response = await self.client.aio.models.generate_content(
                    model=model,
                    contents=contents,
                    config=config,
                )
            except errors.APIError as e:
                if e.code in QUOTA_STATUS_CODES:
                    logger.warning(
                        "Model %r quota/permission error (%s: %s) — trying next in chain",
                        model, e.code, e.message,
                    )
                else:
                    logger.warning(
                        "Model %r returned %s — trying next in chain", model, e.code
                    )
                continue
            except Exception:
                logger.exception("Model %r request failed — trying next in chain", model)
                continue

            text = extract_text(response)
            if text:
                logger.info("Generated with model %r", model)
                return text

            logger.warning("Model %r returned no text — trying next in chain", model)

        logger.error("All models in fallback chain exhausted: %s", self.models)
        raise AllModelsUnavailableError()
