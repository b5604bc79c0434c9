"""
Analysis Service - Validates a prompt and relays it as a single-turn chat request.
"""

from typing import Any, Dict, Optional

from core.config import get_settings
from core.constants import (
    ANALYSIS_TEMPERATURE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TOKEN_CEILING,
    MODEL_TOKEN_CEILINGS,
)
from core.errors import ClientRequestError
from core.logger import logger
from core.messages import ErrorMessages, LogMessages
from core.prompts import ANALYST_SYSTEM_PROMPT
from interfaces.ai_provider import IAIProvider
from models.schemas import ChatOptions


def token_ceiling(model: str) -> int:
    """Output token ceiling for a model tier (unknown models get the default)."""
    return MODEL_TOKEN_CEILINGS.get(model, DEFAULT_TOKEN_CEILING)


def clamp_max_tokens(requested: Any, model: str) -> int:
    """
    Clamp a client-supplied token budget to the model's ceiling.

    Integral floats (1500.0) count as integers. Other non-integers and values
    below 1 fall back to DEFAULT_MAX_TOKENS.
    """
    if isinstance(requested, float) and requested.is_integer():
        requested = int(requested)
    if isinstance(requested, bool) or not isinstance(requested, int) or requested < 1:
        requested = DEFAULT_MAX_TOKENS
    return min(requested, token_ceiling(model))


class AnalysisService:
    """
    Stateless text-analysis relay.

    Uses dependency injection through interfaces:
    - IAIProvider: For chat completion
    """

    def __init__(
        self,
        provider: IAIProvider,
        default_model: Optional[str] = None,
        max_prompt_chars: Optional[int] = None,
    ):
        settings = get_settings()
        self.provider = provider
        self.default_model = default_model or settings.analysis_model
        self.max_prompt_chars = max_prompt_chars or settings.max_prompt_chars

    def validate_prompt(self, prompt: Any) -> str:
        """
        Raises:
            ClientRequestError: If the prompt is missing, empty, not a string or too long
        """
        if not prompt or not isinstance(prompt, str):
            raise ClientRequestError("invalid_prompt", ErrorMessages.PROMPT_MISSING)
        if len(prompt) > self.max_prompt_chars:
            raise ClientRequestError(
                "prompt_too_long",
                ErrorMessages.PROMPT_TOO_LONG.format(max=self.max_prompt_chars),
            )
        return prompt

    async def analyze(
        self,
        prompt: Any,
        max_tokens: Any = None,
        model: Optional[str] = None,
        language: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Relay a prompt to the chat-completion endpoint.

        Args:
            prompt: Free-text prompt (validated here, not by the caller)
            max_tokens: Requested output budget, clamped to the model ceiling
            model: Model identifier (defaults to settings.analysis_model)
            language: Accepted for logging; does not change the request

        Returns:
            {"response": trimmed text, "usage": provider usage, "model": model}

        Raises:
            ClientRequestError: Invalid or too-long prompt (no outbound call)
            ConfigurationError: Missing credential (no outbound call)
            ProviderError: Provider failure or malformed payload
        """
        prompt = self.validate_prompt(prompt)
        model = model or self.default_model
        budget = clamp_max_tokens(max_tokens, model)

        logger.info(
            LogMessages.ANALYSIS_RECEIVED.format(
                chars=len(prompt), model=model, language=language or "-"
            )
        )
        logger.debug(
            LogMessages.ANALYSIS_TOKENS.format(
                requested=max_tokens, ceiling=token_ceiling(model), used=budget
            )
        )

        completion = await self.provider.complete_chat(
            prompt,
            ChatOptions(
                model=model,
                max_tokens=budget,
                temperature=ANALYSIS_TEMPERATURE,
                system_prompt=ANALYST_SYSTEM_PROMPT,
            ),
        )

        text = completion.text.strip()
        logger.info(LogMessages.ANALYSIS_COMPLETE.format(chars=len(text)))

        return {"response": text, "usage": completion.usage, "model": model}
