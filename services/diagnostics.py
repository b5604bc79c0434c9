"""
Diagnostic Service - Canary chat completion for connectivity and credential checks.
"""

from typing import Any, Dict, Optional

from core.config import get_settings
from core.constants import CANARY_MAX_TOKENS, CANARY_PROMPT, CANARY_TEMPERATURE
from core.errors import ConfigurationError
from core.logger import logger
from core.messages import ErrorMessages, LogMessages
from interfaces.ai_provider import IAIProvider
from models.schemas import ChatOptions


class DiagnosticService:
    """Issues a minimal request to confirm the provider is reachable."""

    def __init__(self, provider: IAIProvider, model: Optional[str] = None):
        self.provider = provider
        self.model = model or get_settings().analysis_model

    async def run_canary(self) -> Dict[str, Any]:
        """
        Returns:
            Success payload for the test endpoint

        Raises:
            ConfigurationError: Missing credential (no outbound call)
            ProviderError: Provider failure, detail kept verbatim
        """
        if not self.provider.is_configured:
            raise ConfigurationError(ErrorMessages.API_KEY_MISSING)

        logger.info(
            LogMessages.CANARY_START.format(
                length=self.provider.api_key_length
            )
        )

        completion = await self.provider.complete_chat(
            CANARY_PROMPT,
            ChatOptions(
                model=self.model,
                max_tokens=CANARY_MAX_TOKENS,
                temperature=CANARY_TEMPERATURE,
            ),
        )
        logger.info(LogMessages.CANARY_COMPLETE)

        return {
            "status": "success",
            "message": "OpenAI API connection working",
            "test_response": completion.text,
            "usage": completion.usage,
            "model": self.model,
        }
