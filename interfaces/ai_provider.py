"""
AI Provider Interface - Abstract interface for chat completion and speech-to-text.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from models.schemas import ChatCompletion, ChatOptions, Transcription


class IAIProvider(ABC):
    """
    Abstract interface for the external AI provider.

    Implementations:
    - infrastructure.openai.client.OpenAIProvider
    """

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when a provider credential is available."""
        pass

    @property
    @abstractmethod
    def api_key_length(self) -> int:
        """Length of the configured credential (0 when missing); safe to log."""
        pass

    @abstractmethod
    async def complete_chat(self, prompt: str, options: ChatOptions) -> ChatCompletion:
        """
        Send a single-turn chat request.

        Args:
            prompt: User message content
            options: Model, token budget, temperature and optional system prompt

        Returns:
            ChatCompletion with the (untrimmed) response text

        Raises:
            ConfigurationError: If the credential is missing (no request is sent)
            ProviderError: If the provider is unreachable or returns non-2xx
            ProviderResponseError: If the payload carries no text content
        """
        pass

    @abstractmethod
    async def transcribe_audio(
        self,
        audio_path: Path,
        filename: str,
        content_type: str,
        language: Optional[str] = None,
    ) -> Transcription:
        """
        Transcribe an audio file with segment-level detail.

        Args:
            audio_path: Local file to upload
            filename: Original filename sent to the provider
            content_type: MIME type of the upload
            language: Language code, or None to let the provider detect it

        Returns:
            Transcription with text, segments, duration and detected language

        Raises:
            ConfigurationError: If the credential is missing (no request is sent)
            ProviderError: If the provider is unreachable or returns non-2xx
        """
        pass
