"""
OpenAI Provider - Chat completion and speech-to-text over the OpenAI REST API.

Implements IAIProvider interface for dependency injection.
Every call is attempted exactly once; there is no retry layer.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import httpx  # type: ignore

from core.config import get_settings
from core.constants import (
    ANALYSIS_SERVICE_NAME,
    HTTP_CONNECT_TIMEOUT,
    HTTP_KEEPALIVE_EXPIRY,
    HTTP_MAX_CONNECTIONS,
    HTTP_MAX_KEEPALIVE_CONNECTIONS,
    TRANSCRIPTION_RESPONSE_FORMAT,
    TRANSCRIPTION_SERVICE_NAME,
)
from core.errors import ConfigurationError, ProviderError, ProviderResponseError
from core.logger import logger
from core.messages import ErrorMessages, LogMessages
from interfaces.ai_provider import IAIProvider
from models.schemas import ChatCompletion, ChatOptions, Transcription


CHAT_COMPLETIONS_PATH = "/chat/completions"
AUDIO_TRANSCRIPTIONS_PATH = "/audio/transcriptions"

HTTP_LIMITS = httpx.Limits(
    max_keepalive_connections=HTTP_MAX_KEEPALIVE_CONNECTIONS,
    max_connections=HTTP_MAX_CONNECTIONS,
    keepalive_expiry=HTTP_KEEPALIVE_EXPIRY,
)


def extract_error_message(body: str) -> str:
    """
    Pull a human-readable message out of a provider error body.

    The body is tried as JSON first ({"error": {"message": ...}} or a bare
    JSON string); anything else is used verbatim.
    """
    if not body or not body.strip():
        return ErrorMessages.PROVIDER_REQUEST_FAILED

    try:
        data = json.loads(body)
    except ValueError:
        return body

    if isinstance(data, str):
        return data or ErrorMessages.PROVIDER_REQUEST_FAILED
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return body


class OpenAIProvider(IAIProvider):
    """
    httpx-based OpenAI client with connection pooling.

    The credential is injected by the caller; this class never reads the
    environment. A missing credential raises ConfigurationError before any
    request is built.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        transcription_model: str = "whisper-1",
        timeout_seconds: float = 120.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = (api_key or "").strip()
        self._base_url = base_url.rstrip("/")
        self._transcription_model = transcription_model
        self._timeout = httpx.Timeout(timeout_seconds, connect=HTTP_CONNECT_TIMEOUT)
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def api_key_length(self) -> int:
        return len(self._api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create reusable HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(limits=HTTP_LIMITS, timeout=self._timeout)
            logger.info(LogMessages.INIT_HTTP_CLIENT.format(base_url=self._base_url))
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    def _auth_headers(self) -> Dict[str, str]:
        if not self.is_configured:
            raise ConfigurationError(ErrorMessages.API_KEY_MISSING)
        return {"Authorization": f"Bearer {self._api_key}"}

    async def _post(self, path: str, service: str, model: str, **kwargs: Any) -> Dict[str, Any]:
        """
        POST to the provider and return the decoded JSON body.

        Raises:
            ConfigurationError: Missing credential
            ProviderError: Transport failure or non-2xx status
            ProviderResponseError: 2xx body that is not a JSON object
        """
        headers = self._auth_headers()
        client = await self._get_client()

        logger.debug(LogMessages.PROVIDER_REQUEST.format(path=path, model=model))
        try:
            response = await client.post(
                f"{self._base_url}{path}", headers=headers, **kwargs
            )
        except httpx.RequestError as e:
            logger.error(ErrorMessages.PROVIDER_UNREACHABLE.format(error=e))
            raise ProviderError(
                ErrorMessages.PROVIDER_UNREACHABLE.format(error=e), service=service
            ) from e

        logger.info(
            LogMessages.PROVIDER_STATUS.format(status=response.status_code, path=path)
        )

        if not response.is_success:
            detail = extract_error_message(response.text)
            logger.error(
                LogMessages.PROVIDER_ERROR.format(
                    status=response.status_code, detail=detail
                )
            )
            raise ProviderError(
                detail, status_code=response.status_code, service=service
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderResponseError(
                ErrorMessages.PROVIDER_INVALID_JSON, service=service
            ) from e

        if not isinstance(data, dict):
            raise ProviderResponseError(
                ErrorMessages.PROVIDER_INVALID_JSON, service=service
            )
        return data

    async def complete_chat(self, prompt: str, options: ChatOptions) -> ChatCompletion:
        messages = []
        if options.system_prompt:
            messages.append({"role": "system", "content": options.system_prompt})
        messages.append({"role": "user", "content": prompt})

        data = await self._post(
            CHAT_COMPLETIONS_PATH,
            service=ANALYSIS_SERVICE_NAME,
            model=options.model,
            json={
                "model": options.model,
                "messages": messages,
                "max_tokens": options.max_tokens,
                "temperature": options.temperature,
            },
        )

        content = None
        choices = data.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            message = choices[0].get("message")
            if isinstance(message, dict):
                content = message.get("content")

        if not isinstance(content, str) or not content:
            logger.error(f"Invalid OpenAI response structure: {data}")
            raise ProviderResponseError(
                ErrorMessages.PROVIDER_NO_CONTENT, service=ANALYSIS_SERVICE_NAME
            )

        return ChatCompletion(
            text=content,
            usage=data.get("usage"),
            model=data.get("model") or options.model,
        )

    async def transcribe_audio(
        self,
        audio_path: Path,
        filename: str,
        content_type: str,
        language: Optional[str] = None,
    ) -> Transcription:
        form = {
            "model": self._transcription_model,
            "response_format": TRANSCRIPTION_RESPONSE_FORMAT,
        }
        if language:
            form["language"] = language

        with open(audio_path, "rb") as audio_file:
            data = await self._post(
                AUDIO_TRANSCRIPTIONS_PATH,
                service=TRANSCRIPTION_SERVICE_NAME,
                model=self._transcription_model,
                data=form,
                files={"file": (filename, audio_file, content_type)},
            )

        text = data.get("text")
        if not isinstance(text, str):
            raise ProviderResponseError(
                ErrorMessages.PROVIDER_NO_TEXT, service=TRANSCRIPTION_SERVICE_NAME
            )

        segments = data.get("segments")
        return Transcription(
            text=text,
            segments=segments if isinstance(segments, list) else [],
            duration=data.get("duration") or 0.0,
            language=data.get("language"),
        )


# Global singleton instance
_openai_provider: Optional[OpenAIProvider] = None


def get_openai_provider() -> OpenAIProvider:
    """
    Get or create global OpenAIProvider instance (singleton).

    The credential and endpoints come from Settings.

    Returns:
        OpenAIProvider instance
    """
    global _openai_provider

    if _openai_provider is None:
        settings = get_settings()
        logger.info("Creating OpenAIProvider instance...")
        _openai_provider = OpenAIProvider(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            transcription_model=settings.transcription_model,
            timeout_seconds=settings.provider_timeout_seconds,
        )

    return _openai_provider
