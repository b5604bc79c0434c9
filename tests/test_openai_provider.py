"""
Tests for OpenAIProvider.

Requests are intercepted with httpx.MockTransport; nothing leaves the process.
"""

import json

import httpx
import pytest

from core.errors import ConfigurationError, ProviderError, ProviderResponseError
from core.messages import ErrorMessages
from infrastructure.openai.client import OpenAIProvider, extract_error_message
from models.schemas import ChatOptions


API_KEY = "sk-test-1234567890"
BASE_URL = "https://api.openai.test/v1"

CHAT_OK = {
    "model": "gpt-4-0613",
    "choices": [{"message": {"role": "assistant", "content": "Hello!"}}],
    "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
}

WHISPER_OK = {
    "text": "Shalom, ma nishma?",
    "language": "hebrew",
    "duration": 3.4,
    "segments": [{"id": 0}, {"id": 1}],
}


def _provider(handler, api_key=API_KEY):
    requests = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    provider = OpenAIProvider(
        api_key=api_key,
        base_url=BASE_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)),
    )
    return provider, requests


def _options(**kwargs):
    defaults = {"model": "gpt-4", "max_tokens": 100}
    defaults.update(kwargs)
    return ChatOptions(**defaults)


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "clip.wav"
    path.write_bytes(b"RIFF0000WAVEfmt ")
    return path


class TestExtractErrorMessage:
    def test_openai_error_object(self):
        body = json.dumps({"error": {"message": "Invalid API key", "type": "auth"}})
        assert extract_error_message(body) == "Invalid API key"

    def test_error_string(self):
        assert extract_error_message(json.dumps({"error": "bad"})) == "bad"

    def test_plain_text(self):
        assert extract_error_message("Bad Gateway") == "Bad Gateway"

    def test_empty_body(self):
        assert extract_error_message("") == ErrorMessages.PROVIDER_REQUEST_FAILED

    def test_json_without_message(self):
        body = json.dumps({"detail": "nope"})
        assert extract_error_message(body) == body


class TestCredential:
    def test_api_key_length_is_part_of_interface(self):
        from interfaces.ai_provider import IAIProvider

        assert "api_key_length" in IAIProvider.__abstractmethods__

    def test_api_key_length(self):
        assert OpenAIProvider(api_key="  sk-abc  ").api_key_length == 6
        assert OpenAIProvider(api_key="").api_key_length == 0


class TestCompleteChat:
    @pytest.mark.asyncio
    async def test_request_shape(self):
        provider, requests = _provider(lambda request: httpx.Response(200, json=CHAT_OK))

        completion = await provider.complete_chat(
            "Hi", _options(temperature=0.3, system_prompt="Be brief")
        )

        assert completion.text == "Hello!"
        assert completion.usage["total_tokens"] == 5
        assert completion.model == "gpt-4-0613"

        request = requests[0]
        assert str(request.url) == f"{BASE_URL}/chat/completions"
        assert request.headers["Authorization"] == f"Bearer {API_KEY}"
        body = json.loads(request.content)
        assert body == {
            "model": "gpt-4",
            "messages": [
                {"role": "system", "content": "Be brief"},
                {"role": "user", "content": "Hi"},
            ],
            "max_tokens": 100,
            "temperature": 0.3,
        }

    @pytest.mark.asyncio
    async def test_no_system_prompt(self):
        provider, requests = _provider(lambda request: httpx.Response(200, json=CHAT_OK))

        await provider.complete_chat("Hi", _options())

        body = json.loads(requests[0].content)
        assert body["messages"] == [{"role": "user", "content": "Hi"}]

    @pytest.mark.asyncio
    async def test_missing_key_makes_no_request(self):
        provider, requests = _provider(
            lambda request: httpx.Response(200, json=CHAT_OK), api_key="  "
        )

        assert provider.is_configured is False
        with pytest.raises(ConfigurationError):
            await provider.complete_chat("Hi", _options())
        assert requests == []

    @pytest.mark.asyncio
    async def test_json_error_body(self):
        provider, _ = _provider(
            lambda request: httpx.Response(
                401, json={"error": {"message": "Incorrect API key provided"}}
            )
        )

        with pytest.raises(ProviderError) as exc_info:
            await provider.complete_chat("Hi", _options())

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Incorrect API key provided"
        assert str(exc_info.value) == "401 - Incorrect API key provided"

    @pytest.mark.asyncio
    async def test_plain_text_error_body(self):
        provider, _ = _provider(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(ProviderError) as exc_info:
            await provider.complete_chat("Hi", _options())

        assert exc_info.value.status_code == 502
        assert exc_info.value.detail == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_empty_error_body(self):
        provider, _ = _provider(lambda request: httpx.Response(503))

        with pytest.raises(ProviderError) as exc_info:
            await provider.complete_chat("Hi", _options())

        assert exc_info.value.detail == ErrorMessages.PROVIDER_REQUEST_FAILED

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"choices": []},
            {"choices": [{"message": {}}]},
            {"choices": [{"message": {"content": ""}}]},
            {"choices": [{"message": {"content": 42}}]},
            {},
        ],
    )
    async def test_malformed_success_payload(self, payload):
        provider, _ = _provider(lambda request: httpx.Response(200, json=payload))

        with pytest.raises(ProviderResponseError) as exc_info:
            await provider.complete_chat("Hi", _options())

        assert exc_info.value.detail == ErrorMessages.PROVIDER_NO_CONTENT

    @pytest.mark.asyncio
    async def test_non_json_success_body(self):
        provider, _ = _provider(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ProviderResponseError) as exc_info:
            await provider.complete_chat("Hi", _options())

        assert exc_info.value.detail == ErrorMessages.PROVIDER_INVALID_JSON

    @pytest.mark.asyncio
    async def test_network_failure_has_no_status(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider, _ = _provider(handler)

        with pytest.raises(ProviderError) as exc_info:
            await provider.complete_chat("Hi", _options())

        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.detail


class TestTranscribeAudio:
    @pytest.mark.asyncio
    async def test_multipart_request(self, audio_file):
        provider, requests = _provider(lambda request: httpx.Response(200, json=WHISPER_OK))

        result = await provider.transcribe_audio(
            audio_file, filename="talk.m4a", content_type="audio/mp4", language="he"
        )

        assert result.text == "Shalom, ma nishma?"
        assert result.language == "hebrew"
        assert result.duration == 3.4
        assert len(result.segments) == 2

        request = requests[0]
        assert str(request.url) == f"{BASE_URL}/audio/transcriptions"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="model"' in body and b"whisper-1" in body
        assert b'name="response_format"' in body and b"verbose_json" in body
        assert b'name="language"' in body
        assert b'filename="talk.m4a"' in body
        assert b"Content-Type: audio/mp4" in body
        assert b"RIFF0000WAVEfmt " in body

    @pytest.mark.asyncio
    async def test_language_omitted_for_auto(self, audio_file):
        provider, requests = _provider(lambda request: httpx.Response(200, json=WHISPER_OK))

        await provider.transcribe_audio(audio_file, "clip.wav", "audio/wav", language=None)

        assert b'name="language"' not in requests[0].content

    @pytest.mark.asyncio
    async def test_missing_optional_fields(self, audio_file):
        provider, _ = _provider(lambda request: httpx.Response(200, json={"text": "Hi"}))

        result = await provider.transcribe_audio(audio_file, "clip.wav", "audio/wav")

        assert result.text == "Hi"
        assert result.segments == []
        assert result.duration == 0.0
        assert result.language is None

    @pytest.mark.asyncio
    async def test_missing_text(self, audio_file):
        provider, _ = _provider(lambda request: httpx.Response(200, json={"segments": []}))

        with pytest.raises(ProviderResponseError):
            await provider.transcribe_audio(audio_file, "clip.wav", "audio/wav")

    @pytest.mark.asyncio
    async def test_error_status(self, audio_file):
        provider, _ = _provider(
            lambda request: httpx.Response(
                400, json={"error": {"message": "Invalid file format."}}
            )
        )

        with pytest.raises(ProviderError) as exc_info:
            await provider.transcribe_audio(audio_file, "clip.wav", "audio/wav")

        assert exc_info.value.status_code == 400
        assert exc_info.value.service == "OpenAI Whisper"
