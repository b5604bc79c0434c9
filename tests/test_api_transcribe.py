"""
Tests for the /api/transcribe endpoint.
The provider is faked, so no network calls are made.
"""

from conftest import FakeAIProvider
from core.errors import ProviderError, ProviderResponseError
from core.messages import ErrorMessages
from models.schemas import Transcription


TRANSCRIBE_URL = "/api/transcribe"
AUDIO_BYTES = b"RIFF\x24\x00\x00\x00WAVEfmt "
LONG_TEXT = (
    "How was your week? It was fine, mostly busy with work. "
    "Did you get some rest at all?"
)


def _audio(content: bytes = AUDIO_BYTES, content_type: str = "audio/wav"):
    return {"audio": ("session.wav", content, content_type)}


class TestTranscribeSuccess:
    def test_short_transcript_gets_single_speaker(self, client, fake_provider):
        response = client.post(TRANSCRIBE_URL, files=_audio())

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert data["transcript"] == "Speaker A: Hello there"
        assert data["confidence"] == 0.9
        assert data["audio_duration"] == 1.2
        assert data["language"] == "english"
        assert data["transcription_service"] == "OpenAI Whisper"
        assert data["speaker_identification"] == "AI-powered"
        assert data["segments_count"] == 1
        # No speaker-labeling call for short transcripts
        assert fake_provider.chat_calls == []

    def test_upload_is_streamed_to_provider(self, client, fake_provider):
        client.post(TRANSCRIBE_URL, files=_audio(content_type="audio/mpeg"))

        call = fake_provider.transcribe_calls[0]
        assert call["exists"] is True
        assert call["content"] == AUDIO_BYTES
        assert call["filename"] == "session.wav"
        assert call["content_type"] == "audio/mpeg"

    def test_long_transcript_uses_labeled_output_verbatim(self, make_client):
        labeled = "Speaker A: How was your week?\nSpeaker B: It was fine."
        provider = FakeAIProvider(
            chat_text=labeled,
            transcription=Transcription(text=LONG_TEXT, segments=[{}, {}, {}], duration=7.5),
        )
        client = make_client(provider)

        response = client.post(TRANSCRIBE_URL, files=_audio(), data={"language": "en"})

        assert response.status_code == 200
        data = response.json()
        assert data["transcript"] == labeled
        assert data["segments_count"] == 3
        assert data["language"] == "en"
        assert len(provider.chat_calls) == 1
        assert LONG_TEXT in provider.chat_calls[0][0]

    def test_speaker_labeling_failure_degrades_to_single_speaker(self, make_client):
        provider = FakeAIProvider(
            chat_error=ProviderError("overloaded", status_code=503),
            transcription=Transcription(text=LONG_TEXT),
        )
        client = make_client(provider)

        response = client.post(TRANSCRIBE_URL, files=_audio())

        assert response.status_code == 200
        assert response.json()["transcript"] == f"Speaker A: {LONG_TEXT}"

    def test_language_hint_mapping(self, client, fake_provider):
        client.post(TRANSCRIBE_URL, files=_audio(), data={"language": "he"})
        client.post(TRANSCRIBE_URL, files=_audio(), data={"language": "auto"})
        client.post(TRANSCRIBE_URL, files=_audio(), data={"language": "fr"})
        client.post(TRANSCRIBE_URL, files=_audio())

        languages = [call["language"] for call in fake_provider.transcribe_calls]
        assert languages == ["he", None, "en", None]

    def test_temp_file_removed_after_request(self, client, upload_dir):
        client.post(TRANSCRIBE_URL, files=_audio())

        assert list(upload_dir.iterdir()) == []


class TestTranscribeClientErrors:
    def test_no_file(self, client, fake_provider):
        response = client.post(TRANSCRIBE_URL, data={"language": "en"})

        assert response.status_code == 400
        assert response.json()["error"] == "no_audio_file"
        assert fake_provider.transcribe_calls == []

    def test_non_audio_mime_type(self, client, fake_provider, upload_dir):
        response = client.post(
            TRANSCRIBE_URL, files={"audio": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_file_type"
        assert response.json()["message"] == ErrorMessages.AUDIO_INVALID_TYPE
        assert fake_provider.transcribe_calls == []
        assert list(upload_dir.iterdir()) == []

    def test_file_too_large(self, make_client, fake_provider, upload_dir):
        client = make_client(fake_provider, max_upload_size_mb=1)

        response = client.post(
            TRANSCRIBE_URL, files=_audio(content=b"0" * (1024 * 1024 + 1))
        )

        assert response.status_code == 413
        assert response.json()["error"] == "file_too_large"
        assert fake_provider.transcribe_calls == []
        assert list(upload_dir.iterdir()) == []

    def test_wrong_method(self, client):
        response = client.get(TRANSCRIBE_URL)

        assert response.status_code == 405
        assert response.json()["error"] == "method_not_allowed"


class TestTranscribeServerErrors:
    def test_provider_failure(self, make_client, upload_dir):
        provider = FakeAIProvider(
            transcribe_error=ProviderError("Invalid file format.", status_code=400)
        )
        client = make_client(provider)

        response = client.post(TRANSCRIBE_URL, files=_audio())

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == ErrorMessages.TRANSCRIPTION_UNAVAILABLE
        assert data["message"] == "Whisper API failed: 400 - Invalid file format."
        assert data["service"] == "OpenAI Whisper"
        assert list(upload_dir.iterdir()) == []

    def test_malformed_provider_payload(self, make_client):
        provider = FakeAIProvider(
            transcribe_error=ProviderResponseError(ErrorMessages.PROVIDER_NO_TEXT)
        )
        client = make_client(provider)

        response = client.post(TRANSCRIBE_URL, files=_audio())

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == ErrorMessages.TRANSCRIPTION_FAILED
        assert data["message"] == ErrorMessages.PROVIDER_NO_TEXT
        assert data["service"] == "OpenAI Whisper"

    def test_missing_credential(self, make_client):
        client = make_client(FakeAIProvider(configured=False))

        response = client.post(TRANSCRIBE_URL, files=_audio())

        assert response.status_code == 500
        assert response.json()["error"] == "configuration_error"


class TestTranscribeCors:
    def test_options_returns_empty_200(self, client):
        response = client.options(TRANSCRIBE_URL)

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
