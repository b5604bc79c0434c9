"""
Shared fixtures.

FakeAIProvider implements IAIProvider so services and routes can be tested
without network calls. It mirrors OpenAIProvider's contract: a missing
credential raises ConfigurationError before anything is "sent".
"""

import io
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Get project root (parent of tests directory)
PROJECT_ROOT = Path(__file__).parent.parent

# Add project root to sys.path for imports
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.errors import ConfigurationError  # noqa: E402
from interfaces.ai_provider import IAIProvider  # noqa: E402
from models.schemas import ChatCompletion, ChatOptions, Transcription  # noqa: E402


class FakeAIProvider(IAIProvider):
    """In-memory provider that records every call."""

    def __init__(
        self,
        chat_text: str = "Analysis result",
        chat_error: Optional[Exception] = None,
        transcription: Optional[Transcription] = None,
        transcribe_error: Optional[Exception] = None,
        configured: bool = True,
    ):
        self.chat_text = chat_text
        self.chat_error = chat_error
        self.transcription = transcription or Transcription(
            text="Hello there",
            segments=[{"id": 0, "start": 0.0, "end": 1.2}],
            duration=1.2,
            language="english",
        )
        self.transcribe_error = transcribe_error
        self.configured = configured
        self.chat_calls: List[tuple] = []
        self.transcribe_calls: List[dict] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    @property
    def api_key_length(self) -> int:
        return 51 if self.configured else 0

    async def complete_chat(self, prompt: str, options: ChatOptions) -> ChatCompletion:
        if not self.configured:
            raise ConfigurationError("OpenAI API key not configured")
        self.chat_calls.append((prompt, options))
        if self.chat_error is not None:
            raise self.chat_error
        return ChatCompletion(
            text=self.chat_text,
            usage={"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
            model=options.model,
        )

    async def transcribe_audio(
        self,
        audio_path: Path,
        filename: str,
        content_type: str,
        language: Optional[str] = None,
    ) -> Transcription:
        if not self.configured:
            raise ConfigurationError("OpenAI API key not configured")
        self.transcribe_calls.append(
            {
                "audio_path": audio_path,
                "exists": audio_path.exists(),
                "content": audio_path.read_bytes(),
                "filename": filename,
                "content_type": content_type,
                "language": language,
            }
        )
        if self.transcribe_error is not None:
            raise self.transcribe_error
        return self.transcription


class FakeUpload:
    """Minimal UploadFile stand-in: filename, content_type and async read()."""

    def __init__(
        self,
        content: bytes = b"RIFF0000WAVEfmt ",
        filename: Optional[str] = "session.wav",
        content_type: Optional[str] = "audio/wav",
    ):
        self.filename = filename
        self.content_type = content_type
        self._buffer = io.BytesIO(content)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


@pytest.fixture
def fake_provider():
    return FakeAIProvider()


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def make_client(upload_dir):
    """
    Build a TestClient over the full app with services wired to a provider.

    Usage: client = make_client(provider, max_upload_size_mb=1)
    """
    from fastapi.testclient import TestClient

    from core.dependencies import (
        get_analysis_service_dependency,
        get_diagnostic_service_dependency,
        get_transcription_service_dependency,
    )
    from internal.api.app import create_app
    from services.analysis import AnalysisService
    from services.diagnostics import DiagnosticService
    from services.transcription import TranscriptionService

    def _make(provider: IAIProvider, max_upload_size_mb: Optional[int] = None):
        app = create_app()
        app.dependency_overrides[get_analysis_service_dependency] = (
            lambda: AnalysisService(provider, default_model="gpt-4")
        )
        app.dependency_overrides[get_transcription_service_dependency] = (
            lambda: TranscriptionService(
                provider,
                temp_dir=upload_dir,
                max_upload_size_mb=max_upload_size_mb,
            )
        )
        app.dependency_overrides[get_diagnostic_service_dependency] = (
            lambda: DiagnosticService(provider, model="gpt-4")
        )
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client, fake_provider):
    return make_client(fake_provider)
