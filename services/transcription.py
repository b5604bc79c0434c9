"""
Transcription Service - Business logic for audio upload transcription.

This service orchestrates the two-stage pipeline using dependency injection
through interfaces:
1. Save the upload to a temp file (size-limited)
2. Speech-to-text call (segment-level output)
3. Speaker-labeling pass for substantial transcripts
4. Best-effort temp file cleanup
"""

import os
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from core.config import get_settings
from core.constants import (
    AUDIO_MIME_PREFIX,
    DEFAULT_AUDIO_CONTENT_TYPE,
    DEFAULT_AUDIO_FILENAME,
    DEFAULT_CONFIDENCE,
    DETECTED_LANGUAGE_ALIASES,
    SPEAKER_IDENTIFICATION_MODE,
    SPEAKER_LABEL_MIN_CHARS,
    TRANSCRIPTION_SERVICE_NAME,
    TRANSCRIPTION_STATUS_COMPLETED,
    UPLOAD_CHUNK_SIZE,
    Language,
    normalize_language,
)
from core.errors import ClientRequestError
from core.logger import logger
from core.messages import ErrorMessages, LogMessages
from interfaces.ai_provider import IAIProvider
from services.speaker_labeling import SpeakerLabeler, single_speaker


class TranscriptionService:
    """
    Stateless service that transcribes an uploaded audio file.

    Uses dependency injection through interfaces:
    - IAIProvider: For speech-to-text
    - SpeakerLabeler: For the speaker-labeling pass (same provider)

    The upload is any UploadFile-like object exposing ``filename``,
    ``content_type`` and ``async read(size)``.
    """

    def __init__(
        self,
        provider: IAIProvider,
        speaker_labeler: Optional[SpeakerLabeler] = None,
        temp_dir: Optional[Path] = None,
        max_upload_size_mb: Optional[int] = None,
    ):
        settings = get_settings()
        self.provider = provider
        self.speaker_labeler = speaker_labeler or SpeakerLabeler(provider)
        self.max_upload_size_mb = max_upload_size_mb or settings.max_upload_size_mb

        self.temp_dir = Path(temp_dir or settings.temp_dir)
        self.temp_dir.mkdir(parents=True, exist_ok=True)

        logger.info(
            f"TranscriptionService initialized "
            f"(provider={self.provider.__class__.__name__}, temp_dir={self.temp_dir})"
        )

    def validate_upload(self, upload: Any) -> None:
        """
        Raises:
            ClientRequestError: If no file was uploaded or it is not audio/*
        """
        if upload is None:
            raise ClientRequestError("no_audio_file", ErrorMessages.AUDIO_MISSING)

        content_type = getattr(upload, "content_type", None) or ""
        if not content_type.startswith(AUDIO_MIME_PREFIX):
            raise ClientRequestError(
                "invalid_file_type", ErrorMessages.AUDIO_INVALID_TYPE
            )

    async def save_upload(self, upload: Any, destination: Path) -> int:
        """
        Stream the upload to destination, enforcing the size ceiling.

        Returns:
            File size in bytes

        Raises:
            ClientRequestError: If the upload exceeds max_upload_size_mb (413)
        """
        max_bytes = self.max_upload_size_mb * 1024 * 1024
        size_bytes = 0

        with open(destination, "wb") as f:
            while True:
                chunk = await upload.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                size_bytes += len(chunk)
                if size_bytes > max_bytes:
                    raise ClientRequestError(
                        "file_too_large",
                        ErrorMessages.AUDIO_TOO_LARGE.format(max=self.max_upload_size_mb),
                        status_code=413,
                    )
                f.write(chunk)

        logger.info(
            LogMessages.TRANSCRIBE_SAVED.format(
                size=size_bytes / (1024 * 1024), path=destination
            )
        )
        return size_bytes

    def _cleanup(self, path: Path) -> None:
        if not path.exists():
            return
        try:
            os.remove(path)
        except OSError as e:
            logger.warning(LogMessages.CLEANUP_FAILED.format(path=path, error=e))

    async def transcribe_upload(
        self, upload: Any, language: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Transcribe an uploaded audio file and label its speakers.

        Args:
            upload: UploadFile-like object (None means no file was sent)
            language: Language hint ("auto", "he", "en"; others map to "en")

        Returns:
            Response payload for the transcribe endpoint

        Raises:
            ClientRequestError: Missing file, non-audio MIME type, file too large
            ConfigurationError: Missing credential
            ProviderError: Speech-to-text failure
        """
        self.validate_upload(upload)

        hint = normalize_language(language)
        filename = upload.filename or DEFAULT_AUDIO_FILENAME
        content_type = upload.content_type or DEFAULT_AUDIO_CONTENT_TYPE
        temp_file_path = self.temp_dir / f"{uuid.uuid4()}{Path(filename).suffix or '.tmp'}"

        logger.info(
            LogMessages.TRANSCRIBE_RECEIVED.format(
                filename=filename, content_type=content_type, language=hint.value
            )
        )

        try:
            await self.save_upload(upload, temp_file_path)

            result = await self.provider.transcribe_audio(
                temp_file_path,
                filename=filename,
                content_type=content_type,
                language=None if hint == Language.AUTO else hint.value,
            )
            logger.info(
                LogMessages.TRANSCRIBE_COMPLETE.format(
                    chars=len(result.text), segments=len(result.segments)
                )
            )

            if len(result.text) > SPEAKER_LABEL_MIN_CHARS:
                label_language = hint
                if hint == Language.AUTO:
                    detected = (result.language or "").strip().lower()
                    label_language = DETECTED_LANGUAGE_ALIASES.get(
                        detected, Language.ENGLISH
                    )
                transcript = await self.speaker_labeler.label(result.text, label_language)
            else:
                logger.info(
                    LogMessages.TRANSCRIBE_SHORT.format(
                        chars=len(result.text), min=SPEAKER_LABEL_MIN_CHARS
                    )
                )
                transcript = single_speaker(result.text)

            return {
                "status": TRANSCRIPTION_STATUS_COMPLETED,
                "transcript": transcript,
                "confidence": DEFAULT_CONFIDENCE,
                "audio_duration": result.duration or 0,
                "language": result.language or hint.value,
                "transcription_service": TRANSCRIPTION_SERVICE_NAME,
                "speaker_identification": SPEAKER_IDENTIFICATION_MODE,
                "segments_count": len(result.segments),
            }

        finally:
            self._cleanup(temp_file_path)
