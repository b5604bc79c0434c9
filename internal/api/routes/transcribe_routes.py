"""
Transcription Routes - Audio upload transcription with speaker labeling.

Multipart form fields:
- audio: the audio file (audio/* MIME type, max 25MB)
- language: "auto" (default), "he" or "en"
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from fastapi.responses import JSONResponse

from core.constants import TRANSCRIPTION_SERVICE_NAME
from core.dependencies import get_transcription_service_dependency
from core.errors import (
    ClientRequestError,
    ConfigurationError,
    ProviderError,
    ProviderResponseError,
)
from core.logger import format_exception_short, logger
from core.messages import ErrorMessages
from internal.api.cors import API_PREFIX, POST_METHODS, preflight_response
from internal.api.schemas import ErrorResponse, TranscribeResponse
from internal.api.utils import (
    client_error_response,
    json_error_response,
    json_success_response,
)
from services.transcription import TranscriptionService

router = APIRouter(prefix=API_PREFIX, tags=["Transcription"])


@router.options("/transcribe", include_in_schema=False)
async def transcribe_options() -> Response:
    return preflight_response(POST_METHODS)


@router.post(
    "/transcribe",
    response_model=TranscribeResponse,
    summary="Transcribe an audio upload",
    description="""
Upload audio to the speech-to-text endpoint with segment-level output.

Transcripts longer than 50 characters get a second pass that labels speaker
turns (`Speaker A:`, `Speaker B:` ...). Shorter transcripts, or a failed
labeling pass, are returned under a single `Speaker A:` label.
""",
    responses={
        400: {"model": ErrorResponse, "description": "No file or non-audio MIME type"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        413: {"model": ErrorResponse, "description": "File too large"},
        500: {"model": ErrorResponse, "description": "Provider or configuration error"},
    },
)
async def transcribe(
    audio: Optional[UploadFile] = File(default=None),
    language: Optional[str] = Form(default="auto"),
    service: TranscriptionService = Depends(get_transcription_service_dependency),
) -> JSONResponse:
    logger.info("Transcription request received")

    try:
        result = await service.transcribe_upload(audio, language=language)
        return json_success_response(result)

    except ClientRequestError as e:
        logger.warning(f"Rejected transcription request: {e.error}")
        return client_error_response(e)

    except ConfigurationError as e:
        logger.error(f"Transcription configuration error: {e}")
        return json_error_response(
            "configuration_error",
            str(e),
            status_code=500,
            service=TRANSCRIPTION_SERVICE_NAME,
        )

    except ProviderResponseError as e:
        logger.error(f"Transcription error: {e.detail}")
        return json_error_response(
            ErrorMessages.TRANSCRIPTION_FAILED,
            e.detail,
            status_code=500,
            service=TRANSCRIPTION_SERVICE_NAME,
        )

    except ProviderError as e:
        logger.error(f"Transcription error: {e}")
        return json_error_response(
            ErrorMessages.TRANSCRIPTION_UNAVAILABLE,
            ErrorMessages.WHISPER_PROVIDER_FAILED.format(
                status=e.status_code or "network", detail=e.detail
            ),
            status_code=500,
            service=TRANSCRIPTION_SERVICE_NAME,
        )

    except Exception as e:
        logger.error(format_exception_short(e, "Transcription error"))
        return json_error_response(
            ErrorMessages.TRANSCRIPTION_FAILED,
            str(e),
            status_code=500,
            service=TRANSCRIPTION_SERVICE_NAME,
        )

    finally:
        if audio is not None:
            await audio.close()
