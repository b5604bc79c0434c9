"""
Analysis Routes - Text-analysis relay.

Success returns the payload directly:
{"response": str, "usage": {...}, "model": str}
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import JSONResponse

from core.constants import ANALYSIS_SERVICE_NAME
from core.dependencies import get_analysis_service_dependency
from core.errors import (
    ClientRequestError,
    ConfigurationError,
    ProviderError,
    ProviderResponseError,
)
from core.logger import format_exception_short, logger
from core.messages import ErrorMessages
from internal.api.cors import API_PREFIX, POST_METHODS, preflight_response
from internal.api.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from internal.api.utils import (
    client_error_response,
    json_error_response,
    json_success_response,
)
from services.analysis import AnalysisService

router = APIRouter(prefix=API_PREFIX, tags=["Analysis"])


@router.options("/analyze", include_in_schema=False)
async def analyze_options() -> Response:
    return preflight_response(POST_METHODS)


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Analyze text with a chat model",
    description="""
Relay a prompt to the chat-completion endpoint with a fixed analyst system
instruction.

- `prompt` is required, must be a string and at most 15,000 characters.
- `maxTokens` defaults to 1000 and is clamped to the model's ceiling.
- `model` defaults to the configured analysis model.
""",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or too-long prompt"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        500: {"model": ErrorResponse, "description": "Provider or configuration error"},
    },
)
async def analyze(
    request: Optional[AnalyzeRequest] = Body(default=None),
    service: AnalysisService = Depends(get_analysis_service_dependency),
) -> JSONResponse:
    payload = request or AnalyzeRequest()

    try:
        result = await service.analyze(
            prompt=payload.prompt,
            max_tokens=payload.max_tokens,
            model=payload.model,
            language=payload.language,
        )
        return json_success_response(result)

    except ClientRequestError as e:
        logger.warning(f"Rejected analysis request: {e.error}")
        return client_error_response(e)

    except ConfigurationError as e:
        logger.error(f"Analysis configuration error: {e}")
        return json_error_response(
            "configuration_error", str(e), status_code=500, service=ANALYSIS_SERVICE_NAME
        )

    except ProviderResponseError as e:
        logger.error(f"Analysis error: {e.detail}")
        return json_error_response(
            ErrorMessages.ANALYSIS_FAILED,
            e.detail,
            status_code=500,
            service=ANALYSIS_SERVICE_NAME,
        )

    except ProviderError as e:
        logger.error(f"Analysis error: {e}")
        error = (
            ErrorMessages.ANALYSIS_RATE_LIMITED
            if e.status_code == 429
            else ErrorMessages.ANALYSIS_UNAVAILABLE
        )
        return json_error_response(
            error,
            ErrorMessages.ANALYSIS_PROVIDER_FAILED.format(
                status=e.status_code or "network", detail=e.detail
            ),
            status_code=500,
            service=ANALYSIS_SERVICE_NAME,
        )

    except Exception as e:
        logger.error(format_exception_short(e, "Analysis error"))
        return json_error_response(
            ErrorMessages.ANALYSIS_FAILED,
            str(e),
            status_code=500,
            service=ANALYSIS_SERVICE_NAME,
        )
