"""
Diagnostic Routes - Provider canary call.

Unlike the analysis relay, provider errors are reported verbatim and with
the provider's own HTTP status.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from core.dependencies import get_diagnostic_service_dependency
from core.errors import ConfigurationError, ProviderError
from core.logger import format_exception_short, logger
from core.messages import ErrorMessages
from internal.api.cors import API_PREFIX, GET_METHODS, preflight_response
from internal.api.schemas import CanaryResponse, ErrorResponse
from internal.api.utils import json_error_response, json_success_response
from services.diagnostics import DiagnosticService

router = APIRouter(prefix=API_PREFIX, tags=["Diagnostics"])


@router.options("/test", include_in_schema=False)
async def diagnostic_options() -> Response:
    return preflight_response(GET_METHODS)


@router.get(
    "/test",
    response_model=CanaryResponse,
    summary="Test provider connectivity",
    description="Send a minimal chat completion to confirm the credential works.",
    responses={
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        500: {"model": ErrorResponse, "description": "Missing credential or test failure"},
    },
)
async def run_connection_test(
    service: DiagnosticService = Depends(get_diagnostic_service_dependency),
) -> JSONResponse:
    try:
        return json_success_response(await service.run_canary())

    except ConfigurationError:
        logger.error("OpenAI API key not configured")
        return json_error_response(
            ErrorMessages.API_KEY_MISSING, ErrorMessages.API_KEY_HINT, status_code=500
        )

    except ProviderError as e:
        logger.error(f"OpenAI test error: {e}")
        if e.status_code is None:
            return json_error_response(
                ErrorMessages.TEST_FAILED, e.detail, status_code=500
            )
        return json_error_response(
            ErrorMessages.CANARY_FAILED,
            e.detail,
            status_code=e.status_code,
            status=e.status_code,
        )

    except Exception as e:
        logger.error(format_exception_short(e, "Test error"))
        return json_error_response(ErrorMessages.TEST_FAILED, str(e), status_code=500)
