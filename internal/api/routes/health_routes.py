"""
Health Check API Routes.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Response

from core.config import get_settings
from core.constants import (
    ANALYSIS_SERVICE_NAME,
    HEALTH_FEATURES,
    TRANSCRIPTION_SERVICE_NAME,
)
from internal.api.cors import API_PREFIX, GET_METHODS, preflight_response
from internal.api.schemas import ErrorResponse, HealthResponse


router = APIRouter(prefix=API_PREFIX, tags=["Health"])


@router.options("/health", include_in_schema=False)
async def health_options() -> Response:
    return preflight_response(GET_METHODS)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Static capability report with the current server time",
    operation_id="health_check",
    responses={405: {"model": ErrorResponse, "description": "Method not allowed"}},
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Does not contact the provider; use `/api/test` for a connectivity check.
    """
    settings = get_settings()
    return HealthResponse(
        status="OK",
        message=f"{settings.app_name} is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
        transcription_service=TRANSCRIPTION_SERVICE_NAME,
        analysis_service=ANALYSIS_SERVICE_NAME,
        platform=settings.platform,
        features=list(HEALTH_FEATURES),
    )
