"""API request/response schemas."""

from .common_schemas import ErrorResponse, HealthResponse
from .relay_schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    CanaryResponse,
    TranscribeResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "CanaryResponse",
    "TranscribeResponse",
]
