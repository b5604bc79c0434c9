"""
Common API schemas shared across endpoints.

Error format:
{
    "error": str,       # machine-readable code (4xx) or fallback message (5xx)
    "message": str,     # human-readable detail
    "service": str      # implicated upstream service (5xx only)
}
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error envelope for 4xx and 5xx responses."""

    error: str = Field(..., description="Error code or fallback message")
    message: Optional[str] = Field(default=None, description="Human-readable detail")
    service: Optional[str] = Field(default=None, description="Upstream service")
    status: Optional[int] = Field(
        default=None, description="Provider status (diagnostic endpoint only)"
    )

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "error": "prompt_too_long",
                    "message": "Please provide a shorter prompt (max 15,000 characters)",
                },
                {
                    "error": "AI analysis service temporarily unavailable. Please try again.",
                    "message": "OpenAI API failed: 503 - Service Unavailable",
                    "service": "OpenAI GPT-4",
                },
            ]
        }


class HealthResponse(BaseModel):
    """Static capability report."""

    status: str
    message: str
    timestamp: str
    transcription_service: str
    analysis_service: str
    platform: str
    features: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "status": "OK",
                    "message": "Reflect AI Relay is running",
                    "timestamp": "2026-01-01T00:00:00+00:00",
                    "transcription_service": "OpenAI Whisper",
                    "analysis_service": "OpenAI GPT-4",
                    "platform": "FastAPI",
                    "features": ["Hebrew speaker recognition"],
                }
            ]
        }
