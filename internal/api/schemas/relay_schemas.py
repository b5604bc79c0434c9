"""
Request/response schemas for the analyze, transcribe and test endpoints.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Analysis
# ============================================================================


class AnalyzeRequest(BaseModel):
    """
    Request body for /api/analyze.

    prompt and maxTokens accept any JSON value; AnalysisService validates
    them, and a non-string prompt is a 400 "invalid_prompt".
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: Any = Field(default=None, description="Text to analyze (max 15,000 chars)")
    max_tokens: Any = Field(
        default=None, alias="maxTokens", description="Output token budget"
    )
    language: Optional[str] = Field(default=None, description="Language hint")
    model: Optional[str] = Field(default=None, description="Model identifier")


class AnalyzeResponse(BaseModel):
    response: str
    usage: Optional[Dict[str, Any]] = None
    model: str


# ============================================================================
# Transcription
# ============================================================================


class TranscribeResponse(BaseModel):
    status: str = Field(default="completed")
    transcript: str = Field(..., description="Transcript with speaker labels")
    confidence: float
    audio_duration: float = Field(..., description="Audio duration in seconds")
    language: str
    transcription_service: str
    speaker_identification: str
    segments_count: int

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "status": "completed",
                    "transcript": "Speaker A: Hi, how are you?\nSpeaker B: Good, thanks.",
                    "confidence": 0.9,
                    "audio_duration": 4.2,
                    "language": "english",
                    "transcription_service": "OpenAI Whisper",
                    "speaker_identification": "AI-powered",
                    "segments_count": 2,
                }
            ]
        }


# ============================================================================
# Diagnostics
# ============================================================================


class CanaryResponse(BaseModel):
    status: str
    message: str
    test_response: str
    usage: Optional[Dict[str, Any]] = None
    model: str
