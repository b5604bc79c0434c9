"""
Pydantic Schemas - values exchanged with the AI provider interface.

These are transient: nothing here outlives a single HTTP call.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Chat Completion
# =============================================================================


class ChatOptions(BaseModel):
    """Options for a single-turn chat completion."""

    model: str = Field(..., description="Provider model identifier")
    max_tokens: int = Field(..., ge=1, description="Output token budget")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    system_prompt: Optional[str] = Field(
        default=None, description="System instruction sent before the user prompt"
    )


class ChatCompletion(BaseModel):
    """Text extracted from a chat-completion response."""

    text: str
    usage: Optional[Dict[str, Any]] = None
    model: str


# =============================================================================
# Transcription
# =============================================================================


class Transcription(BaseModel):
    """Detailed (segment-level) speech-to-text result."""

    text: str = ""
    segments: List[Dict[str, Any]] = Field(default_factory=list)
    duration: float = 0.0
    language: Optional[str] = None

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "text": "Hello, how was your week?",
                    "segments": [{"id": 0, "start": 0.0, "end": 2.1}],
                    "duration": 2.1,
                    "language": "english",
                }
            ]
        }
