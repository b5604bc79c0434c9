"""Constants for the relay."""

from enum import Enum
from typing import Optional


class Language(str, Enum):
    AUTO = "auto"
    HEBREW = "he"
    ENGLISH = "en"


def normalize_language(value: Optional[str]) -> Language:
    """
    Map a client language hint onto the supported set.

    Empty or "auto" -> AUTO, "he" -> HEBREW, anything else -> ENGLISH.
    """
    if not value or value.strip().lower() == Language.AUTO.value:
        return Language.AUTO
    if value.strip().lower() == Language.HEBREW.value:
        return Language.HEBREW
    return Language.ENGLISH


# Speech-to-text reports full language names in verbose_json
DETECTED_LANGUAGE_ALIASES = {
    "he": Language.HEBREW,
    "hebrew": Language.HEBREW,
    "iw": Language.HEBREW,
}


# =============================================================================
# Service Names (reported to clients)
# =============================================================================

ANALYSIS_SERVICE_NAME = "OpenAI GPT-4"
TRANSCRIPTION_SERVICE_NAME = "OpenAI Whisper"
SPEAKER_IDENTIFICATION_MODE = "AI-powered"

HEALTH_FEATURES = [
    "Hebrew speaker recognition",
    "Multilingual support",
    "Real-time transcription",
    "AI-powered analysis",
]


# =============================================================================
# Analysis Constants
# =============================================================================

DEFAULT_MAX_TOKENS = 1000
ANALYSIS_TEMPERATURE = 0.7

# Output token ceiling per model tier
MODEL_TOKEN_CEILINGS = {
    "gpt-4": 3000,
    "gpt-4-turbo": 4096,
    "gpt-4o": 4096,
    "gpt-4o-mini": 4096,
    "gpt-3.5-turbo": 2000,
}
DEFAULT_TOKEN_CEILING = 3000


# =============================================================================
# Transcription Constants
# =============================================================================

# Transcripts up to this length skip the speaker-labeling pass
SPEAKER_LABEL_MIN_CHARS = 50
SPEAKER_LABEL_MAX_TOKENS = 1500
SPEAKER_LABEL_TEMPERATURE = 0.3
SINGLE_SPEAKER_LABEL = "Speaker A"

# Whisper does not return a confidence score
DEFAULT_CONFIDENCE = 0.9
TRANSCRIPTION_STATUS_COMPLETED = "completed"
TRANSCRIPTION_RESPONSE_FORMAT = "verbose_json"

AUDIO_MIME_PREFIX = "audio/"
DEFAULT_AUDIO_FILENAME = "audio.wav"
DEFAULT_AUDIO_CONTENT_TYPE = "audio/wav"
UPLOAD_CHUNK_SIZE = 1024 * 1024


# =============================================================================
# Diagnostic Constants
# =============================================================================

CANARY_PROMPT = 'Say "Hello, this is a test!" in exactly those words.'
CANARY_MAX_TOKENS = 20
CANARY_TEMPERATURE = 0.0


# =============================================================================
# HTTP Client Constants
# =============================================================================

HTTP_MAX_KEEPALIVE_CONNECTIONS = 10
HTTP_MAX_CONNECTIONS = 20
HTTP_KEEPALIVE_EXPIRY = 30.0
HTTP_CONNECT_TIMEOUT = 10.0
