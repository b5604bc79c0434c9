"""Centralized error and log message templates for the relay."""


class ErrorMessages:
    """Centralized error message templates."""

    # Client errors (analysis)
    PROMPT_MISSING = "Please provide a valid prompt for analysis"
    PROMPT_TOO_LONG = "Please provide a shorter prompt (max {max:,} characters)"

    # Client errors (transcription)
    AUDIO_MISSING = "Please upload an audio file"
    AUDIO_INVALID_TYPE = "Please upload an audio file (mp3, wav, m4a, etc.)"
    AUDIO_TOO_LARGE = "File too large. Please upload a file smaller than {max}MB"

    # Client errors (transport)
    METHOD_NOT_ALLOWED = "Method not allowed"
    INVALID_REQUEST = "Request body could not be parsed: {detail}"

    # Configuration
    API_KEY_MISSING = "OpenAI API key not configured"
    API_KEY_HINT = "Please check your environment variables"

    # Provider errors
    PROVIDER_REQUEST_FAILED = "OpenAI API request failed"
    PROVIDER_UNREACHABLE = "Could not reach OpenAI API: {error}"
    PROVIDER_INVALID_JSON = "Invalid response from OpenAI - body is not JSON"
    PROVIDER_NO_CONTENT = "Invalid response from OpenAI - no content found"
    PROVIDER_NO_TEXT = "Invalid response from OpenAI - no transcript text found"
    ANALYSIS_PROVIDER_FAILED = "OpenAI API failed: {status} - {detail}"
    WHISPER_PROVIDER_FAILED = "Whisper API failed: {status} - {detail}"

    # Fallback messages returned in the "error" field
    ANALYSIS_UNAVAILABLE = "AI analysis service temporarily unavailable. Please try again."
    ANALYSIS_RATE_LIMITED = "Too many requests. Please wait a moment and try again."
    ANALYSIS_FAILED = "Analysis failed"
    TRANSCRIPTION_UNAVAILABLE = (
        "Transcription service temporarily unavailable. Please try again."
    )
    TRANSCRIPTION_FAILED = "Transcription failed"
    CANARY_FAILED = "OpenAI API test failed"
    TEST_FAILED = "Test failed"


class LogMessages:
    """Centralized log message templates."""

    # Analysis
    ANALYSIS_RECEIVED = "Analysis request received (chars={chars}, model={model}, language={language})"
    ANALYSIS_TOKENS = "Token budget: requested={requested}, ceiling={ceiling}, used={used}"
    ANALYSIS_COMPLETE = "Analysis completed ({chars} chars)"

    # Transcription
    TRANSCRIBE_RECEIVED = "Processing: {filename} ({content_type}) in {language}"
    TRANSCRIBE_SAVED = "Saved upload: {size:.2f}MB to {path}"
    TRANSCRIBE_COMPLETE = "Transcription completed: {chars} chars, {segments} segments"
    TRANSCRIBE_SHORT = "Transcript too short for speaker identification ({chars} <= {min} chars)"
    CLEANUP_FAILED = "Could not clean up file {path}: {error}"

    # Speaker labeling
    SPEAKERS_START = "Identifying speakers with AI (language={language})"
    SPEAKERS_COMPLETE = "Speaker identification completed"
    SPEAKERS_FALLBACK = "Speaker identification failed, using single speaker: {error}"

    # Provider
    PROVIDER_REQUEST = "POST {path} (model={model})"
    PROVIDER_STATUS = "OpenAI response status: {status} ({path})"
    PROVIDER_ERROR = "OpenAI API error ({status}): {detail}"
    INIT_HTTP_CLIENT = "Created OpenAI HTTP client (base_url={base_url})"

    # Diagnostics
    CANARY_START = "Testing OpenAI API connection (key length={length})"
    CANARY_COMPLETE = "OpenAI test successful"
