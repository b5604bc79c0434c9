"""Fixed instructions sent to the chat-completion endpoint."""

from core.constants import Language


ANALYST_SYSTEM_PROMPT = (
    "You are an expert conversation analyst and behavioral psychologist. "
    "Provide insightful, empathetic, and constructive analysis of conversations "
    "and behavior patterns. You understand Hebrew and English perfectly. "
    "Always respond with clear, natural text without special formatting or "
    "structured patterns unless specifically requested."
)

SPEAKER_SYSTEM_PROMPT = (
    "You are an expert at analyzing conversations and identifying different "
    "speakers based on context, dialogue flow, and natural conversation patterns. "
    "You understand Hebrew and English perfectly."
)

_LANGUAGE_INSTRUCTIONS = {
    Language.HEBREW: "אנא השב בעברית בלבד. ",
    Language.ENGLISH: "Please respond in English only. ",
}

_SPEAKER_PROMPT_TEMPLATE = """{instruction}You are an expert at analyzing conversations and identifying different speakers based on dialogue patterns, conversation flow, and natural speech transitions.

Analyze this conversation transcript and identify different speakers. Look for:
- Natural conversation turns and responses
- Different speaking styles or topics
- Clear dialogue patterns
- Context clues that indicate speaker changes

Format the output with "Speaker A:", "Speaker B:", etc. for each different person speaking.

Important guidelines:
- Only separate speakers when you're confident there's a genuine speaker change
- If unsure, it's better to keep text together under one speaker
- Look for natural conversation flow and responses
- Consider context and dialogue patterns

Original transcript:
{transcript}

Please format as:
Speaker A: [their part]
Speaker B: [their part]
etc.

Return ONLY the formatted transcript with speaker labels, nothing else."""


def build_speaker_prompt(transcript: str, language: Language) -> str:
    """Build the speaker-labeling user prompt; AUTO gets the English instruction."""
    instruction = _LANGUAGE_INSTRUCTIONS.get(
        language, _LANGUAGE_INSTRUCTIONS[Language.ENGLISH]
    )
    return _SPEAKER_PROMPT_TEMPLATE.format(
        instruction=instruction, transcript=transcript
    )
