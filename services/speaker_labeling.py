"""
Speaker Labeling - Second chat-completion pass that annotates speaker turns.

The partitioning is left entirely to the model. This class only owns the
control flow: call once, use the output verbatim, and fall back to a single
speaker on any failure.
"""

from typing import Optional

from core.config import get_settings
from core.constants import (
    SINGLE_SPEAKER_LABEL,
    SPEAKER_LABEL_MAX_TOKENS,
    SPEAKER_LABEL_TEMPERATURE,
    Language,
)
from core.logger import format_exception_short, logger
from core.messages import LogMessages
from core.prompts import SPEAKER_SYSTEM_PROMPT, build_speaker_prompt
from interfaces.ai_provider import IAIProvider
from models.schemas import ChatOptions


def single_speaker(transcript: str) -> str:
    return f"{SINGLE_SPEAKER_LABEL}: {transcript}"


class SpeakerLabeler:
    """Infers "Speaker A:/Speaker B:" turns for a plain transcript."""

    def __init__(self, provider: IAIProvider, model: Optional[str] = None):
        self.provider = provider
        self.model = model or get_settings().analysis_model

    async def label(self, transcript: str, language: Language = Language.ENGLISH) -> str:
        """
        Returns the model's labeled transcript, or the whole transcript under
        "Speaker A" if the call fails for any reason. Never raises.
        """
        try:
            logger.info(LogMessages.SPEAKERS_START.format(language=language.value))

            completion = await self.provider.complete_chat(
                build_speaker_prompt(transcript, language),
                ChatOptions(
                    model=self.model,
                    max_tokens=SPEAKER_LABEL_MAX_TOKENS,
                    temperature=SPEAKER_LABEL_TEMPERATURE,
                    system_prompt=SPEAKER_SYSTEM_PROMPT,
                ),
            )
            if not completion.text:
                raise ValueError("empty speaker-labeling response")

            logger.info(LogMessages.SPEAKERS_COMPLETE)
            return completion.text

        except Exception as e:
            logger.warning(
                LogMessages.SPEAKERS_FALLBACK.format(error=format_exception_short(e))
            )
            return single_speaker(transcript)
