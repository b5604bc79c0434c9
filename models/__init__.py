"""
Models Layer - Data models exchanged across layers.

This layer contains:
- Provider interface values (chat options/results, transcription results)
"""

from .schemas import ChatOptions, ChatCompletion, Transcription

__all__ = [
    "ChatOptions",
    "ChatCompletion",
    "Transcription",
]
