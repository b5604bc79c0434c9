"""
OpenAI Infrastructure - REST client for chat completion and speech-to-text.

This module provides:
- OpenAIProvider: Async provider client (implements IAIProvider)
"""

from .client import OpenAIProvider, extract_error_message, get_openai_provider

__all__ = [
    "OpenAIProvider",
    "extract_error_message",
    "get_openai_provider",
]
