"""
Infrastructure Layer - External system integrations.

This layer contains implementations of interfaces defined in the interfaces/ layer.
Each subdirectory groups implementations by external dependency.

Structure:
- openai/  - OpenAI chat completion and speech-to-text
"""

from .openai import OpenAIProvider, get_openai_provider

__all__ = [
    "OpenAIProvider",
    "get_openai_provider",
]
