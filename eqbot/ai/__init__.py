"""
AI Module
=========

Exports all AI-related classes.
"""

from .interface import AIProvider, ChatMessage, GenerationConfig, HealthStatus
from .gemini_provider import GeminiProvider

__all__ = [
    "AIProvider",
    "ChatMessage",
    "GenerationConfig",
    "HealthStatus",
    "GeminiProvider",
]
