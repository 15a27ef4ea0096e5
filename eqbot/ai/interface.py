"""
AI Providers Interface
======================

Abstract interface for text-generation providers, so the assistant and the
OwlAI relay do not depend on a concrete SDK.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class ChatMessage:
    """One turn of chat history sent to a provider"""
    role: str
    text: str


@dataclass
class GenerationConfig:
    """Per-call generation settings"""
    system_instruction: Optional[str] = None
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None


@dataclass
class HealthStatus:
    """Health check status"""
    is_healthy: bool
    latency_ms: float
    error: Optional[str] = None


class AIProvider(ABC):
    """
    Abstract base class for all AI providers

    Any new provider must implement these methods.
    """

    @abstractmethod
    async def generate(self, prompt: str, config: Optional[GenerationConfig] = None) -> str:
        """
        Generate a completion for a single prompt

        Raises:
            LLMError: if generation fails or returns no text
        """

    @abstractmethod
    async def chat(self, history: List[ChatMessage], message: str,
                   config: Optional[GenerationConfig] = None) -> str:
        """
        Continue a conversation given prior alternating user/model turns

        Raises:
            LLMError: if generation fails or returns no text
        """

    @abstractmethod
    async def health_check(self) -> HealthStatus:
        """Check provider availability"""
