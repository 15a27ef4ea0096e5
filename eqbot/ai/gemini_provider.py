"""
Gemini AI Provider Implementation
=================================
"""

import logging
import time
from typing import List, Optional

from google import genai
from google.genai import types

from .interface import AIProvider, ChatMessage, GenerationConfig, HealthStatus
from ..exceptions import LLMAPIError, LLMEmptyResponseError

logger = logging.getLogger("GEMINI_PROVIDER")


class GeminiProvider(AIProvider):
    """Google Gemini AI provider implementation"""

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash",
                 temperature: float = 0.7, max_tokens: int = 800):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = None

    @property
    def client(self) -> genai.Client:
        """Lazy initialization of Gemini client"""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _build_config(self, config: Optional[GenerationConfig]) -> types.GenerateContentConfig:
        config = config or GenerationConfig()
        return types.GenerateContentConfig(
            system_instruction=config.system_instruction,
            temperature=self.temperature if config.temperature is None else config.temperature,
            max_output_tokens=self.max_tokens if config.max_output_tokens is None else config.max_output_tokens,
        )

    @staticmethod
    def _to_content(role: str, text: str) -> types.Content:
        return types.Content(role=role, parts=[types.Part(text=text)])

    async def _generate(self, contents: List[types.Content],
                        config: Optional[GenerationConfig]) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=self._build_config(config),
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise LLMAPIError(f"Gemini error: {e}") from e

        text = response.text
        if not text or not text.strip():
            logger.warning("Gemini returned an empty response")
            raise LLMEmptyResponseError("Gemini returned no text")
        return text.strip()

    async def generate(self, prompt: str, config: Optional[GenerationConfig] = None) -> str:
        """Generate text for a single prompt"""
        return await self._generate([self._to_content("user", prompt)], config)

    async def chat(self, history: List[ChatMessage], message: str,
                   config: Optional[GenerationConfig] = None) -> str:
        """Continue a conversation with prior turns as context"""
        contents = [self._to_content(turn.role, turn.text) for turn in history]
        contents.append(self._to_content("user", message))
        return await self._generate(contents, config)

    async def health_check(self) -> HealthStatus:
        """Check Gemini availability"""
        start = time.time()
        try:
            await self.generate("ping", GenerationConfig(max_output_tokens=5))
            latency = (time.time() - start) * 1000
            return HealthStatus(is_healthy=True, latency_ms=latency)
        except Exception as e:
            latency = (time.time() - start) * 1000
            logger.error(f"Gemini health check failed: {e}")
            return HealthStatus(
                is_healthy=False,
                latency_ms=latency,
                error=str(e)
            )
