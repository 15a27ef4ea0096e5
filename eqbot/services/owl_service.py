"""
OwlAI quick replies - one short answer per message, with the user's last
exchange in the same chat as the only context.
"""

import logging
from typing import Optional

from .. import config
from ..ai import AIProvider, GenerationConfig
from ..exceptions import LLMError
from ..schemas import OwlExchange
from .conversation_service import OwlExchangeStore

logger = logging.getLogger("owl_service")


def build_prompt(username: str, message: str, last: Optional[OwlExchange]) -> str:
    last_message = last.message if last else ""
    last_response = last.response if last else ""
    return f"""Respond as OwlAI, You are OWL-AI - a wise, emotionally aware, and highly analytical assistant trained to deliver alpha, insights, and emotional clarity, to {username}. Last exchange:
{last_message}
{last_response}

New message: "{message}"

Guidelines:

- Analyze inputs and extract core meaning or actionable insight.
- Provide responses that are clear, emotionally intelligent, and deeply thoughtful.
- Balance raw data with emotional awareness, like a seasoned researcher and life coach.
- Adapt your tone to be concise, calm, and powerful - like an owl in the night, hunting truth.

- Keep responses very short (1 sentence max)
- Match user's tone (casual/friendly)
- For greetings: Simple "Hi" or "Hello"
- For questions: Direct answers
- For mood: 1 relevant emoji + brief comment
- For music: Just artist - song name
- Never repeat "Hey there!\""""


class OwlReplyService:
    """Generates and records OwlAI replies."""

    def __init__(self, provider: AIProvider, store: OwlExchangeStore):
        self.provider = provider
        self.store = store
        self.generation = GenerationConfig(
            temperature=config.OWL_TEMPERATURE,
            max_output_tokens=config.OWL_MAX_TOKENS,
        )

    async def generate_response(self, chat_id, user_id, username: str, message: str) -> Optional[str]:
        """Reply text, or None when generation failed."""
        last = self.store.last_exchange(chat_id, user_id)
        prompt = build_prompt(username, message, last)

        try:
            response = await self.provider.generate(prompt, self.generation)
        except LLMError as e:
            logger.error(f"❌ Response error for chat {chat_id}: {e.message}")
            return None

        self.store.add(chat_id, user_id, username, message, response)
        return response
