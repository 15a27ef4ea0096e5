"""
OWLai assistant - the free-text conversational persona of the Emotions in
Check bot, with per-chat history.
"""

import logging
import re
from typing import List, Optional

from .. import config
from ..ai import AIProvider, ChatMessage, GenerationConfig
from ..exceptions import LLMError
from ..schemas import ConversationTurn
from .conversation_service import ConversationStore

logger = logging.getLogger("assistant_service")

SYSTEM_PROMPT = """
You are OWLai - a scientist and emotional intelligence coach 🧠💬.
Your expertise lies in social psychology and personality psychology.

You're in a group chat. Be warm, smart, and human. Use clear and concise English - insightful but never clinical.

Avoid diagnosing or giving medical advice. If a question is too deep,
gently encourage the user to seek a therapist.

Guide conversations about emotions, personality, relationships, and behavior. Occasionally use emojis like 🧠, 💬, 🌱, or 🌟 to keep tone human.
"""

IDENTITY_PATTERN = re.compile(r"who\s+are\s+you|what\s+can\s+you\s+do|are\s+you\s+a\s+bot", re.IGNORECASE)

IDENTITY_REPLY = (
    "I'm OWLai - your emotional intelligence coach 🧠💬. "
    "I help people explore emotions, relationships, and personality. Ask me anything."
)


def clean_history(turns: List[ConversationTurn], user_text: str) -> List[ChatMessage]:
    """
    Shape history for the model: only user/model roles, strictly alternating
    (the first of a same-role run wins) and starting with a user turn. The new
    user message is always the last element.
    """
    cleaned: List[ChatMessage] = []
    last_role = None
    for turn in turns:
        if turn.role not in ("user", "model") or turn.role == last_role:
            continue
        cleaned.append(ChatMessage(turn.role, turn.content))
        last_role = turn.role

    if cleaned and cleaned[0].role != "user":
        cleaned.pop(0)
    # the new message replaces a trailing unanswered user turn
    if cleaned and cleaned[-1].role == "user":
        cleaned.pop()
    cleaned.append(ChatMessage("user", user_text))
    return cleaned


class AssistantService:
    """Answers free text with the OWLai persona."""

    def __init__(self, provider: AIProvider, store: ConversationStore,
                 history_limit: Optional[int] = None):
        self.provider = provider
        self.store = store
        self.history_limit = config.CONVERSATION_HISTORY_LIMIT if history_limit is None else history_limit

    async def reply(self, chat_id, user_text: str) -> Optional[str]:
        """
        Produce a reply, recording both turns on success.

        Returns:
            Reply text, or None when the model failed (caller stays silent)
        """
        if IDENTITY_PATTERN.search(user_text):
            self.store.add(chat_id, "user", user_text)
            self.store.add(chat_id, "model", IDENTITY_REPLY)
            return IDENTITY_REPLY

        history = self.store.recent(chat_id, self.history_limit)
        cleaned = clean_history(history, user_text)

        try:
            answer = await self.provider.chat(
                cleaned[:-1],
                cleaned[-1].text,
                GenerationConfig(system_instruction=SYSTEM_PROMPT),
            )
        except LLMError as e:
            logger.error(f"❌ Assistant reply failed for chat {chat_id}: {e.message}")
            return None

        self.store.add(chat_id, "user", user_text)
        self.store.add(chat_id, "model", answer)
        return answer

    def clear(self, chat_id) -> int:
        return self.store.clear(chat_id)
