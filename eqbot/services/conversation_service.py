"""
Conversation logs.

ConversationStore keeps the assistant's user/model turns per chat;
OwlExchangeStore keeps the OwlAI relay's message/response pairs.
"""

import logging
import time
from typing import List, Optional

from ..db_service import BaseRepository, DatabaseConnectionPool, get_pool
from ..schemas import ConversationTurn, OwlExchange

logger = logging.getLogger("conversation_service")

ROLES = ("user", "model")


class ConversationStore:
    """Append-only assistant history, purgeable per chat."""

    def __init__(self, pool: Optional[DatabaseConnectionPool] = None):
        self.repository = BaseRepository("chat_history", pool or get_pool())

    def add(self, chat_id, role: str, content: str) -> ConversationTurn:
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role}")
        turn = ConversationTurn(chat_id=str(chat_id), role=role, content=content)
        self.repository.insert(
            chat_id=turn.chat_id,
            role=turn.role,
            content=turn.content,
            timestamp=turn.timestamp.isoformat(),
        )
        return turn

    def recent(self, chat_id, limit: int = 10) -> List[ConversationTurn]:
        """The most recent ``limit`` turns, oldest first."""
        rows = self.repository.fetch(
            """
            SELECT chat_id, role, content, timestamp FROM (
                SELECT * FROM chat_history WHERE chat_id = ? ORDER BY id DESC LIMIT ?
            ) ORDER BY id ASC
            """,
            (str(chat_id), limit),
        )
        return [ConversationTurn(**row) for row in rows]

    def clear(self, chat_id) -> int:
        removed = self.repository.delete_where(chat_id=str(chat_id))
        logger.info(f"🧹 Cleared {removed} turns for chat {chat_id}")
        return removed

    def count(self, chat_id) -> int:
        return self.repository.count(chat_id=str(chat_id))


class OwlExchangeStore:
    """Message/response pairs of the OwlAI relay."""

    def __init__(self, pool: Optional[DatabaseConnectionPool] = None):
        self.repository = BaseRepository("owl_history", pool or get_pool())

    def add(self, chat_id, user_id, username: Optional[str], message: str, response: str) -> OwlExchange:
        exchange = OwlExchange(
            chat_id=str(chat_id),
            user_id=str(user_id),
            username=username,
            message=message,
            response=response,
            timestamp=int(time.time() * 1000),
        )
        self.repository.insert(**exchange.model_dump())
        return exchange

    def last_exchange(self, chat_id, user_id) -> Optional[OwlExchange]:
        rows = self.repository.fetch(
            """
            SELECT chat_id, user_id, username, message, response, timestamp
            FROM owl_history WHERE chat_id = ? AND user_id = ?
            ORDER BY timestamp DESC, id DESC LIMIT 1
            """,
            (str(chat_id), str(user_id)),
        )
        return OwlExchange(**rows[0]) if rows else None
