"""
Command Handler - /start, /help and /clear.
"""

import logging
import sqlite3

from telegram import Update
from telegram.ext import ContextTypes

from ..events import Event
from ..services import AssistantService, SessionStateMachine
from ..views import help_view
from .rendering import send_view

logger = logging.getLogger("command_handler")


class CommandHandler:
    """Handler for bot commands."""

    def __init__(self, session: SessionStateMachine, assistant: AssistantService):
        self.session = session
        self.assistant = assistant

    async def handle_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Reset the session to Home and show the main menu."""
        user_id = update.effective_user.id
        result = self.session.handle(user_id, Event.reset())
        await send_view(update.message, result.view)
        logger.info(f"✅ User {user_id} started bot")

    async def handle_help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /help command."""
        user_id = update.effective_user.id
        record = self.session.store.load(user_id)
        await send_view(update.message, help_view(record))
        logger.info(f"✅ Help command executed for user {user_id}")

    async def handle_clear(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Forget the assistant conversation for this chat."""
        chat_id = update.effective_chat.id
        try:
            removed = self.assistant.clear(chat_id)
        except sqlite3.Error as e:
            logger.error(f"❌ History delete error for chat {chat_id}: {e}")
            await update.message.reply_text("❌ Couldn't clear our conversation. Please try again.")
            return

        await update.message.reply_text("🧹 Our conversation history has been cleared. Fresh start!")
        logger.info(f"✅ Cleared {removed} turns for chat {chat_id}")
