"""
Message Handler - free text.

Text is journal content while a journal entry is open; anything else goes to
the OWLai assistant.
"""

import logging
from telegram import Update
from telegram.constants import ChatAction
from telegram.ext import ContextTypes
from telegram.error import TelegramError

from ..constants import MAX_MESSAGE_LENGTH
from ..events import Event
from ..services import AssistantService, SessionStateMachine
from .rendering import send_view

logger = logging.getLogger("message_handler")


class MessageHandler:
    """Handler for user text messages."""

    def __init__(self, session: SessionStateMachine, assistant: AssistantService):
        self.session = session
        self.assistant = assistant

    async def handle_text_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Route free text by the user's session state."""
        if not update.message or not update.message.text:
            logger.warning("❌ Empty message received")
            return

        user_id = update.effective_user.id
        chat_id = update.effective_chat.id
        text = update.message.text.strip()

        if len(text) > MAX_MESSAGE_LENGTH:
            await update.message.reply_text("❌ Message is too long (4096 characters max)")
            return

        result = self.session.handle(user_id, Event.text(text))

        if result.forward_to_assistant:
            await self._reply_with_assistant(update, context, chat_id, text)
            return

        if result.view is not None:
            await send_view(update.message, result.view)
        elif result.notice:
            await update.message.reply_text(result.notice)

    async def _reply_with_assistant(self, update: Update, context: ContextTypes.DEFAULT_TYPE,
                                    chat_id: int, text: str) -> None:
        try:
            await context.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
        except TelegramError as e:
            logger.debug(f"Typing action failed: {e}")

        reply = await self.assistant.reply(chat_id, text)
        if reply is None:
            return

        try:
            await update.message.reply_text(reply)
        except TelegramError as e:
            logger.error(f"❌ Failed to send assistant reply to chat {chat_id}: {e}")
