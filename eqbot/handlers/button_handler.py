"""
Button Handler - inline keyboard callbacks.

Decodes the payload, runs it through the session state machine and renders
the result in place of the pressed message.
"""

import logging
from telegram import Update
from telegram.ext import ContextTypes
from telegram.error import TelegramError

from ..events import decode_callback
from ..services import SessionStateMachine, SessionResult
from ..views import View
from .rendering import edit_view

logger = logging.getLogger("button_handler")


class ButtonHandler:
    """Handler for inline keyboard buttons (callbacks)."""

    def __init__(self, session: SessionStateMachine):
        self.session = session

    async def handle_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Main callback handler dispatcher."""
        query = update.callback_query
        user_id = update.effective_user.id
        message = query.message
        if message is None:
            # inaccessible or too old to edit
            logger.warning(f"⚠️ Callback without message from user {user_id}")
            await query.answer()
            return

        chat_id = message.chat_id
        message_id = message.message_id

        async def push(view: View) -> None:
            await edit_view(context.bot, chat_id, message_id, view)

        event = decode_callback(query.data)
        if event.argument is None:
            logger.info(f"🔘 User {user_id} pressed {event.kind.name}")
        else:
            logger.info(f"🔘 User {user_id} pressed {event.kind.name}({event.argument})")

        result = self.session.handle(user_id, event, push)
        await self._acknowledge(query, result)

        if result.delete_message:
            try:
                await message.delete()
            except TelegramError as e:
                logger.error(f"❌ Failed to delete message {message_id}: {e}")
            return

        if result.view is not None:
            await edit_view(context.bot, chat_id, message_id, result.view)

    async def _acknowledge(self, query, result: SessionResult) -> None:
        # Validation notices pop up as alerts, everything else as a toast
        try:
            if result.notice and not result.handled:
                await query.answer(result.notice, show_alert=True)
            elif result.notice:
                await query.answer(result.notice)
            else:
                await query.answer()
        except TelegramError as e:
            logger.warning(f"⚠️ Could not answer callback: {e}")
