"""
OwlAI - a relay answering every non-command message with a short Gemini reply.
"""

import asyncio
import logging
import random
from typing import Optional

from telegram import Update
from telegram.constants import ChatAction
from telegram.error import NetworkError, TelegramError, TimedOut
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from . import config
from .ai import GeminiProvider
from .db_service import DatabaseConnectionPool, close_pool, get_pool
from .logging_config import setup_logging
from .services import OwlExchangeStore, OwlReplyService

logger = logging.getLogger("owl_bot")


def display_name(user) -> str:
    return user.username or user.first_name or "User"


class OwlBot:
    """Single-handler Telegram front end for OwlReplyService."""

    def __init__(self, pool: Optional[DatabaseConnectionPool] = None, provider=None,
                 delay_range=(config.OWL_REPLY_DELAY_MIN, config.OWL_REPLY_DELAY_MAX)):
        self.pool = pool or get_pool()
        self.provider = provider or GeminiProvider(
            config.GEMINI_API_KEY,
            model=config.GEMINI_MODEL,
            temperature=config.OWL_TEMPERATURE,
            max_tokens=config.OWL_MAX_TOKENS,
        )
        self.replies = OwlReplyService(self.provider, OwlExchangeStore(self.pool))
        self.delay_range = delay_range
        self.application: Optional[Application] = None

    async def on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Humanizing pause, then reply."""
        await asyncio.sleep(random.uniform(*self.delay_range))
        await self.handle_message(update, context)

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.message
        if not message or not message.text or not message.chat or not message.from_user:
            return
        if message.text.startswith("/"):
            return

        chat_id = message.chat.id
        user = message.from_user

        try:
            await context.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
            response = await self.replies.generate_response(chat_id, user.id, display_name(user), message.text)
            if response:
                await message.reply_text(response, do_quote=True)
        except TelegramError as e:
            logger.error(f"❌ Message error: {e}")

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        error = context.error
        if isinstance(error, (TimedOut, NetworkError)):
            logger.warning(f"⚠️ Polling error: {type(error).__name__}")
            return
        logger.error(f"❌ Unhandled error: {error}", exc_info=error)

    async def post_shutdown(self, app: Application) -> None:
        close_pool()

    def build(self) -> Application:
        if not config.OWL_BOT_TOKEN:
            raise ValueError("OWL_BOT_TOKEN or TELEGRAM_BOT_TOKEN must be set")

        self.application = (
            Application.builder()
            .token(config.OWL_BOT_TOKEN)
            .concurrent_updates(True)
            .post_shutdown(self.post_shutdown)
            .build()
        )
        self.application.add_handler(MessageHandler(filters.TEXT, self.on_message))
        self.application.add_error_handler(self.error_handler)
        return self.application

    def run(self) -> None:
        application = self.build()
        logger.info("🦉 OwlAI is running with optimized conversations")
        application.run_polling(poll_interval=0.3, timeout=10, allowed_updates=[Update.MESSAGE])


def main() -> None:
    setup_logging()
    OwlBot().run()


if __name__ == "__main__":
    main()
