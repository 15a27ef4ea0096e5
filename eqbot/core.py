"""
Bot Core - initialization and wiring of the Emotions in Check bot.
"""

import logging
from typing import Optional

from telegram import BotCommand, Update
from telegram.error import NetworkError, TimedOut
from telegram.ext import (
    Application, CommandHandler, MessageHandler, CallbackQueryHandler,
    filters, ContextTypes
)

from . import config
from .ai import GeminiProvider
from .db_service import DatabaseConnectionPool, close_pool, get_pool
from .handlers import CommandHandler as CmdHandler, MessageHandler as MsgHandler, ButtonHandler as BtnHandler
from .logging_config import setup_logging
from .services import (
    AssistantService, BreathingSequencer, ConversationStore, JournalService,
    SessionStateMachine, UserRecordStore,
)

logger = logging.getLogger("bot_core")

BOT_COMMANDS = [
    BotCommand("start", "Main menu"),
    BotCommand("help", "How this bot works"),
    BotCommand("clear", "Forget our conversation"),
]


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Global error handler; network hiccups are logged without notifying the user."""
    error = context.error

    if isinstance(error, (TimedOut, NetworkError)):
        logger.warning(f"⚠️ Telegram network error: {type(error).__name__}: {error}")
        return

    logger.error(f"❌ Unhandled error: {error}", exc_info=error)


class BotCore:
    """Central bot core for initialization and management."""

    def __init__(self, pool: Optional[DatabaseConnectionPool] = None, provider=None):
        self.application: Optional[Application] = None
        self.pool = pool or get_pool()

        # Initialize services
        self.store = UserRecordStore(self.pool)
        self.conversations = ConversationStore(self.pool)
        self.journal = JournalService()
        self.sequencer = BreathingSequencer(self.store)
        self.session = SessionStateMachine(self.store, self.journal, self.sequencer)
        self.provider = provider or GeminiProvider(
            config.GEMINI_API_KEY,
            model=config.GEMINI_MODEL,
            temperature=config.GEMINI_TEMPERATURE,
            max_tokens=config.GEMINI_MAX_TOKENS,
        )
        self.assistant = AssistantService(self.provider, self.conversations)

        self.cmd_handler = CmdHandler(self.session, self.assistant)
        self.msg_handler = MsgHandler(self.session, self.assistant)
        self.btn_handler = BtnHandler(self.session)

    async def post_init(self, app: Application) -> None:
        """Post-initialization setup (lifespan)."""
        await app.bot.set_my_commands(BOT_COMMANDS)
        logger.info(f"✅ Bot commands configured ({len(BOT_COMMANDS)} commands)")
        logger.info(f"🤖 Model: {config.GEMINI_MODEL}")

    async def post_shutdown(self, app: Application) -> None:
        """Shutdown cleanup (lifespan)."""
        await self.sequencer.cancel_all()
        close_pool()
        logger.info("🛑 Bot shut down")

    def setup_handlers(self) -> None:
        """Setup command, message, and callback handlers."""
        if not self.application:
            raise RuntimeError("Application not initialized")

        self.application.add_handler(CommandHandler("start", self.cmd_handler.handle_start))
        self.application.add_handler(CommandHandler("help", self.cmd_handler.handle_help))
        self.application.add_handler(CommandHandler("clear", self.cmd_handler.handle_clear))

        self.application.add_handler(MessageHandler(
            filters.TEXT & ~filters.COMMAND,
            self.msg_handler.handle_text_message
        ))

        self.application.add_handler(CallbackQueryHandler(self.btn_handler.handle_callback))
        self.application.add_error_handler(error_handler)

        logger.info("✅ Handlers registered")

    def build(self) -> Application:
        if not config.TELEGRAM_BOT_TOKEN:
            raise ValueError("TELEGRAM_BOT_TOKEN not set in environment")

        self.application = (
            Application.builder()
            .token(config.TELEGRAM_BOT_TOKEN)
            .post_init(self.post_init)
            .post_shutdown(self.post_shutdown)
            .build()
        )
        self.setup_handlers()
        return self.application

    def run(self) -> None:
        """Run the bot until interrupted."""
        application = self.build()
        logger.info("🧠 Emotions in Check is running")
        application.run_polling(allowed_updates=[Update.MESSAGE, Update.CALLBACK_QUERY])


# Global bot instance
_bot_core_instance: Optional[BotCore] = None


def get_bot_core() -> BotCore:
    """Get or create bot core instance."""
    global _bot_core_instance
    if _bot_core_instance is None:
        _bot_core_instance = BotCore()
    return _bot_core_instance


def main() -> None:
    """Main entry point."""
    setup_logging()
    get_bot_core().run()


if __name__ == "__main__":
    main()
