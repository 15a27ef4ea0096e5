"""
Tests for bot wiring, configuration of logging and the global error handler
"""

import logging
from unittest.mock import Mock

import pytest
from telegram.error import NetworkError
from telegram.ext import CallbackQueryHandler, CommandHandler, MessageHandler

from eqbot import config
from eqbot.core import BOT_COMMANDS, BotCore, error_handler
from eqbot.logging_config import EQFormatter, setup_logging


@pytest.fixture
def core(pool, provider):
    return BotCore(pool=pool, provider=provider)


class TestBotCore:

    def test_build_requires_token(self, core, monkeypatch):
        monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", "")
        with pytest.raises(ValueError):
            core.build()

    def test_handlers_registered(self, core, monkeypatch):
        monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", "123456:TEST-TOKEN")
        app = core.build()

        handlers = app.handlers[0]
        commands = [h for h in handlers if isinstance(h, CommandHandler)]
        assert sorted(c for h in commands for c in h.commands) == ["clear", "help", "start"]
        assert any(isinstance(h, MessageHandler) for h in handlers)
        assert any(isinstance(h, CallbackQueryHandler) for h in handlers)
        assert error_handler in app.error_handlers

    def test_services_share_one_store(self, core):
        assert core.session.store is core.store
        assert core.sequencer.store is core.store
        assert core.assistant.provider is core.provider

    @pytest.mark.asyncio
    async def test_post_init_sets_commands(self, core, mock_context):
        app = Mock(bot=mock_context.bot)
        await core.post_init(app)
        mock_context.bot.set_my_commands.assert_awaited_once_with(BOT_COMMANDS)


@pytest.mark.asyncio
async def test_error_handler_downgrades_network_errors(mock_context, caplog):
    mock_context.error = NetworkError("connection reset")
    with caplog.at_level(logging.WARNING, logger="bot_core"):
        await error_handler(None, mock_context)

    assert any(r.levelno == logging.WARNING for r in caplog.records)
    assert not any(r.levelno >= logging.ERROR for r in caplog.records)


def test_formatter_emoji_prefix():
    formatter = EQFormatter(fmt="%(message)s", use_emoji=True)
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
    assert formatter.format(record) == "⚠️ careful"


def test_formatter_plain_for_files():
    formatter = EQFormatter(fmt="%(message)s", use_emoji=False)
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "saved", None, None)
    record.user_id = 7
    assert formatter.format(record) == "saved [user_id=7]"


def test_setup_logging_quiets_httpx(tmp_path):
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        setup_logging(level="DEBUG", log_file=str(tmp_path / "bot.log"))
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
