"""
Tests for the Telegram handlers and the OwlAI relay front end
"""

import pytest
from telegram import InlineKeyboardMarkup
from telegram.constants import ChatAction, ParseMode
from telegram.error import BadRequest

from eqbot.events import decode_callback
from eqbot.exceptions import LLMAPIError
from eqbot.handlers import ButtonHandler, CommandHandler, MessageHandler
from eqbot.handlers.rendering import edit_view, to_markup
from eqbot.owl_bot import OwlBot
from eqbot.schemas import SessionStateName
from eqbot.services import AssistantService
from eqbot.views import View

from conftest import CHAT_ID, USER_ID


@pytest.fixture
def assistant(provider, conversations):
    return AssistantService(provider, conversations)


@pytest.fixture
def buttons(machine):
    return ButtonHandler(machine)


@pytest.fixture
def messages(machine, assistant):
    return MessageHandler(machine, assistant)


@pytest.fixture
def commands(machine, assistant):
    return CommandHandler(machine, assistant)


def edited_text(context):
    return context.bot.edit_message_text.await_args.args[0]


class TestRendering:

    def test_markup_layout(self):
        view = View("x", [[("A", "menu:emotions"), ("B", "menu:multi")], [("C", "nav:back")]])
        markup = to_markup(view)

        assert isinstance(markup, InlineKeyboardMarkup)
        assert [len(row) for row in markup.inline_keyboard] == [2, 1]
        assert markup.inline_keyboard[0][1].callback_data == "menu:multi"

    def test_no_buttons_no_markup(self):
        assert to_markup(View("plain")) is None

    @pytest.mark.asyncio
    async def test_edit_ignores_not_modified(self, mock_context):
        mock_context.bot.edit_message_text.side_effect = BadRequest("Message is not modified")
        await edit_view(mock_context.bot, CHAT_ID, 42, View("same"))


@pytest.mark.asyncio
class TestButtonHandler:

    async def test_button_edits_message_in_place(self, buttons, store, mock_callback_update, mock_context):
        await buttons.handle_callback(mock_callback_update, mock_context)

        mock_callback_update.callback_query.answer.assert_awaited_once_with()
        kwargs = mock_context.bot.edit_message_text.await_args.kwargs
        assert kwargs["chat_id"] == CHAT_ID
        assert kwargs["message_id"] == 42
        assert kwargs["parse_mode"] == ParseMode.HTML
        assert "Which emotion" in edited_text(mock_context)
        assert store.load(USER_ID).session_state is SessionStateName.SELECT_EMOTION

    async def test_rejected_button_shows_alert(self, buttons, mock_callback_update, mock_context):
        mock_callback_update.callback_query.data = "multi:confirm"

        await buttons.handle_callback(mock_callback_update, mock_context)

        args, kwargs = mock_callback_update.callback_query.answer.await_args
        assert kwargs == {"show_alert": True}
        mock_context.bot.edit_message_text.assert_not_awaited()

    async def test_done_deletes_message(self, buttons, store, mock_callback_update, mock_context):
        mock_callback_update.callback_query.data = "menu:achievements"
        await buttons.handle_callback(mock_callback_update, mock_context)
        mock_context.bot.edit_message_text.reset_mock()

        mock_callback_update.callback_query.data = "nav:done_delete"
        await buttons.handle_callback(mock_callback_update, mock_context)

        mock_callback_update.callback_query.message.delete.assert_awaited_once()
        mock_context.bot.edit_message_text.assert_not_awaited()
        assert store.load(USER_ID).session_state is SessionStateName.HOME

    async def test_callback_without_message_is_acknowledged(self, buttons, store,
                                                            mock_callback_update, mock_context):
        mock_callback_update.callback_query.message = None

        await buttons.handle_callback(mock_callback_update, mock_context)

        mock_callback_update.callback_query.answer.assert_awaited_once_with()
        mock_context.bot.edit_message_text.assert_not_awaited()
        assert store.load(USER_ID).session_state is SessionStateName.HOME

    async def test_breathing_pushes_edits_to_same_message(self, buttons, machine, store,
                                                           mock_callback_update, mock_context):
        mock_callback_update.callback_query.data = "breath:start"

        await buttons.handle_callback(mock_callback_update, mock_context)
        await machine.sequencer.get_task(USER_ID)

        calls = mock_context.bot.edit_message_text.await_args_list
        # intro, 12 steps, completion
        assert len(calls) == 14
        assert all(call.kwargs["message_id"] == 42 for call in calls)
        assert "Well done" in calls[-1].args[0]
        assert store.load(USER_ID).breathing_count == 1


@pytest.mark.asyncio
class TestMessageHandler:

    async def test_journal_text_is_committed(self, messages, machine, store, mock_update, mock_context):
        for payload in ("menu:emotions", "emotion:Sadness", "intensity:1"):
            machine.handle(USER_ID, decode_callback(payload))
        mock_update.message.text = "  missed my bus  "

        await messages.handle_text_message(mock_update, mock_context)

        record = store.load(USER_ID)
        assert record.history[0].text == "missed my bus"
        assert "Entry saved" in mock_update.message.reply_text.await_args.args[0]
        mock_context.bot.send_chat_action.assert_not_awaited()

    async def test_free_text_goes_to_assistant(self, messages, provider, mock_update, mock_context):
        mock_update.message.text = "why do I overthink?"

        await messages.handle_text_message(mock_update, mock_context)

        mock_context.bot.send_chat_action.assert_awaited_once_with(chat_id=CHAT_ID, action=ChatAction.TYPING)
        provider.chat_mock.assert_awaited_once()
        mock_update.message.reply_text.assert_awaited_once_with("🌱 That sounds meaningful.")

    async def test_assistant_failure_stays_silent(self, messages, provider, mock_update, mock_context):
        provider.chat_mock.side_effect = LLMAPIError("boom")

        await messages.handle_text_message(mock_update, mock_context)

        mock_update.message.reply_text.assert_not_awaited()

    async def test_too_long_message_rejected(self, messages, provider, mock_update, mock_context):
        mock_update.message.text = "a" * 5000

        await messages.handle_text_message(mock_update, mock_context)

        assert "too long" in mock_update.message.reply_text.await_args.args[0]
        provider.chat_mock.assert_not_awaited()


@pytest.mark.asyncio
class TestCommandHandler:

    async def test_start_resets_to_home(self, commands, machine, store, mock_update, mock_context):
        machine.handle(USER_ID, decode_callback("menu:multi"))

        await commands.handle_start(mock_update, mock_context)

        assert store.load(USER_ID).session_state is SessionStateName.HOME
        args, kwargs = mock_update.message.reply_text.await_args
        assert "Emotions in Check" in args[0]
        assert kwargs["parse_mode"] == ParseMode.HTML

    async def test_help(self, commands, mock_update, mock_context):
        await commands.handle_help(mock_update, mock_context)

        text = mock_update.message.reply_text.await_args.args[0]
        assert "/clear" in text

    async def test_clear_forgets_conversation(self, commands, conversations, mock_update, mock_context):
        conversations.add(CHAT_ID, "user", "secret")

        await commands.handle_clear(mock_update, mock_context)

        assert conversations.count(CHAT_ID) == 0
        assert "cleared" in mock_update.message.reply_text.await_args.args[0]


@pytest.mark.asyncio
class TestOwlBot:

    @pytest.fixture
    def owl(self, pool, provider):
        return OwlBot(pool=pool, provider=provider, delay_range=(0, 0))

    async def test_replies_quoting_the_message(self, owl, provider, owl_store, mock_update, mock_context):
        await owl.on_message(mock_update, mock_context)

        mock_update.message.reply_text.assert_awaited_once_with("🌱 That sounds meaningful.", do_quote=True)
        prompt = provider.generate_mock.await_args.args[0]
        assert "to testuser" in prompt
        assert owl_store.last_exchange(CHAT_ID, USER_ID).message == "Test message"

    async def test_commands_ignored(self, owl, provider, mock_update, mock_context):
        mock_update.message.text = "/start"

        await owl.handle_message(mock_update, mock_context)

        provider.generate_mock.assert_not_awaited()
        mock_update.message.reply_text.assert_not_awaited()

    async def test_failure_sends_nothing(self, owl, provider, mock_update, mock_context):
        provider.generate_mock.side_effect = LLMAPIError("down")

        await owl.handle_message(mock_update, mock_context)

        mock_context.bot.send_chat_action.assert_awaited_once()
        mock_update.message.reply_text.assert_not_awaited()
