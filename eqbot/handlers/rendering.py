"""Helpers turning views into Telegram messages."""

import logging
from typing import Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Message
from telegram.constants import ParseMode
from telegram.error import BadRequest, TelegramError

from ..views import View

logger = logging.getLogger("rendering")


def to_markup(view: View) -> Optional[InlineKeyboardMarkup]:
    if not view.buttons:
        return None
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(label, callback_data=payload) for label, payload in row]
        for row in view.buttons
    ])


async def send_view(message: Message, view: View) -> Optional[Message]:
    """Reply to ``message`` with a view."""
    try:
        return await message.reply_text(
            view.text,
            parse_mode=ParseMode.HTML,
            reply_markup=to_markup(view)
        )
    except TelegramError as e:
        logger.error(f"❌ Failed to send view: {e}")
        return None


async def edit_view(bot: Bot, chat_id: int, message_id: int, view: View) -> None:
    """Replace an existing message with a view."""
    try:
        await bot.edit_message_text(
            view.text,
            chat_id=chat_id,
            message_id=message_id,
            parse_mode=ParseMode.HTML,
            reply_markup=to_markup(view)
        )
    except BadRequest as e:
        if "not modified" in str(e).lower():
            logger.debug(f"Message {message_id} unchanged")
            return
        logger.error(f"❌ Failed to edit message {message_id}: {e}")
    except TelegramError as e:
        logger.error(f"❌ Failed to edit message {message_id}: {e}")
