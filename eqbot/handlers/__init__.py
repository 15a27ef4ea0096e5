"""
Handlers package initialization.

Exports all handler classes for easy importing.
"""

from .command_handler import CommandHandler
from .message_handler import MessageHandler
from .button_handler import ButtonHandler

__all__ = [
    "CommandHandler",
    "MessageHandler",
    "ButtonHandler",
]
