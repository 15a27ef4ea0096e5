"""
Unified logging setup: emoji-prefixed console output, plain file output.
"""

import logging
from typing import Optional

from . import config


class EQFormatter(logging.Formatter):
    """Formatter with emoji level prefixes for the console and plain text for files"""

    LEVEL_EMOJI = {
        logging.DEBUG: "🔍",
        logging.INFO: "ℹ️",
        logging.WARNING: "⚠️",
        logging.ERROR: "❌",
        logging.CRITICAL: "🔴"
    }

    def __init__(self, fmt=None, datefmt=None, use_emoji=True):
        super().__init__(fmt, datefmt)
        self.use_emoji = use_emoji

    def format(self, record):
        message = super().format(record)
        if self.use_emoji:
            emoji = self.LEVEL_EMOJI.get(record.levelno, "•")
            message = f"{emoji} {message}"
        if hasattr(record, "user_id"):
            message += f" [user_id={record.user_id}]"
        return message


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the root logger with console and optional file handlers"""
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO))

    # Clear existing handlers to avoid duplicates
    root.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(EQFormatter(
        fmt='%(asctime)s [%(levelname)-8s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
        use_emoji=True
    ))
    root.addHandler(console_handler)

    log_file = log_file if log_file is not None else config.LOG_FILE
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(EQFormatter(
            fmt='%(asctime)s [%(levelname)-8s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
            use_emoji=False
        ))
        root.addHandler(file_handler)

    # httpx logs every Telegram poll at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return root
