# config.py
# Centralized configuration for the Emotions in Check and OwlAI bots

import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


# ============================================================================
# TELEGRAM CONFIGURATION
# ============================================================================
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
OWL_BOT_TOKEN = os.getenv("OWL_BOT_TOKEN", "") or TELEGRAM_BOT_TOKEN

# ============================================================================
# AI MODEL CONFIGURATION
# ============================================================================
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.7"))
GEMINI_MAX_TOKENS = int(os.getenv("GEMINI_MAX_TOKENS", "800"))

# OwlAI relay keeps replies short
OWL_MAX_TOKENS = int(os.getenv("OWL_MAX_TOKENS", "300"))
OWL_TEMPERATURE = float(os.getenv("OWL_TEMPERATURE", "0.7"))
OWL_REPLY_DELAY_MIN = float(os.getenv("OWL_REPLY_DELAY_MIN", "0.5"))
OWL_REPLY_DELAY_MAX = float(os.getenv("OWL_REPLY_DELAY_MAX", "1.5"))

# ============================================================================
# DATABASE CONFIGURATION
# ============================================================================
DATABASE_PATH = os.getenv("DATABASE_PATH", "./eqbot.db")

# ============================================================================
# ASSISTANT
# ============================================================================
CONVERSATION_HISTORY_LIMIT = int(os.getenv("CONVERSATION_HISTORY_LIMIT", "10"))

# ============================================================================
# JOURNAL & STREAKS
# ============================================================================
STREAK_RESET_ON_GAP = _env_bool("STREAK_RESET_ON_GAP")
HISTORY_PAGE_SIZE = int(os.getenv("HISTORY_PAGE_SIZE", "10"))

# ============================================================================
# BREATHING EXERCISE
# ============================================================================
BREATHING_STEP_SECONDS = float(os.getenv("BREATHING_STEP_SECONDS", "4"))
BREATHING_INITIAL_DELAY = float(os.getenv("BREATHING_INITIAL_DELAY", "1"))
BREATHING_CYCLES = int(os.getenv("BREATHING_CYCLES", "3"))

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")
