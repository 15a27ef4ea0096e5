"""
Bot Pydantic schemas and catalog dataclasses.

Single source of truth for the data structures used throughout the bots.
"""

from .catalog_schema import Emotion, Achievement
from .journal_schema import (
    JournalEntry, UserRecord, SessionState, SessionStateName,
    HomeState, SelectEmotionState, SelectIntensityState, JournalState,
    SelectMultipleState, BreathingState, HistoryState, AchievementsState,
    utcnow,
)
from .message_schema import ConversationTurn, OwlExchange

__all__ = [
    "Emotion",
    "Achievement",
    "JournalEntry",
    "UserRecord",
    "SessionState",
    "SessionStateName",
    "HomeState",
    "SelectEmotionState",
    "SelectIntensityState",
    "JournalState",
    "SelectMultipleState",
    "BreathingState",
    "HistoryState",
    "AchievementsState",
    "ConversationTurn",
    "OwlExchange",
    "utcnow",
]
