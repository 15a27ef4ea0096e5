"""
Services package initialization.

Exports all service classes for easy importing.
"""

from .user_service import UserRecordStore
from .conversation_service import ConversationStore, OwlExchangeStore
from .achievement_service import evaluate_achievements
from .journal_service import JournalService
from .breathing_service import BreathingSequencer
from .session_service import SessionStateMachine, SessionResult
from .assistant_service import AssistantService
from .owl_service import OwlReplyService

__all__ = [
    "UserRecordStore",
    "ConversationStore",
    "OwlExchangeStore",
    "evaluate_achievements",
    "JournalService",
    "BreathingSequencer",
    "SessionStateMachine",
    "SessionResult",
    "AssistantService",
    "OwlReplyService",
]
