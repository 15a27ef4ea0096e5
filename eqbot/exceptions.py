"""
Custom exception classes for the Emotions in Check bot.
Provides standardized error handling across the application.
"""


class EQBotException(Exception):
    """Base exception for all bot errors."""

    def __init__(self, message: str, error_code: str = None, context: dict = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        super().__init__(self.message)

    def to_user_message(self) -> str:
        """Return a user-friendly error message."""
        return f"❌ {self.message}"


# ============================================================================
# VALIDATION ERRORS
# ============================================================================

class ValidationError(EQBotException):
    """Base exception for input validation errors."""
    pass


class EmptySelectionError(ValidationError):
    """Raised when a multi-emotion selection is confirmed with nothing selected."""

    def to_user_message(self) -> str:
        return "⚠️ Pick at least one emotion first."


class EmptyJournalEntryError(ValidationError):
    """Raised when a journal entry has neither emotions nor text."""

    def to_user_message(self) -> str:
        return "⚠️ An entry needs at least one emotion or some text."


class UnknownEventError(ValidationError):
    """Raised when an event is not valid in the current session state."""

    def to_user_message(self) -> str:
        return "🤔 That button isn't available right now."


# ============================================================================
# SESSION ERRORS
# ============================================================================

class SessionStateError(EQBotException):
    """Raised when a session reaches a combination the transitions never produce."""

    def to_user_message(self) -> str:
        return "❌ Something went wrong, back to the main menu."


# ============================================================================
# DATABASE ERRORS
# ============================================================================

class DatabaseError(EQBotException):
    """Base exception for database-related errors."""

    def to_user_message(self) -> str:
        return "❌ Could not save your data. Please try again."


class RecordSerializationError(DatabaseError):
    """Raised when a stored user record cannot be decoded."""
    pass


# ============================================================================
# AI / LLM ERRORS
# ============================================================================

class LLMError(EQBotException):
    """Base exception for LLM-related errors."""

    def to_user_message(self) -> str:
        return "🧠 Hmm, I'm having a little trouble thinking right now. Please try again shortly."


class LLMAPIError(LLMError):
    """Raised when the LLM API call fails."""
    pass


class LLMEmptyResponseError(LLMError):
    """Raised when the LLM returns no text."""
    pass
