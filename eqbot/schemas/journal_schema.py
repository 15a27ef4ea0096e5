"""Journal entries, session state variants and the per-user record."""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JournalEntry(BaseModel):
    """One committed journal entry. Immutable once created."""
    emotions: List[str] = Field(default_factory=list, description="Emotion names")
    intensity: Optional[int] = Field(default=None, ge=0)
    text: str = Field(default="")
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def intensity_needs_single_emotion(self):
        if self.intensity is not None and len(self.emotions) != 1:
            raise ValueError("Intensity is only valid with exactly one emotion")
        return self

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    class Config:
        frozen = True


# ============================================================================
# SESSION STATES
# ============================================================================

class SessionStateName(str, Enum):
    HOME = "home"
    SELECT_EMOTION = "select_emotion"
    SELECT_INTENSITY = "select_intensity"
    JOURNAL = "journal"
    SELECT_MULTIPLE = "select_multiple"
    BREATHING = "breathing"
    HISTORY = "history"
    ACHIEVEMENTS = "achievements"


class HomeState(BaseModel):
    state: Literal["home"] = "home"


class SelectEmotionState(BaseModel):
    state: Literal["select_emotion"] = "select_emotion"


class SelectIntensityState(BaseModel):
    state: Literal["select_intensity"] = "select_intensity"
    emotion: str


class JournalState(BaseModel):
    """Waiting for the journal text of an already chosen selection."""
    state: Literal["journal"] = "journal"
    emotions: List[str] = Field(..., min_length=1)
    intensity: Optional[int] = Field(default=None, ge=0)


class SelectMultipleState(BaseModel):
    state: Literal["select_multiple"] = "select_multiple"
    selected: FrozenSet[str] = Field(default_factory=frozenset)


class BreathingState(BaseModel):
    state: Literal["breathing"] = "breathing"
    started_at: datetime = Field(default_factory=utcnow)


class HistoryState(BaseModel):
    state: Literal["history"] = "history"


class AchievementsState(BaseModel):
    state: Literal["achievements"] = "achievements"


SessionState = Annotated[
    Union[
        HomeState, SelectEmotionState, SelectIntensityState, JournalState,
        SelectMultipleState, BreathingState, HistoryState, AchievementsState,
    ],
    Field(discriminator="state"),
]


# ============================================================================
# USER RECORD
# ============================================================================

class UserRecord(BaseModel):
    """Durable per-user state, persisted as JSON after every mutation."""
    user_id: int = Field(..., description="Telegram user ID")
    history: List[JournalEntry] = Field(default_factory=list)
    streak: int = Field(default=0, ge=0)
    unlocked_achievements: List[str] = Field(default_factory=list)
    breathing_count: int = Field(default=0, ge=0)
    session: SessionState = Field(default_factory=HomeState)
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def session_state(self) -> SessionStateName:
        return SessionStateName(self.session.state)

    @property
    def pending_emotion(self) -> Optional[str]:
        if isinstance(self.session, SelectIntensityState):
            return self.session.emotion
        if isinstance(self.session, JournalState) and self.session.intensity is not None:
            return self.session.emotions[0]
        return None

    @property
    def pending_intensity(self) -> Optional[int]:
        if isinstance(self.session, JournalState):
            return self.session.intensity
        return None

    @property
    def pending_multi_emotions(self) -> FrozenSet[str]:
        if isinstance(self.session, SelectMultipleState):
            return self.session.selected
        return frozenset()

    def has_achievement(self, name: str) -> bool:
        return name in self.unlocked_achievements

    def logged_emotions(self) -> set:
        return {name for entry in self.history for name in entry.emotions}
