"""
Emotions in Check - static catalogs and fixed limits.

Emotion catalog order is the display order of the emotion grid; achievement
catalog order is the order simultaneous unlocks are reported in.
"""

from typing import Dict, Optional, Sequence, Tuple

from .schemas import Achievement, Emotion, JournalEntry, UserRecord

# =============================================================================
# EMOTION CATALOG
# =============================================================================

EMOTIONS: Tuple[Emotion, ...] = (
    Emotion(
        name="Joy",
        color="yellow",
        emoji="😊",
        tips=(
            "Write down what made you smile so you can come back to it later.",
            "Share the moment with someone you care about.",
            "Pause and notice where you feel the joy in your body.",
        ),
        intensity_levels=("Content", "Cheerful", "Delighted", "Ecstatic"),
    ),
    Emotion(
        name="Sadness",
        color="blue",
        emoji="😢",
        tips=(
            "Be gentle with yourself, sadness passes like weather.",
            "Reach out to a friend, even a short message helps.",
            "A short walk outside can soften a heavy mood.",
        ),
        intensity_levels=("Down", "Blue", "Sorrowful", "Heartbroken"),
    ),
    Emotion(
        name="Anger",
        color="red",
        emoji="😠",
        tips=(
            "Try the breathing exercise before you respond to anyone.",
            "Name what boundary feels crossed.",
            "Move your body: stretch, walk, or shake out your hands.",
        ),
        intensity_levels=("Annoyed", "Frustrated", "Angry", "Furious"),
    ),
    Emotion(
        name="Fear",
        color="purple",
        emoji="😨",
        tips=(
            "Ground yourself: name five things you can see right now.",
            "Ask what is in your control in this moment.",
            "Slow exhales tell your nervous system you are safe.",
        ),
        intensity_levels=("Uneasy", "Nervous", "Scared", "Terrified"),
    ),
    Emotion(
        name="Surprise",
        color="orange",
        emoji="😲",
        tips=(
            "Give yourself a moment before deciding how you feel about it.",
            "Notice whether the surprise leans pleasant or unpleasant.",
        ),
        intensity_levels=("Curious", "Amazed", "Astonished", "Shocked"),
    ),
    Emotion(
        name="Disgust",
        color="green",
        emoji="🤢",
        tips=(
            "Step away from what triggered it if you can.",
            "Ask which of your values the situation goes against.",
        ),
        intensity_levels=("Displeased", "Averse", "Repulsed", "Revolted"),
    ),
)

EMOTIONS_BY_NAME: Dict[str, Emotion] = {emotion.name: emotion for emotion in EMOTIONS}
EMOTION_NAMES: Tuple[str, ...] = tuple(emotion.name for emotion in EMOTIONS)


def get_emotion(name: str) -> Optional[Emotion]:
    return EMOTIONS_BY_NAME.get(name)


# =============================================================================
# ACHIEVEMENT THRESHOLDS
# =============================================================================

DEEP_THINKER_MIN_WORDS = 50
DEEP_THINKER_MIN_ENTRIES = 10
WEEK_STREAK_DAYS = 7
ZEN_MASTER_SESSIONS = 50

# =============================================================================
# BREATHING EXERCISE
# =============================================================================

BREATHING_STEPS: Tuple[Tuple[str, str], ...] = (
    ("Inhale", "🌬️ Breathe in slowly through your nose..."),
    ("HoldIn", "⏸️ Hold your breath gently..."),
    ("Exhale", "😮‍💨 Breathe out slowly through your mouth..."),
    ("HoldOut", "⏸️ Hold, empty and relaxed..."),
)

# =============================================================================
# TELEGRAM LIMITS
# =============================================================================

MAX_MESSAGE_LENGTH = 4096
MAX_CALLBACK_DATA_LENGTH = 64
HISTORY_TEXT_PREVIEW = 120


# =============================================================================
# ACHIEVEMENT CATALOG
# =============================================================================

TRIGGER_JOURNAL = "journal"
TRIGGER_BREATHING = "breathing"


def _first_entry(record: UserRecord, new_entries: Sequence[JournalEntry]) -> bool:
    return len(record.history) == 1


def _deep_thinker(record: UserRecord, new_entries: Sequence[JournalEntry]) -> bool:
    long_entries = sum(1 for entry in record.history if entry.word_count >= DEEP_THINKER_MIN_WORDS)
    return long_entries >= DEEP_THINKER_MIN_ENTRIES


def _emotion_explorer(record: UserRecord, new_entries: Sequence[JournalEntry]) -> bool:
    return set(EMOTION_NAMES) <= record.logged_emotions()


def _week_streak(record: UserRecord, new_entries: Sequence[JournalEntry]) -> bool:
    return record.streak >= WEEK_STREAK_DAYS


def _zen_master(record: UserRecord, new_entries: Sequence[JournalEntry]) -> bool:
    return record.breathing_count >= ZEN_MASTER_SESSIONS


ACHIEVEMENTS: Tuple[Achievement, ...] = (
    Achievement(
        name="FirstEntry",
        icon="📝",
        title="First Step",
        description="Log your first journal entry",
        trigger=TRIGGER_JOURNAL,
        predicate=_first_entry,
    ),
    Achievement(
        name="DeepThinker",
        icon="🧠",
        title="Deep Thinker",
        description=f"Write {DEEP_THINKER_MIN_ENTRIES} entries of {DEEP_THINKER_MIN_WORDS}+ words",
        trigger=TRIGGER_JOURNAL,
        predicate=_deep_thinker,
    ),
    Achievement(
        name="EmotionExplorer",
        icon="🧭",
        title="Emotion Explorer",
        description="Log every emotion at least once",
        trigger=TRIGGER_JOURNAL,
        predicate=_emotion_explorer,
    ),
    Achievement(
        name="WeekStreak",
        icon="🔥",
        title="Week Streak",
        description=f"Journal {WEEK_STREAK_DAYS} days in a row",
        trigger=TRIGGER_JOURNAL,
        predicate=_week_streak,
    ),
    Achievement(
        name="ZenMaster",
        icon="🧘",
        title="Zen Master",
        description=f"Complete {ZEN_MASTER_SESSIONS} breathing exercises",
        trigger=TRIGGER_BREATHING,
        predicate=_zen_master,
    ),
)

ACHIEVEMENTS_BY_NAME: Dict[str, Achievement] = {a.name: a for a in ACHIEVEMENTS}


def get_achievement(name: str) -> Optional[Achievement]:
    return ACHIEVEMENTS_BY_NAME.get(name)
