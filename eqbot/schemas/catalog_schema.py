"""Static catalog entries: emotions and achievements."""

from dataclasses import dataclass, field
from typing import Callable, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .journal_schema import JournalEntry, UserRecord


@dataclass(frozen=True)
class Emotion:
    """A named emotion with its display color, emoji, coping tips and intensity scale."""
    name: str
    color: str
    emoji: str
    tips: Tuple[str, ...]
    intensity_levels: Tuple[str, ...]

    @property
    def label(self) -> str:
        return f"{self.emoji} {self.name}"

    def intensity_label(self, index: int) -> str:
        return self.intensity_levels[index]


@dataclass(frozen=True)
class Achievement:
    """
    A milestone unlocked once its predicate holds.

    The predicate receives the record after the triggering mutation and the
    journal entries added by that mutation (empty for breathing completions).
    """
    name: str
    icon: str
    title: str
    description: str
    trigger: str
    predicate: Callable[["UserRecord", Sequence["JournalEntry"]], bool] = field(compare=False, repr=False)

    def is_unlocked_by(self, record: "UserRecord", new_entries: Sequence["JournalEntry"] = ()) -> bool:
        return bool(self.predicate(record, new_entries))
