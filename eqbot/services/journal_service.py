"""
Journal & Streak Engine.

Appends entries, recomputes the day streak and evaluates the journal
achievements. Calendar dates are taken in UTC from each entry's created_at.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from .. import config
from ..constants import TRIGGER_JOURNAL
from ..exceptions import EmptyJournalEntryError
from ..schemas import Achievement, JournalEntry, UserRecord
from .achievement_service import evaluate_achievements

logger = logging.getLogger("journal_service")


def entry_date(moment: datetime) -> date:
    """Calendar date of a timestamp in UTC; naive timestamps are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date()


class JournalService:
    """Commits journal entries into a user record."""

    def __init__(self, reset_on_gap: Optional[bool] = None):
        """
        Args:
            reset_on_gap: restart the streak at 1 when a calendar day was
                skipped. Defaults to STREAK_RESET_ON_GAP; off keeps the
                streak monotonic.
        """
        self.reset_on_gap = config.STREAK_RESET_ON_GAP if reset_on_gap is None else reset_on_gap

    def commit_entry(self, record: UserRecord, entry: JournalEntry) -> Tuple[UserRecord, List[Achievement]]:
        """
        Append ``entry`` to the record, update the streak and unlock journal
        achievements.

        Returns:
            The mutated record and the achievements unlocked by this entry.

        Raises:
            EmptyJournalEntryError: entry has neither emotions nor text
        """
        if not entry.emotions and not entry.text.strip():
            raise EmptyJournalEntryError(
                "Journal entry has no emotions and no text",
                context={"user_id": record.user_id},
            )

        previous = record.history[-1] if record.history else None
        record.history.append(entry)
        record.streak = self._next_streak(record.streak, previous, entry)

        unlocked = evaluate_achievements(record, TRIGGER_JOURNAL, [entry])
        logger.info(
            f"📓 User {record.user_id} logged {entry.emotions or 'text'} "
            f"(entries={len(record.history)}, streak={record.streak})"
        )
        return record, unlocked

    def _next_streak(self, streak: int, previous: Optional[JournalEntry], entry: JournalEntry) -> int:
        if previous is None:
            return 1

        previous_day = entry_date(previous.created_at)
        today = entry_date(entry.created_at)
        if previous_day == today:
            return max(streak, 1)
        if self.reset_on_gap and (today - previous_day).days > 1:
            return 1
        return streak + 1
