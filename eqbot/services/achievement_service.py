"""Achievement evaluation against the static catalog."""

import logging
from typing import List, Sequence

from ..constants import ACHIEVEMENTS
from ..schemas import Achievement, JournalEntry, UserRecord

logger = logging.getLogger("achievement_service")


def evaluate_achievements(record: UserRecord, trigger: str,
                          new_entries: Sequence[JournalEntry] = ()) -> List[Achievement]:
    """
    Unlock every not-yet-unlocked achievement of the given trigger whose
    predicate now holds.

    Mutates ``record.unlocked_achievements`` and returns the newly unlocked
    achievements in catalog order.
    """
    unlocked = []
    for achievement in ACHIEVEMENTS:
        if achievement.trigger != trigger or record.has_achievement(achievement.name):
            continue
        if achievement.is_unlocked_by(record, new_entries):
            record.unlocked_achievements.append(achievement.name)
            unlocked.append(achievement)
            logger.info(f"🏆 User {record.user_id} unlocked {achievement.name}")
    return unlocked
