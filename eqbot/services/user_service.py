"""
User Record Store - durable per-user state.

Records are stored whole as JSON and overwritten on every save; a load of an
unknown user returns a fresh default record without persisting it.
"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ..db_service import BaseRepository, DatabaseConnectionPool, get_pool
from ..exceptions import RecordSerializationError
from ..schemas import UserRecord, utcnow

logger = logging.getLogger("user_service")


class UserRecordStore:
    """Load/save of UserRecord keyed by Telegram user id."""

    def __init__(self, pool: Optional[DatabaseConnectionPool] = None):
        self.repository = BaseRepository("user_records", pool or get_pool(), key_column="user_id")

    def load(self, user_id: int) -> UserRecord:
        """Return the stored record, or a default one for a first-time user."""
        row = self.repository.get_by_key(user_id)
        if row is None:
            logger.info(f"👤 New user record for {user_id}")
            return UserRecord(user_id=user_id)

        try:
            return UserRecord.model_validate_json(row["payload"])
        except PydanticValidationError as e:
            logger.error(f"❌ Corrupt record for user {user_id}: {e}")
            raise RecordSerializationError(
                f"Stored record for user {user_id} could not be decoded",
                context={"user_id": user_id},
            ) from e

    def save(self, user_id: int, record: UserRecord) -> None:
        """Full overwrite of the user's record."""
        if record.user_id != user_id:
            raise ValueError(f"Record belongs to {record.user_id}, not {user_id}")
        self.repository.upsert(
            user_id=user_id,
            payload=record.model_dump_json(),
            updated_at=utcnow().isoformat(),
        )
        logger.debug(f"💾 Saved record for user {user_id} ({record.session_state.value})")

    def exists(self, user_id: int) -> bool:
        return self.repository.get_by_key(user_id) is not None
