"""
Breathing Exercise Sequencer.

Drives the timed box-breathing sequence for a user as an asyncio task and
pushes each step to the chat through a caller-supplied coroutine. The task
registry lives in memory only; the persisted record just carries the
Breathing session state.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from .. import config
from ..constants import BREATHING_STEPS, TRIGGER_BREATHING
from ..schemas import Achievement, HomeState, SessionStateName, UserRecord
from ..views import View, breathing_complete_view, breathing_step_view
from .achievement_service import evaluate_achievements
from .user_service import UserRecordStore

logger = logging.getLogger("breathing_service")

PushView = Callable[[View], Awaitable[None]]


class BreathingSequencer:
    """One cancellable breathing task per user."""

    def __init__(self, store: UserRecordStore,
                 step_seconds: Optional[float] = None,
                 initial_delay: Optional[float] = None,
                 cycles: Optional[int] = None):
        self.store = store
        self.step_seconds = config.BREATHING_STEP_SECONDS if step_seconds is None else step_seconds
        self.initial_delay = config.BREATHING_INITIAL_DELAY if initial_delay is None else initial_delay
        self.cycles = config.BREATHING_CYCLES if cycles is None else cycles
        self._timers: Dict[int, asyncio.Task] = {}

    def is_running(self, user_id: int) -> bool:
        task = self._timers.get(user_id)
        return task is not None and not task.done()

    def get_task(self, user_id: int) -> Optional[asyncio.Task]:
        return self._timers.get(user_id)

    def start(self, user_id: int, push: PushView) -> asyncio.Task:
        """Start a sequence, cancelling any sequence already running for the user."""
        self.cancel(user_id)
        task = asyncio.get_running_loop().create_task(
            self._run(user_id, push), name=f"breathing-{user_id}"
        )
        self._timers[user_id] = task
        logger.info(f"🌬️ Breathing started for user {user_id}")
        return task

    def cancel(self, user_id: int) -> bool:
        """Cancel the user's pending sequence. Returns True if one was running."""
        task = self._timers.pop(user_id, None)
        if task is None or task.done():
            return False
        task.cancel()
        logger.info(f"⏹ Breathing cancelled for user {user_id}")
        return True

    async def cancel_all(self) -> None:
        tasks = list(self._timers.values())
        self._timers.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def complete(self, user_id: int) -> Tuple[UserRecord, List[Achievement]]:
        """Credit a finished sequence and return the user to Home."""
        record = self.store.load(user_id)
        record.breathing_count += 1
        unlocked = evaluate_achievements(record, TRIGGER_BREATHING)
        record.session = HomeState()
        self.store.save(user_id, record)
        logger.info(f"🧘 User {user_id} completed breathing #{record.breathing_count}")
        return record, unlocked

    def _still_active(self, user_id: int) -> bool:
        if self._timers.get(user_id) is not asyncio.current_task():
            return False
        record = self.store.load(user_id)
        return record.session_state is SessionStateName.BREATHING

    async def _push(self, push: PushView, view: View, user_id: int) -> None:
        try:
            await push(view)
        except Exception as e:
            logger.error(f"❌ Failed to push breathing view to user {user_id}: {e}")

    async def _run(self, user_id: int, push: PushView) -> None:
        try:
            await asyncio.sleep(self.initial_delay)
            for cycle_index in range(self.cycles):
                for step_index in range(len(BREATHING_STEPS)):
                    if not self._still_active(user_id):
                        logger.info(f"⏭ Stale breathing tick discarded for user {user_id}")
                        return
                    await self._push(push, breathing_step_view(step_index, cycle_index, self.cycles), user_id)
                    await asyncio.sleep(self.step_seconds)

            if not self._still_active(user_id):
                return
            record, unlocked = self.complete(user_id)
            await self._push(push, breathing_complete_view(record, unlocked), user_id)
        finally:
            if self._timers.get(user_id) is asyncio.current_task():
                del self._timers[user_id]
