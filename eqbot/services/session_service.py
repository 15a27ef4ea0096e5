"""
Session State Machine.

Every inbound event is matched against a transition table keyed by
(current session state, event kind). Matched transitions mutate the user
record, save it, and describe the view to render; unmatched events leave the
state alone.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..constants import EMOTION_NAMES, get_emotion
from ..events import Event, EventKind
from ..exceptions import EmptySelectionError, SessionStateError, UnknownEventError, ValidationError
from ..schemas import (
    Achievement, AchievementsState, BreathingState, HistoryState, HomeState,
    JournalEntry, JournalState, SelectEmotionState, SelectIntensityState,
    SelectMultipleState, SessionStateName, UserRecord, utcnow,
)
from .. import views
from ..views import View
from .breathing_service import BreathingSequencer, PushView
from .journal_service import JournalService
from .user_service import UserRecordStore

logger = logging.getLogger("session_service")

S = SessionStateName
E = EventKind


@dataclass
class SessionResult:
    """What the transport should do after an event was handled."""
    view: Optional[View] = None
    notice: Optional[str] = None
    unlocked: List[Achievement] = field(default_factory=list)
    delete_message: bool = False
    forward_to_assistant: bool = False
    handled: bool = True


Transition = Callable[[UserRecord, Event, Optional[PushView]], SessionResult]


class SessionStateMachine:
    """Routes events for one bot instance."""

    # States that return Home on back/done
    LEAVABLE_STATES = (
        S.SELECT_EMOTION, S.SELECT_INTENSITY, S.SELECT_MULTIPLE, S.JOURNAL,
        S.HISTORY, S.ACHIEVEMENTS, S.BREATHING,
    )

    def __init__(self, store: UserRecordStore, journal: JournalService,
                 sequencer: BreathingSequencer, clock=utcnow):
        self.store = store
        self.journal = journal
        self.sequencer = sequencer
        self.clock = clock
        self._transitions: Dict[Tuple[SessionStateName, EventKind], Transition] = {
            (S.HOME, E.OPEN_EMOTIONS): self._open_emotions,
            (S.HOME, E.OPEN_MULTI): self._open_multi,
            (S.HOME, E.OPEN_HISTORY): self._open_history,
            (S.HOME, E.OPEN_ACHIEVEMENTS): self._open_achievements,
            (S.HOME, E.START_BREATHING): self._start_breathing,
            (S.SELECT_EMOTION, E.CHOOSE_EMOTION): self._choose_emotion,
            (S.SELECT_INTENSITY, E.CHOOSE_INTENSITY): self._choose_intensity,
            (S.SELECT_MULTIPLE, E.TOGGLE_EMOTION): self._toggle_emotion,
            (S.SELECT_MULTIPLE, E.CONFIRM_MULTI): self._confirm_multi,
            (S.JOURNAL, E.TEXT): self._commit,
            (S.JOURNAL, E.CANCEL): self._go_home,
            (S.BREATHING, E.STOP_BREATHING): self._stop_breathing,
        }
        for state in self.LEAVABLE_STATES:
            self._transitions[(state, E.BACK)] = self._go_home
        for state in SessionStateName:
            self._transitions[(state, E.DONE_AND_DELETE)] = self._done_and_delete
            self._transitions[(state, E.RESET)] = self._go_home

    def allowed_events(self, state: SessionStateName) -> List[EventKind]:
        return [kind for (s, kind) in self._transitions if s is state]

    def handle(self, user_id: int, event: Event, push: Optional[PushView] = None) -> SessionResult:
        """
        Apply ``event`` to the user's session.

        Args:
            user_id: Telegram user ID
            event: decoded event
            push: coroutine used by the breathing sequencer to update the
                chat asynchronously; required only for START_BREATHING

        Returns:
            SessionResult describing the view, notices and side effects
        """
        record = self.store.load(user_id)
        if record.session_state is S.BREATHING and not self.sequencer.is_running(user_id):
            # persisted mid-exercise by a previous process; its timer is gone
            logger.warning(f"⚠️ Orphaned breathing session for user {user_id}, back to Home")
            record.session = HomeState()
            self.store.save(user_id, record)
        state = record.session_state
        transition = self._transitions.get((state, event.kind))

        if transition is None:
            if event.kind is E.TEXT:
                return SessionResult(forward_to_assistant=True, handled=False)
            logger.info(f"⚠️ Ignored {event.kind.name} in {state.name} for user {user_id}")
            notice = UnknownEventError(f"{event.kind.name} not allowed in {state.name}").to_user_message()
            return SessionResult(notice=notice, handled=False)

        try:
            return transition(record, event, push)
        except ValidationError as e:
            logger.info(f"⚠️ Validation for user {user_id} in {state.name}: {e.message}")
            return SessionResult(notice=e.to_user_message(), handled=False)
        except SessionStateError as e:
            logger.error(f"❌ Session fault for user {user_id} in {state.name}: {e.message}")
            return self._recover(user_id, e)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, record: UserRecord) -> View:
        session = record.session
        if isinstance(session, SelectEmotionState):
            return views.emotion_menu_view()
        if isinstance(session, SelectIntensityState):
            return views.intensity_view(session.emotion)
        if isinstance(session, SelectMultipleState):
            return views.multi_select_view(session.selected)
        if isinstance(session, JournalState):
            return views.journal_prompt_view(session.emotions, session.intensity)
        if isinstance(session, HistoryState):
            return views.history_view(record)
        if isinstance(session, AchievementsState):
            return views.achievements_view(record)
        if isinstance(session, BreathingState):
            return views.breathing_intro_view(self.sequencer.cycles)
        return views.home_view(record)

    def _move(self, record: UserRecord, session) -> SessionResult:
        record.session = session
        self.store.save(record.user_id, record)
        return SessionResult(view=self._render(record))

    def _recover(self, user_id: int, error: SessionStateError) -> SessionResult:
        self.sequencer.cancel(user_id)
        record = self.store.load(user_id)
        record.session = HomeState()
        self.store.save(user_id, record)
        return SessionResult(view=views.home_view(record), notice=error.to_user_message())

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _open_emotions(self, record, event, push) -> SessionResult:
        return self._move(record, SelectEmotionState())

    def _open_multi(self, record, event, push) -> SessionResult:
        return self._move(record, SelectMultipleState())

    def _open_history(self, record, event, push) -> SessionResult:
        return self._move(record, HistoryState())

    def _open_achievements(self, record, event, push) -> SessionResult:
        return self._move(record, AchievementsState())

    def _choose_emotion(self, record, event, push) -> SessionResult:
        if get_emotion(event.argument) is None:
            raise SessionStateError(f"Unknown emotion {event.argument!r}")
        return self._move(record, SelectIntensityState(emotion=event.argument))

    def _choose_intensity(self, record, event, push) -> SessionResult:
        emotion = get_emotion(record.session.emotion)
        try:
            index = int(event.argument)
        except (TypeError, ValueError):
            raise SessionStateError(f"Bad intensity {event.argument!r}")
        if emotion is None or not 0 <= index < len(emotion.intensity_levels):
            raise SessionStateError(f"Intensity {index} out of range for {record.session.emotion}")
        return self._move(record, JournalState(emotions=[emotion.name], intensity=index))

    def _toggle_emotion(self, record, event, push) -> SessionResult:
        if get_emotion(event.argument) is None:
            raise SessionStateError(f"Unknown emotion {event.argument!r}")
        selected = record.session.selected ^ {event.argument}
        return self._move(record, SelectMultipleState(selected=selected))

    def _confirm_multi(self, record, event, push) -> SessionResult:
        selected = record.session.selected
        if not selected:
            raise EmptySelectionError("No emotions selected", context={"user_id": record.user_id})
        ordered = [name for name in EMOTION_NAMES if name in selected]
        return self._move(record, JournalState(emotions=ordered))

    def _commit(self, record, event, push) -> SessionResult:
        session = record.session
        entry = JournalEntry(
            emotions=list(session.emotions),
            intensity=session.intensity,
            text=(event.argument or "").strip(),
            created_at=self.clock(),
        )
        record, unlocked = self.journal.commit_entry(record, entry)
        record.session = HomeState()
        self.store.save(record.user_id, record)
        return SessionResult(view=views.commit_view(record, entry, unlocked), unlocked=unlocked)

    def _go_home(self, record, event, push) -> SessionResult:
        if record.session_state is S.BREATHING or self.sequencer.is_running(record.user_id):
            self.sequencer.cancel(record.user_id)
        return self._move(record, HomeState())

    def _done_and_delete(self, record, event, push) -> SessionResult:
        result = self._go_home(record, event, push)
        result.delete_message = True
        return result

    def _start_breathing(self, record, event, push) -> SessionResult:
        if push is None:
            raise SessionStateError("Breathing started without a view sink")
        result = self._move(record, BreathingState())
        self.sequencer.start(record.user_id, push)
        return result

    def _stop_breathing(self, record, event, push) -> SessionResult:
        self.sequencer.cancel(record.user_id)
        result = self._move(record, HomeState())
        result.notice = "⏹ Breathing stopped."
        return result
