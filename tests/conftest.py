"""
pytest configuration and fixtures for all tests
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from eqbot.ai import AIProvider, HealthStatus
from eqbot.db_service import DatabaseConnectionPool
from eqbot.schemas import JournalEntry
from eqbot.services import (
    BreathingSequencer, ConversationStore, JournalService, OwlExchangeStore,
    SessionStateMachine, UserRecordStore,
)

USER_ID = 123456789
CHAT_ID = -100200300
BASE_TIME = datetime(2024, 3, 4, 9, 30, tzinfo=timezone.utc)


# ==================== CLOCK HELPERS ====================

def day(offset: int, hour: int = 0) -> datetime:
    """BASE_TIME shifted by whole days (and optionally hours)."""
    return BASE_TIME + timedelta(days=offset, hours=hour)


def make_entry(emotions=("Joy",), text="", created_at=None, intensity=None) -> JournalEntry:
    return JournalEntry(
        emotions=list(emotions),
        intensity=intensity,
        text=text,
        created_at=created_at or BASE_TIME,
    )


class FixedClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime = BASE_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeProvider(AIProvider):
    """AIProvider with programmable async mocks."""

    def __init__(self, reply: str = "🌱 That sounds meaningful."):
        self.generate_mock = AsyncMock(return_value=reply)
        self.chat_mock = AsyncMock(return_value=reply)

    async def generate(self, prompt, config=None):
        return await self.generate_mock(prompt, config)

    async def chat(self, history, message, config=None):
        return await self.chat_mock(history, message, config)

    async def health_check(self):
        return HealthStatus(is_healthy=True, latency_ms=0.0)


# ==================== DATABASE FIXTURES ====================

@pytest.fixture
def pool():
    """In-memory database shared by every store of one test"""
    db = DatabaseConnectionPool(":memory:")
    yield db
    db.close_all()


@pytest.fixture
def store(pool):
    return UserRecordStore(pool)


@pytest.fixture
def conversations(pool):
    return ConversationStore(pool)


@pytest.fixture
def owl_store(pool):
    return OwlExchangeStore(pool)


# ==================== SERVICE FIXTURES ====================

@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def journal():
    return JournalService(reset_on_gap=False)


@pytest.fixture
def sequencer(store):
    """Breathing sequencer without real delays"""
    return BreathingSequencer(store, step_seconds=0, initial_delay=0, cycles=3)


@pytest.fixture
def machine(store, journal, sequencer, clock):
    return SessionStateMachine(store, journal, sequencer, clock=clock)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def push():
    """Collects views pushed by the breathing sequencer"""
    return AsyncMock()


# ==================== TELEGRAM MOCKS ====================

@pytest.fixture
def mock_update():
    """Telegram update carrying a text message"""
    update = Mock()
    update.effective_user = Mock()
    update.effective_user.id = USER_ID
    update.effective_user.username = "testuser"
    update.effective_user.first_name = "Test"
    update.effective_chat = Mock()
    update.effective_chat.id = CHAT_ID

    update.message = AsyncMock()
    update.message.text = "Test message"
    update.message.message_id = 1
    update.message.chat = Mock(id=CHAT_ID)
    update.message.from_user = update.effective_user
    update.message.reply_text = AsyncMock(return_value=Mock(message_id=2))
    update.callback_query = None
    return update


@pytest.fixture
def mock_callback_update(mock_update):
    """Telegram update carrying a button press"""
    query = AsyncMock()
    query.data = "menu:emotions"
    query.message = AsyncMock()
    query.message.chat_id = CHAT_ID
    query.message.message_id = 42
    mock_update.callback_query = query
    mock_update.message = None
    return mock_update


@pytest.fixture
def mock_context():
    context = Mock()
    context.bot = AsyncMock()
    context.user_data = {}
    context.chat_data = {}
    return context
