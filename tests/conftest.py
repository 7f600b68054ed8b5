from datetime import datetime, timedelta

import pytest
import streamlit as st

from src.qotd.adapters.db_manager import DatabaseManager
from src.qotd.adapters.memory_store import InMemoryKeyValueStore
from src.qotd.adapters.sqlite_store import SQLiteKeyValueStore
from src.qotd.adapters.tracker_repository import KeyValueTrackerRepository
from src.qotd.application.tracker import DailyStateTracker
from src.qotd.domain.catalog import QuestionCatalog


class MockSessionState(dict):
    """
    Stand-in for st.session_state supporting dict and attribute access.
    """

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as err:
            raise AttributeError(name) from err

    def __setattr__(self, name, value):
        self[name] = value

    def __delattr__(self, name):
        try:
            del self[name]
        except KeyError as err:
            raise AttributeError(name) from err


class FakeClock:
    """Controllable local 'now'. Call it like datetime.now."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(autouse=True)
def mock_streamlit_session():
    original_session_state = getattr(st, "session_state", None)
    st.session_state = MockSessionState()

    yield st.session_state

    st.session_state.clear()
    if original_session_state is not None:
        st.session_state = original_session_state


@pytest.fixture
def clock():
    # Jan 7th: day-of-year 7, mid-morning local time
    return FakeClock(datetime(2026, 1, 7, 9, 30).astimezone())


@pytest.fixture
def catalog():
    return QuestionCatalog()


@pytest.fixture
def self_reflection(catalog):
    return catalog.category_at(3)


@pytest.fixture
def memory_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def repo(memory_store):
    return KeyValueTrackerRepository(memory_store)


@pytest.fixture
def make_tracker(catalog, repo, clock):
    """Builds and loads a fresh tracker over the shared store (a 'restart')."""

    def _make() -> DailyStateTracker:
        tracker = DailyStateTracker(catalog, repo, clock=clock)
        tracker.load()
        return tracker

    return _make


@pytest.fixture
def tracker(make_tracker):
    return make_tracker()


@pytest.fixture
def db_manager():
    manager = DatabaseManager(db_path=":memory:")
    yield manager
    manager.close()


@pytest.fixture
def sqlite_store(db_manager):
    return SQLiteKeyValueStore(db_manager)
