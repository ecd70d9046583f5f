"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import pytest

from studyplan.schedule.events import EventJournal, ScheduleEventBus
from studyplan.schedule.store import ScheduleStore

OWNER = "owner-1"
STRANGER = "stranger-1"
CANDIDATE = "Test Candidate"
START_TIMESTAMP = 1_700_000_000


class FakeClock:
    """Deterministic clock returning a settable Unix timestamp."""

    def __init__(self, now: int = START_TIMESTAMP):
        self.now = now
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return self.now


@pytest.fixture
def owner() -> str:
    return OWNER


@pytest.fixture
def stranger() -> str:
    return STRANGER


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def event_bus() -> ScheduleEventBus:
    return ScheduleEventBus()


@pytest.fixture
def journal(event_bus: ScheduleEventBus) -> EventJournal:
    journal = EventJournal()
    event_bus.subscribe(journal.record)
    return journal


@pytest.fixture
def store(clock: FakeClock, event_bus: ScheduleEventBus, journal: EventJournal) -> ScheduleStore:
    """Fresh store owned by OWNER; every published event lands in `journal`."""
    return ScheduleStore.create(OWNER, CANDIDATE, clock=clock, event_bus=event_bus)


@pytest.fixture
def exam_store(store: ScheduleStore) -> ScheduleStore:
    """Store with an exam authored on week 1, day 7."""
    store.set_exam_day(OWNER, 1, 7, "Week 1 Exam", ["Define osmosis", "Explain diffusion"])
    return store
