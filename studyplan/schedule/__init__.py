"""Schedule module - the single-candidate study/exam grid.

This module provides:
- The Day sum type (unset, reading, exam)
- The ScheduleStore state machine with owner-gated transitions
- Notification events and the event bus
- Read projections and completion statistics
"""

from studyplan.schedule.errors import (
    DayAlreadyCompletedError,
    DayAlreadySetError,
    DayNotSetError,
    ExamAlreadySetError,
    ExamAlreadyStartedError,
    InvalidDayError,
    InvalidWeekError,
    NotExamDayError,
    NotOwnerError,
    ScheduleError,
)
from studyplan.schedule.events import EventJournal, ScheduleEvent, ScheduleEventBus
from studyplan.schedule.projection import CompletionStats, DayView
from studyplan.schedule.store import ScheduleStore
from studyplan.schedule.types import (
    EXAM_DURATION_SECONDS,
    DayKind,
    ExamDay,
    ReadingDay,
    UnsetDay,
)

__all__ = [
    "EXAM_DURATION_SECONDS",
    "CompletionStats",
    "DayAlreadyCompletedError",
    "DayAlreadySetError",
    "DayKind",
    "DayNotSetError",
    "DayView",
    "EventJournal",
    "ExamAlreadySetError",
    "ExamAlreadyStartedError",
    "ExamDay",
    "InvalidDayError",
    "InvalidWeekError",
    "NotExamDayError",
    "NotOwnerError",
    "ReadingDay",
    "ScheduleError",
    "ScheduleEvent",
    "ScheduleEventBus",
    "ScheduleStore",
    "UnsetDay",
]
