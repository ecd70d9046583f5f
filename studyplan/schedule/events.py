"""Schedule notification events and their delivery.

Every successful mutation publishes exactly one event. Events are
structured and immutable; publishing logs them and fans them out to
subscribed handlers.
"""

from collections.abc import Callable
from typing import Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict

ScheduleEventName = Literal[
    "SubjectSet",
    "ExamSet",
    "ExamStarted",
    "DayCompleted",
    "ExamCompleted",
    "DayCompletedUnmarked",
    "DayRemoved",
]


class ScheduleEvent(BaseModel):
    """Base notification carrying the affected coordinates.

    Attributes:
        event: Event name observers branch on
        week_number: Week of the affected cell (1-based)
        day_number: Day of the affected cell (1-based)
    """

    model_config = ConfigDict(frozen=True)

    event: ScheduleEventName
    week_number: int
    day_number: int


class SubjectSet(ScheduleEvent):
    event: Literal["SubjectSet"] = "SubjectSet"


class ExamSet(ScheduleEvent):
    event: Literal["ExamSet"] = "ExamSet"


class ExamStarted(ScheduleEvent):
    event: Literal["ExamStarted"] = "ExamStarted"
    start_time: int


class DayCompleted(ScheduleEvent):
    event: Literal["DayCompleted"] = "DayCompleted"
    grade: str = ""
    ipfs_link: str = ""


class ExamCompleted(ScheduleEvent):
    event: Literal["ExamCompleted"] = "ExamCompleted"
    grade: str
    ipfs_link: str


class DayCompletedUnmarked(ScheduleEvent):
    event: Literal["DayCompletedUnmarked"] = "DayCompletedUnmarked"


class DayRemoved(ScheduleEvent):
    event: Literal["DayRemoved"] = "DayRemoved"


EventHandler = Callable[[ScheduleEvent], None]


class ScheduleEventBus:
    """Synchronous fan-out of schedule events to subscribers.

    Handlers run in subscription order on the publishing thread. A failing
    handler is logged and skipped; the mutation that produced the event
    has already happened and is not undone.
    """

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def publish(self, event: ScheduleEvent) -> None:
        """Log an event and deliver it to every handler.

        Args:
            event: Event produced by a successful mutation
        """
        logger.info(
            f"[SCHEDULE_EVENT] {event.event}",
            **event.model_dump(exclude={"event"}),
        )
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Schedule event handler failed",
                    event_name=event.event,
                    handler=getattr(handler, "__name__", repr(handler)),
                )


class EventJournal:
    """Append-only in-memory record of published events.

    Subscribe ``journal.record`` to a bus to keep a history observers can
    query after the fact.
    """

    def __init__(self) -> None:
        self._events: list[ScheduleEvent] = []

    def record(self, event: ScheduleEvent) -> None:
        self._events.append(event)

    def list_events(self) -> list[ScheduleEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
