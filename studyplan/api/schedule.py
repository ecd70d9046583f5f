"""Schedule API endpoints.

Exposes the schedule store over HTTP. Calls into the store are serialized
with a single lock; the store itself assumes one caller at a time.
"""

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from studyplan.api.dependencies.caller import get_caller_id, get_event_journal, get_schedule_store, get_store_lock
from studyplan.api.schemas import (
    CompletionRequest,
    ExamDayRequest,
    ReadingDayRequest,
    ScheduleErrorDetail,
    ScheduleInfoResponse,
)
from studyplan.schedule.errors import ScheduleError
from studyplan.schedule.events import EventJournal, ScheduleEvent
from studyplan.schedule.projection import CompletionStats, DayView
from studyplan.schedule.store import ScheduleStore

router = APIRouter(prefix="/schedule", tags=["schedule"])

T = TypeVar("T")

ERROR_STATUS: dict[str, int] = {
    "NotOwner": status.HTTP_403_FORBIDDEN,
    "InvalidWeek": status.HTTP_400_BAD_REQUEST,
    "InvalidDay": status.HTTP_400_BAD_REQUEST,
    "DayNotSet": status.HTTP_404_NOT_FOUND,
    "DayAlreadySet": status.HTTP_409_CONFLICT,
    "ExamAlreadySet": status.HTTP_409_CONFLICT,
    "DayAlreadyCompleted": status.HTTP_409_CONFLICT,
    "ExamAlreadyStarted": status.HTTP_409_CONFLICT,
    "NotExamDay": status.HTTP_409_CONFLICT,
}


def error_to_http(error: ScheduleError) -> HTTPException:
    """Translate a store error into an HTTP error response.

    Args:
        error: Error raised by the store

    Returns:
        HTTPException whose detail carries the error code and message
    """
    detail = ScheduleErrorDetail(
        code=error.code,
        message=error.message,
        week_number=error.week_number,
        day_number=error.day_number,
    )
    return HTTPException(
        status_code=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=detail.model_dump(exclude_none=True),
    )


@contextmanager
def _serialized(lock: threading.Lock) -> Iterator[None]:
    with lock:
        try:
            yield
        except ScheduleError as e:
            raise error_to_http(e) from e


def _call(lock: threading.Lock, operation: Callable[[], T]) -> T:
    with _serialized(lock):
        return operation()


def _event_payload(event: ScheduleEvent) -> dict[str, Any]:
    return event.model_dump()


@router.get("", response_model=ScheduleInfoResponse)
def get_schedule_info(store: ScheduleStore = Depends(get_schedule_store)) -> ScheduleInfoResponse:
    return ScheduleInfoResponse(owner=store.owner, candidate_name=store.candidate_name)


@router.get("/stats", response_model=CompletionStats)
def get_completion_stats(
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> CompletionStats:
    return _call(lock, store.get_completion_stats)


@router.get("/events")
def list_events(journal: EventJournal = Depends(get_event_journal)) -> list[dict[str, Any]]:
    """List every event published since the service started, oldest first."""
    return [_event_payload(event) for event in journal.list_events()]


@router.get("/weeks/{week_number}", response_model=list[DayView])
def get_week(
    week_number: int,
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> list[DayView]:
    return _call(lock, lambda: store.get_week(week_number))


@router.get("/days/{week_number}/{day_number}", response_model=DayView)
def get_today(
    week_number: int,
    day_number: int,
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> DayView:
    """Get the projected view of one authored day.

    Raises:
        HTTPException: 400 on invalid coordinates, 404 if the day is unset
    """
    return _call(lock, lambda: store.get_today(week_number, day_number))


@router.put("/days/{week_number}/{day_number}/reading", status_code=status.HTTP_201_CREATED)
def set_reading_day(
    week_number: int,
    day_number: int,
    request: ReadingDayRequest,
    caller_id: str = Depends(get_caller_id),
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> dict[str, Any]:
    logger.info("Reading day requested", caller=caller_id, week_number=week_number, day_number=day_number)
    event = _call(
        lock,
        lambda: store.set_reading_day(
            caller_id,
            week_number,
            day_number,
            subject=request.subject,
            topics=request.topics,
            time=request.time,
        ),
    )
    return _event_payload(event)


@router.put("/days/{week_number}/{day_number}/exam", status_code=status.HTTP_201_CREATED)
def set_exam_day(
    week_number: int,
    day_number: int,
    request: ExamDayRequest,
    caller_id: str = Depends(get_caller_id),
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> dict[str, Any]:
    logger.info("Exam day requested", caller=caller_id, week_number=week_number, day_number=day_number)
    event = _call(
        lock,
        lambda: store.set_exam_day(
            caller_id,
            week_number,
            day_number,
            title=request.title,
            questions=request.questions,
        ),
    )
    return _event_payload(event)


@router.post("/days/{week_number}/{day_number}/start")
def start_exam_day(
    week_number: int,
    day_number: int,
    caller_id: str = Depends(get_caller_id),
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> dict[str, Any]:
    """Start a scheduled exam. Any identified caller may do this.

    The store does not restrict who starts an exam. This route still asks
    for X-Caller-Id, so that the start is logged against a caller. Any
    non-blank value is accepted, including one that is not the owner.
    Requests without the header get 401 before the store is touched.
    """
    event = _call(lock, lambda: store.start_exam_day(caller_id, week_number, day_number))
    return _event_payload(event)


@router.post("/days/{week_number}/{day_number}/complete")
def mark_day_completed(
    week_number: int,
    day_number: int,
    request: CompletionRequest,
    caller_id: str = Depends(get_caller_id),
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> dict[str, Any]:
    event = _call(
        lock,
        lambda: store.mark_day_completed(
            caller_id,
            week_number,
            day_number,
            grade=request.grade,
            ipfs_link=request.ipfs_link,
        ),
    )
    return _event_payload(event)


@router.post("/days/{week_number}/{day_number}/unmark")
def unmark_day_completed(
    week_number: int,
    day_number: int,
    caller_id: str = Depends(get_caller_id),
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> dict[str, Any]:
    event = _call(lock, lambda: store.unmark_day_completed(caller_id, week_number, day_number))
    return _event_payload(event)


@router.delete("/days/{week_number}/{day_number}")
def remove_day(
    week_number: int,
    day_number: int,
    caller_id: str = Depends(get_caller_id),
    store: ScheduleStore = Depends(get_schedule_store),
    lock: threading.Lock = Depends(get_store_lock),
) -> dict[str, Any]:
    event = _call(lock, lambda: store.remove_day(caller_id, week_number, day_number))
    return _event_payload(event)
