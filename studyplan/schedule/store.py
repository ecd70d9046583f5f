"""Schedule Store - the fixed 6x7 study/exam grid and its state machine.

Authorization policy:
- Authoring, grading, unmarking and removing days are owner-only
- Starting a scheduled exam is open to any caller

Every operation validates authorization, then coordinates, then the cell's
state, and only then replaces the cell. A rejected call leaves the grid
untouched and publishes nothing.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import replace
from datetime import UTC, datetime
from typing import TypeVar

from loguru import logger

from studyplan.config.settings import settings
from studyplan.schedule.errors import (
    DayAlreadyCompletedError,
    DayAlreadySetError,
    DayNotSetError,
    ExamAlreadySetError,
    ExamAlreadyStartedError,
    NotExamDayError,
    ScheduleError,
)
from studyplan.schedule.events import (
    DayCompleted,
    DayCompletedUnmarked,
    DayRemoved,
    ExamCompleted,
    ExamSet,
    ExamStarted,
    ScheduleEvent,
    ScheduleEventBus,
    SubjectSet,
)
from studyplan.schedule.projection import CompletionStats, DayView, compute_completion_stats, project_day
from studyplan.schedule.types import (
    ANY_DAY_RANGE,
    DAYS_PER_WEEK,
    EXAM_DAY_RANGE,
    EXAM_DURATION_SECONDS,
    READING_DAY_RANGE,
    UNSET_DAY,
    WEEKS_PER_SCHEDULE,
    Day,
    ExamDay,
    ReadingDay,
)
from studyplan.schedule.validators import (
    require_owner,
    validate_coordinates,
    validate_text_list,
    validate_week_number,
)

Clock = Callable[[], int]
EventT = TypeVar("EventT", bound=ScheduleEvent)


def utc_timestamp() -> int:
    """Current Unix time in whole seconds."""
    return int(datetime.now(UTC).timestamp())


class ScheduleStore:
    """Single-candidate schedule owned by one identity.

    The grid is pre-initialized: every (week, day) cell always exists and
    starts as UnsetDay. Coordinates are 1-based.
    """

    def __init__(
        self,
        owner: str,
        candidate_name: str,
        *,
        clock: Clock | None = None,
        event_bus: ScheduleEventBus | None = None,
    ) -> None:
        self._owner = owner
        self._candidate_name = candidate_name
        self._clock = clock or utc_timestamp
        self.event_bus = event_bus or ScheduleEventBus()
        self._grid: list[list[Day]] = [[UNSET_DAY] * DAYS_PER_WEEK for _ in range(WEEKS_PER_SCHEDULE)]

    @classmethod
    def create(
        cls,
        creator: str,
        candidate_name: str | None = None,
        *,
        clock: Clock | None = None,
        event_bus: ScheduleEventBus | None = None,
    ) -> "ScheduleStore":
        """Initialize a store owned by its creator.

        Args:
            creator: Identity creating the store; becomes the immutable owner
            candidate_name: Candidate label (defaults to the configured seed)
            clock: Optional source of Unix timestamps (defaults to wall clock)
            event_bus: Optional bus to publish events on

        Returns:
            A store with every cell unset
        """
        if candidate_name is None:
            candidate_name = settings.candidate_name

        store = cls(creator, candidate_name, clock=clock, event_bus=event_bus)
        logger.info("Schedule store created", owner=creator, candidate_name=candidate_name)
        return store

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def candidate_name(self) -> str:
        return self._candidate_name

    def _cell(self, week_number: int, day_number: int) -> Day:
        return self._grid[week_number - 1][day_number - 1]

    def _store(self, week_number: int, day_number: int, day: Day) -> None:
        self._grid[week_number - 1][day_number - 1] = day

    def _reject(self, error: ScheduleError, operation: str, week_number: int, day_number: int) -> ScheduleError:
        logger.warning(
            f"Schedule operation rejected: {error.code}",
            operation=operation,
            week_number=week_number,
            day_number=day_number,
        )
        error.week_number = week_number
        error.day_number = day_number
        return error

    def _publish(self, event: EventT) -> EventT:
        self.event_bus.publish(event)
        return event

    def iter_days(self) -> Iterator[tuple[int, int, Day]]:
        """Yield (week_number, day_number, day) for all 42 cells in order."""
        for week_index, week in enumerate(self._grid):
            for day_index, day in enumerate(week):
                yield week_index + 1, day_index + 1, day

    # Mutators

    def set_reading_day(
        self,
        caller: str,
        week_number: int,
        day_number: int,
        subject: str,
        topics: Sequence[str],
        time: str,
    ) -> SubjectSet:
        """Author a reading day on days 1..6.

        Raises:
            NotOwnerError: If caller is not the owner
            InvalidWeekError: If week is outside 1..6
            InvalidDayError: If day is outside 1..6
            DayAlreadySetError: If the cell is already authored
            TypeError: If topics is a bare string
        """
        require_owner(caller, self._owner, operation="set_reading_day")
        validate_coordinates(week_number, day_number, READING_DAY_RANGE)
        topic_labels = validate_text_list(topics, "topics")

        if self._cell(week_number, day_number).is_set:
            raise self._reject(DayAlreadySetError("Day is already set"), "set_reading_day", week_number, day_number)

        self._store(
            week_number,
            day_number,
            ReadingDay(subject=subject, topics=topic_labels, time=time),
        )
        return self._publish(SubjectSet(week_number=week_number, day_number=day_number))

    def set_exam_day(
        self,
        caller: str,
        week_number: int,
        day_number: int,
        title: str,
        questions: Sequence[str],
    ) -> ExamSet:
        """Author the exam day; only day 7 is accepted.

        Raises:
            NotOwnerError: If caller is not the owner
            InvalidWeekError: If week is outside 1..6
            InvalidDayError: If day is not 7
            ExamAlreadySetError: If the cell is already authored
            TypeError: If questions is a bare string
        """
        require_owner(caller, self._owner, operation="set_exam_day")
        validate_coordinates(week_number, day_number, EXAM_DAY_RANGE)
        question_texts = validate_text_list(questions, "questions")

        if self._cell(week_number, day_number).is_set:
            raise self._reject(ExamAlreadySetError("Exam is already set"), "set_exam_day", week_number, day_number)

        self._store(
            week_number,
            day_number,
            ExamDay(title=title, questions=question_texts),
        )
        return self._publish(ExamSet(week_number=week_number, day_number=day_number))

    def start_exam_day(self, caller: str, week_number: int, day_number: int) -> ExamStarted:
        """Record the start of a scheduled exam. Open to any caller.

        The start time is taken from the store's clock and set once per
        exam lifetime.

        Raises:
            InvalidWeekError: If week is outside 1..6
            InvalidDayError: If day is outside 1..7
            NotExamDayError: If the cell is not an exam
            ExamAlreadyStartedError: If the exam already has a start time
            DayAlreadyCompletedError: If the exam is already graded
        """
        validate_coordinates(week_number, day_number, ANY_DAY_RANGE)

        day = self._cell(week_number, day_number)
        if not isinstance(day, ExamDay):
            raise self._reject(NotExamDayError("Day is not an exam day"), "start_exam_day", week_number, day_number)
        if day.is_started:
            raise self._reject(
                ExamAlreadyStartedError("Exam has already started"), "start_exam_day", week_number, day_number
            )
        if day.is_completed:
            raise self._reject(
                DayAlreadyCompletedError("Exam is already completed"), "start_exam_day", week_number, day_number
            )

        start_time = self._clock()
        self._store(
            week_number,
            day_number,
            replace(day, start_time=start_time, duration_seconds=EXAM_DURATION_SECONDS),
        )
        logger.info("Exam started", caller=caller, week_number=week_number, day_number=day_number)
        return self._publish(ExamStarted(week_number=week_number, day_number=day_number, start_time=start_time))

    def mark_day_completed(
        self,
        caller: str,
        week_number: int,
        day_number: int,
        grade: str = "",
        ipfs_link: str = "",
    ) -> DayCompleted | ExamCompleted:
        """Mark a day finished; exams also record grade and artifact link.

        Reading days ignore grade and ipfs_link for storage; they are still
        carried on the DayCompleted event.

        Raises:
            NotOwnerError: If caller is not the owner
            InvalidWeekError: If week is outside 1..6
            InvalidDayError: If day is outside 1..7
            DayNotSetError: If the cell is unset
            DayAlreadyCompletedError: If the day is already completed
        """
        require_owner(caller, self._owner, operation="mark_day_completed")
        validate_coordinates(week_number, day_number, ANY_DAY_RANGE)

        day = self._cell(week_number, day_number)
        if not day.is_set:
            raise self._reject(DayNotSetError("Day is not set"), "mark_day_completed", week_number, day_number)
        if day.is_completed:
            raise self._reject(
                DayAlreadyCompletedError("Day is already completed"), "mark_day_completed", week_number, day_number
            )

        if isinstance(day, ExamDay):
            self._store(week_number, day_number, replace(day, is_completed=True, grade=grade, ipfs_link=ipfs_link))
            return self._publish(
                ExamCompleted(week_number=week_number, day_number=day_number, grade=grade, ipfs_link=ipfs_link)
            )

        self._store(week_number, day_number, replace(day, is_completed=True))
        return self._publish(
            DayCompleted(week_number=week_number, day_number=day_number, grade=grade, ipfs_link=ipfs_link)
        )

    def unmark_day_completed(self, caller: str, week_number: int, day_number: int) -> DayCompletedUnmarked:
        """Clear a day's completion flag. Unmarking an incomplete day is a no-op change.

        Raises:
            NotOwnerError: If caller is not the owner
            InvalidWeekError: If week is outside 1..6
            InvalidDayError: If day is outside 1..7
            DayNotSetError: If the cell is unset
        """
        require_owner(caller, self._owner, operation="unmark_day_completed")
        validate_coordinates(week_number, day_number, ANY_DAY_RANGE)

        day = self._cell(week_number, day_number)
        if not day.is_set:
            raise self._reject(DayNotSetError("Day is not set"), "unmark_day_completed", week_number, day_number)

        self._store(week_number, day_number, replace(day, is_completed=False))
        return self._publish(DayCompletedUnmarked(week_number=week_number, day_number=day_number))

    def remove_day(self, caller: str, week_number: int, day_number: int) -> DayRemoved:
        """Reset a cell to unset so it can be authored again.

        Raises:
            NotOwnerError: If caller is not the owner
            InvalidWeekError: If week is outside 1..6
            InvalidDayError: If day is outside 1..7
            DayNotSetError: If the cell is already unset
        """
        require_owner(caller, self._owner, operation="remove_day")
        validate_coordinates(week_number, day_number, ANY_DAY_RANGE)

        if not self._cell(week_number, day_number).is_set:
            raise self._reject(DayNotSetError("Day is not set"), "remove_day", week_number, day_number)

        self._store(week_number, day_number, UNSET_DAY)
        return self._publish(DayRemoved(week_number=week_number, day_number=day_number))

    # Queries

    def get_today(self, week_number: int, day_number: int) -> DayView:
        """Project one authored cell.

        Raises:
            InvalidWeekError: If week is outside 1..6
            InvalidDayError: If day is outside 1..7
            DayNotSetError: If the cell is unset
        """
        validate_coordinates(week_number, day_number, ANY_DAY_RANGE)

        day = self._cell(week_number, day_number)
        if not day.is_set:
            raise DayNotSetError("Day is not set", week_number=week_number, day_number=day_number)
        return project_day(day, week_number, day_number)

    def get_week(self, week_number: int) -> list[DayView]:
        """Project all seven cells of a week, unset cells included."""
        validate_week_number(week_number)
        return [project_day(day, week_number, index + 1) for index, day in enumerate(self._grid[week_number - 1])]

    def get_completion_stats(self) -> CompletionStats:
        return compute_completion_stats(day for _, _, day in self.iter_days())
