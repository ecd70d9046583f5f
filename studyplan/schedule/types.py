"""Day sum type for the schedule grid.

A cell is exactly one of:
- UnsetDay: the zero value every cell starts as
- ReadingDay: a study slot (subject, topics, time)
- ExamDay: a timed assessment (title, questions, grade, timing, artifact link)

Days are immutable. The store replaces a cell with a new value on every
transition, so fields of one variant can never leak into another.
"""

from dataclasses import dataclass
from enum import StrEnum

WEEKS_PER_SCHEDULE = 6
DAYS_PER_WEEK = 7
READING_DAY_RANGE = (1, 6)
EXAM_DAY_RANGE = (7, 7)
ANY_DAY_RANGE = (1, DAYS_PER_WEEK)

# 180 minutes, fixed at creation and reaffirmed on start
EXAM_DURATION_SECONDS = 10800


class DayKind(StrEnum):
    UNSET = "unset"
    READING = "reading"
    EXAM = "exam"


@dataclass(frozen=True)
class UnsetDay:
    kind: DayKind = DayKind.UNSET
    is_completed: bool = False

    @property
    def is_set(self) -> bool:
        return False


@dataclass(frozen=True)
class ReadingDay:
    """An authored study slot.

    Attributes:
        subject: Subject studied that day
        topics: Ordered topic labels
        time: Free-form schedule label (e.g. "09:00-12:00")
        is_completed: Whether the owner marked the day finished
    """

    subject: str
    topics: tuple[str, ...]
    time: str
    is_completed: bool = False
    kind: DayKind = DayKind.READING

    @property
    def is_set(self) -> bool:
        return True


@dataclass(frozen=True)
class ExamDay:
    """An authored exam slot.

    Attributes:
        title: Exam title
        questions: Ordered question texts
        grade: Grade recorded on completion ("" until then)
        start_time: Unix timestamp in seconds, 0 means not started
        duration_seconds: Always EXAM_DURATION_SECONDS
        ipfs_link: External artifact reference recorded on completion
        is_completed: Whether the owner graded the exam
    """

    title: str
    questions: tuple[str, ...]
    grade: str = ""
    start_time: int = 0
    duration_seconds: int = EXAM_DURATION_SECONDS
    ipfs_link: str = ""
    is_completed: bool = False
    kind: DayKind = DayKind.EXAM

    @property
    def is_set(self) -> bool:
        return True

    @property
    def is_started(self) -> bool:
        return self.start_time > 0


Day = UnsetDay | ReadingDay | ExamDay

UNSET_DAY = UnsetDay()
