"""Read projection of stored days into external views.

Exam views follow a reveal-on-completion policy: before grading the view
shows questions and hides grade/link, after grading it shows grade/link and
hides questions.
"""

from collections.abc import Iterable

from pydantic import BaseModel, computed_field

from studyplan.schedule.types import (
    DAYS_PER_WEEK,
    WEEKS_PER_SCHEDULE,
    Day,
    DayKind,
    ExamDay,
    ReadingDay,
)

TOTAL_DAYS = WEEKS_PER_SCHEDULE * DAYS_PER_WEEK
# 10000 == 100.00%
PERCENTAGE_SCALE = 10000


class DayView(BaseModel):
    """External view of one grid cell.

    Fields of the inactive variant are returned empty/zero.
    """

    week_number: int
    day_number: int
    kind: DayKind
    is_completed: bool = False

    subject: str = ""
    topics: list[str] = []
    time: str = ""

    title: str = ""
    questions: list[str] = []
    grade: str = ""
    start_time: int = 0
    duration_seconds: int = 0
    ipfs_link: str = ""


class CompletionStats(BaseModel):
    """Completion totals over the whole grid.

    Attributes:
        completed_count: Number of completed cells
        total_count: Number of cells in the grid (always 42)
        percentage: Fixed-point percentage with two implied decimals
    """

    completed_count: int
    total_count: int = TOTAL_DAYS
    percentage: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentage_display(self) -> str:
        return f"{self.percentage // 100}.{self.percentage % 100:02d}%"


def project_day(day: Day, week_number: int, day_number: int) -> DayView:
    """Project a stored day into its external view.

    Args:
        day: Stored cell value
        week_number: Week coordinate of the cell
        day_number: Day coordinate of the cell

    Returns:
        DayView for the cell (kind "unset" for an unset cell)
    """
    if isinstance(day, ReadingDay):
        return DayView(
            week_number=week_number,
            day_number=day_number,
            kind=DayKind.READING,
            is_completed=day.is_completed,
            subject=day.subject,
            topics=list(day.topics),
            time=day.time,
        )

    if isinstance(day, ExamDay):
        view = DayView(
            week_number=week_number,
            day_number=day_number,
            kind=DayKind.EXAM,
            is_completed=day.is_completed,
            title=day.title,
            start_time=day.start_time,
            duration_seconds=day.duration_seconds,
        )
        if day.is_completed:
            return view.model_copy(update={"grade": day.grade, "ipfs_link": day.ipfs_link})
        return view.model_copy(update={"questions": list(day.questions)})

    return DayView(week_number=week_number, day_number=day_number, kind=DayKind.UNSET)


def compute_completion_stats(days: Iterable[Day]) -> CompletionStats:
    """Count completed cells and derive the fixed-point percentage.

    Args:
        days: Every cell of the grid

    Returns:
        CompletionStats with percentage = completed * 10000 // 42
    """
    completed = sum(1 for day in days if day.is_completed)
    return CompletionStats(
        completed_count=completed,
        percentage=completed * PERCENTAGE_SCALE // TOTAL_DAYS,
    )
