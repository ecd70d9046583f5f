"""Domain-specific errors for the schedule store.

Every error is a precondition violation: terminal, synchronous and never
retried. Each class carries a stable ``code`` so outer layers (HTTP, CLI)
can report it without depending on class names.
"""


class ScheduleError(Exception):
    """Base exception for all schedule store errors."""

    code: str = "ScheduleError"

    def __init__(
        self,
        message: str | None = None,
        *,
        week_number: int | None = None,
        day_number: int | None = None,
    ):
        self.week_number = week_number
        self.day_number = day_number
        self.message = message or self.code
        super().__init__(self.message)


class NotOwnerError(ScheduleError):
    """Raised when a non-owner calls an owner-only operation."""

    code = "NotOwner"

    def __init__(self, caller: str, message: str | None = None):
        self.caller = caller
        super().__init__(message or f"Caller {caller!r} is not the schedule owner")


class InvalidWeekError(ScheduleError):
    """Raised when a week number is outside 1..6."""

    code = "InvalidWeek"


class InvalidDayError(ScheduleError):
    """Raised when a day number is outside the operation's allowed range."""

    code = "InvalidDay"


class DayAlreadySetError(ScheduleError):
    """Raised when authoring a reading day over an existing cell."""

    code = "DayAlreadySet"


class ExamAlreadySetError(ScheduleError):
    """Raised when authoring an exam day over an existing cell."""

    code = "ExamAlreadySet"


class DayNotSetError(ScheduleError):
    """Raised when operating on an unset cell."""

    code = "DayNotSet"


class DayAlreadyCompletedError(ScheduleError):
    """Raised on double completion, or when starting a completed exam."""

    code = "DayAlreadyCompleted"


class ExamAlreadyStartedError(ScheduleError):
    """Raised when starting an exam whose start time is already recorded."""

    code = "ExamAlreadyStarted"


class NotExamDayError(ScheduleError):
    """Raised when starting a cell that is not an exam."""

    code = "NotExamDay"
