"""Guards for schedule store operations.

Enforces, before any state is touched:
- Caller is the owner (owner-only operations)
- Week number within 1..6
- Day number within the operation's range
"""

from loguru import logger

from studyplan.schedule.errors import InvalidDayError, InvalidWeekError, NotOwnerError
from studyplan.schedule.types import WEEKS_PER_SCHEDULE


def require_owner(caller: str, owner: str, *, operation: str) -> None:
    """Require that caller is the schedule owner.

    Authorization is a plain identity comparison against the stored owner.

    Args:
        caller: Identity of the caller
        owner: Stored owner identity
        operation: Operation name (for logging)

    Raises:
        NotOwnerError: If caller differs from owner
    """
    if caller != owner:
        logger.warning(
            "Schedule ownership violation",
            operation=operation,
            caller=caller,
            event="ownership_violation",
        )
        raise NotOwnerError(caller)


def validate_week_number(week_number: int) -> None:
    """Validate week number is within 1..6.

    Raises:
        InvalidWeekError: If week is out of range
    """
    if week_number < 1 or week_number > WEEKS_PER_SCHEDULE:
        raise InvalidWeekError(
            f"Week must be between 1 and {WEEKS_PER_SCHEDULE}, got {week_number}",
            week_number=week_number,
        )


def validate_day_number(day_number: int, day_range: tuple[int, int]) -> None:
    """Validate day number is within an inclusive range.

    Args:
        day_number: Day number to check
        day_range: Inclusive (low, high) bounds allowed by the operation

    Raises:
        InvalidDayError: If day is out of range
    """
    low, high = day_range
    if day_number < low or day_number > high:
        if low == high:
            message = f"Day must be {low}, got {day_number}"
        else:
            message = f"Day must be between {low} and {high}, got {day_number}"
        raise InvalidDayError(message, day_number=day_number)


def validate_coordinates(week_number: int, day_number: int, day_range: tuple[int, int]) -> None:
    """Validate week then day.

    Raises:
        InvalidWeekError: If week is out of range
        InvalidDayError: If day is out of range
    """
    validate_week_number(week_number)
    validate_day_number(day_number, day_range)


def validate_text_list(values: object, field: str) -> tuple[str, ...]:
    """Validate an ordered list of text labels (topics, questions).

    A bare string is rejected rather than split into characters.

    Args:
        values: Candidate sequence of strings
        field: Field name (for the error message)

    Returns:
        The labels as a tuple

    Raises:
        TypeError: If values is a string or contains non-string items
    """
    if isinstance(values, str | bytes):
        raise TypeError(f"{field} must be a list of strings, not a single string")
    items = tuple(values)  # type: ignore[call-overload]
    if not all(isinstance(item, str) for item in items):
        raise TypeError(f"{field} must contain only strings")
    return items
