"""Tests for schedule guards."""

import pytest

from studyplan.schedule.errors import InvalidDayError, InvalidWeekError, NotOwnerError
from studyplan.schedule.validators import (
    require_owner,
    validate_coordinates,
    validate_day_number,
    validate_text_list,
)


def test_owner_passes():
    require_owner("alice", "alice", operation="remove_day")


def test_non_owner_carries_caller():
    with pytest.raises(NotOwnerError) as exc_info:
        require_owner("mallory", "alice", operation="remove_day")
    assert exc_info.value.caller == "mallory"
    assert exc_info.value.code == "NotOwner"


@pytest.mark.parametrize("week_number", [1, 6])
def test_week_bounds_inclusive(week_number):
    validate_coordinates(week_number, 1, (1, 7))


def test_invalid_week_carries_coordinate():
    with pytest.raises(InvalidWeekError, match="between 1 and 6") as exc_info:
        validate_coordinates(7, 1, (1, 7))
    assert exc_info.value.week_number == 7


def test_invalid_day_message_for_range():
    with pytest.raises(InvalidDayError, match="between 1 and 6, got 7"):
        validate_day_number(7, (1, 6))


def test_text_list_accepts_any_sequence_of_strings():
    assert validate_text_list(["Cells", "Genes"], "topics") == ("Cells", "Genes")
    assert validate_text_list(("Q1",), "questions") == ("Q1",)


def test_text_list_rejects_non_string_items():
    with pytest.raises(TypeError, match="only strings"):
        validate_text_list(["Cells", 3], "topics")
