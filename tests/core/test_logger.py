"""Tests for logger setup."""

import json

from loguru import logger

from studyplan.core.logger import setup_logger
from studyplan.schedule.events import ScheduleEventBus, SubjectSet


def test_file_sink_keeps_event_fields(tmp_path):
    log_file = tmp_path / "logs" / "schedule.jsonl"
    setup_logger(level="INFO", log_file=str(log_file))
    try:
        ScheduleEventBus().publish(SubjectSet(week_number=2, day_number=5))
    finally:
        # Closes the file sink so everything is flushed
        logger.remove()
        setup_logger(level="INFO")

    records = [json.loads(line)["record"] for line in log_file.read_text(encoding="utf-8").splitlines()]
    event_records = [r for r in records if r["message"] == "[SCHEDULE_EVENT] SubjectSet"]
    assert len(event_records) == 1
    assert event_records[0]["extra"] == {"week_number": 2, "day_number": 5}


def test_level_filters_file_sink(tmp_path):
    log_file = tmp_path / "schedule.jsonl"
    setup_logger(level="WARNING", log_file=str(log_file))
    try:
        logger.info("quiet")
        logger.warning("loud")
    finally:
        logger.remove()
        setup_logger(level="INFO")

    messages = [json.loads(line)["record"]["message"] for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert messages == ["loud"]
