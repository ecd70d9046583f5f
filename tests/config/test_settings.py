"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from studyplan.config.settings import DEFAULT_CANDIDATE_NAME, Settings


def test_defaults(monkeypatch):
    for name in ("SCHEDULE_OWNER_ID", "SCHEDULE_CANDIDATE_NAME", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    config = Settings(_env_file=None)
    assert config.owner_id == "owner"
    assert config.candidate_name == DEFAULT_CANDIDATE_NAME
    assert config.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SCHEDULE_OWNER_ID", "registrar")
    monkeypatch.setenv("SCHEDULE_CANDIDATE_NAME", "ADA L")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    config = Settings(_env_file=None)
    assert config.owner_id == "registrar"
    assert config.candidate_name == "ADA L"
    assert config.log_level == "DEBUG"


def test_invalid_log_level_falls_back(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert Settings(_env_file=None).log_level == "INFO"


def test_blank_owner_rejected(monkeypatch):
    monkeypatch.setenv("SCHEDULE_OWNER_ID", "   ")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
