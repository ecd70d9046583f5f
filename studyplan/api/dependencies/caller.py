"""FastAPI dependencies for caller identity and store access.

The hosting layer only carries identity; it does not verify it. The store
compares the carried identity with its owner.
"""

from __future__ import annotations

import threading

from fastapi import Header, HTTPException, Request, status
from loguru import logger

from studyplan.schedule.events import EventJournal
from studyplan.schedule.store import ScheduleStore

CALLER_HEADER = "X-Caller-Id"


def get_caller_id(caller_id: str | None = Header(None, alias=CALLER_HEADER)) -> str:
    """FastAPI dependency to read the caller identity header.

    Used by every mutating route, the open exam start included. That route
    accepts any identity; only the header itself is required.

    Args:
        caller_id: Value of the X-Caller-Id header

    Returns:
        Caller identity

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if not caller_id or not caller_id.strip():
        logger.warning("Request without caller identity", header=CALLER_HEADER)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "MissingCaller", "message": f"{CALLER_HEADER} header is required"},
        )
    return caller_id


def get_schedule_store(request: Request) -> ScheduleStore:
    return request.app.state.schedule_store


def get_store_lock(request: Request) -> threading.Lock:
    return request.app.state.schedule_lock


def get_event_journal(request: Request) -> EventJournal:
    return request.app.state.event_journal
