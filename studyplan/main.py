import asyncio
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from studyplan.api.schedule import router as schedule_router
from studyplan.config.settings import settings
from studyplan.core.logger import setup_logger
from studyplan.schedule.events import EventJournal, ScheduleEventBus
from studyplan.schedule.store import ScheduleStore


def create_app(store: ScheduleStore | None = None) -> FastAPI:
    """Build the FastAPI application around a schedule store.

    The store is created by the configured owner identity unless one is
    passed in. While the app is running, every published event is recorded
    in an in-memory journal served at GET /schedule/events. The journal is
    subscribed on startup and unsubscribed on shutdown, so several apps can
    be built over the same store without piling up handlers.

    Args:
        store: Optional pre-built store (tests, embedding)

    Returns:
        Configured FastAPI application
    """
    if store is None:
        store = ScheduleStore.create(settings.owner_id, settings.candidate_name, event_bus=ScheduleEventBus())

    journal = EventJournal()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Attach the event journal to the store for the app's lifetime.

        Note: FastAPI requires async for lifespan context manager,
        even if no await operations are used.
        """
        store.event_bus.subscribe(journal.record)
        logger.info("Schedule API ready", owner=store.owner, candidate_name=store.candidate_name)

        await asyncio.sleep(0)
        yield

        store.event_bus.unsubscribe(journal.record)
        logger.info("Schedule API stopped", recorded_events=len(journal))

    application = FastAPI(title="Study Schedule", lifespan=lifespan)
    application.state.schedule_store = store
    application.state.schedule_lock = threading.Lock()
    application.state.event_journal = journal
    application.include_router(schedule_router)
    return application


setup_logger(level=settings.log_level, log_file=settings.log_file)

app = create_app()
