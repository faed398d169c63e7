import logging
from contextlib import asynccontextmanager

from anyio import to_thread
from anyio.from_thread import BlockingPortal
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.use_cases.notifications import (
    get_notification_dispatcher,
    seed_notification_settings,
)
from app.config import get_settings
from app.infrastructure.database import SessionLocal, engine, initialize_database
from app.infrastructure.notifications import realtime_event_publisher
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare tables, settings and the realtime portal; release them on shutdown."""

    initialize_database()
    session = SessionLocal()
    try:
        seed_notification_settings(session)
    finally:
        session.close()

    async with BlockingPortal() as portal:
        # Worker threads push websocket signals onto this loop through the portal.
        realtime_event_publisher.attach_portal(portal)
        try:
            yield
        finally:
            realtime_event_publisher.attach_portal(None)
            # Queued fan-out drains off the event loop thread.
            await to_thread.run_sync(get_notification_dispatcher().runner.shutdown)

    engine.dispose()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Grievance Notifications API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
