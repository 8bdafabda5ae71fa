"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cinebooker.api.errors import register_exception_handlers
from cinebooker.api.routes import (
    auth,
    bookings,
    checkin,
    dashboard,
    health,
    movies,
    profile,
    showtimes,
    theaters,
)
from cinebooker.config import settings
from cinebooker.tasks.release_holds import release_expired_holds

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: sweep expired seat holds on an interval
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        release_expired_holds,
        trigger=IntervalTrigger(minutes=settings.hold_sweep_minutes),
        id="release_expired_holds",
        name="Release expired seat holds",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started, expired holds swept every {settings.hold_sweep_minutes} min")

    yield

    # Shutdown: stop the scheduler gracefully
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")


# Create FastAPI app
app = FastAPI(
    title="CineBooker API",
    description="Movie ticket booking: catalog, seats, bookings and check-in",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(movies.router, prefix="/api", tags=["movies"])
app.include_router(theaters.router, prefix="/api", tags=["theaters"])
app.include_router(showtimes.router, prefix="/api", tags=["showtimes"])
app.include_router(bookings.router, prefix="/api", tags=["bookings"])
app.include_router(profile.router, prefix="/api", tags=["profile"])
app.include_router(checkin.router, prefix="/api", tags=["check-in"])
app.include_router(dashboard.router, prefix="/api", tags=["dashboard"])
