"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass
from datetime import time

import pytest
from fastapi import FastAPI
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cinebooker.api.deps import get_auth_state
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
from cinebooker.database import get_db
from cinebooker.models import Base, Movie, Screen, Showtime, Theater, User
from cinebooker.models.base import utcnow
from cinebooker.models.movie import COMING_SOON, NOW_SHOWING
from cinebooker.models.theater import APPROVED, PENDING
from cinebooker.roles import Role
from cinebooker.services.gateway import Gateway
from cinebooker.services.identity import AuthState, Principal

SEAT_LAYOUT = {"rows": 5, "seatsPerRow": 8, "premium": [5], "gold": [3, 4], "regular": [1, 2]}


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with working SAVEPOINT support."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session


@pytest.fixture
def gateway(db: AsyncSession) -> Gateway:
    return Gateway(db)


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------


@dataclass
class Catalog:
    theater: Theater
    pending_theater: Theater
    screen: Screen
    movie: Movie
    upcoming_movie: Movie
    showtime: Showtime
    customer: User
    other_customer: User
    theater_admin: User
    platform_owner: User


@pytest.fixture
async def catalog(db: AsyncSession) -> Catalog:
    """One approved theater with a 5x8 screen showing one movie today, plus one user per role."""
    today = utcnow().date()
    theater = Theater(id="regal-central", name="Regal Central", location="12 Park Street", city="Mumbai", status=APPROVED)
    pending_theater = Theater(id="lotus-talkies", name="Lotus Talkies", location="4 Lake Road", city="Pune", status=PENDING)
    screen = Screen(id="regal-central-1", theater_id=theater.id, name="Screen 1", format="IMAX", seat_layout=SEAT_LAYOUT)
    movie = Movie(id="the-last-reel", title="The Last Reel", language="English", genre="Drama", status=NOW_SHOWING)
    upcoming_movie = Movie(id="orbit-zero", title="Orbit Zero", language="Hindi", genre="Sci-Fi", status=COMING_SOON)
    showtime = Showtime(
        id="show-1",
        movie_id=movie.id,
        theater_id=theater.id,
        screen_id=screen.id,
        show_date=today,
        show_time=time(18, 30),
        price_regular=100.0,
        price_gold=150.0,
        price_platinum=250.0,
        available_seats=40,
        total_seats=40,
    )
    customer = User(id="user-1", email="asha@example.com", name="Asha", role=Role.CUSTOMER.value)
    other_customer = User(id="user-2", email="ravi@example.com", name="Ravi", role=Role.CUSTOMER.value)
    theater_admin = User(
        id="staff-1",
        email="manager@regal.example.com",
        name="Manager",
        role=Role.THEATER_ADMIN.value,
        theater_id=theater.id,
    )
    platform_owner = User(id="owner-1", email="owner@example.com", name="Owner", role=Role.PLATFORM_OWNER.value)

    db.add_all(
        [
            theater,
            pending_theater,
            screen,
            movie,
            upcoming_movie,
            showtime,
            customer,
            other_customer,
            theater_admin,
            platform_owner,
        ]
    )
    await db.flush()
    return Catalog(
        theater=theater,
        pending_theater=pending_theater,
        screen=screen,
        movie=movie,
        upcoming_movie=upcoming_movie,
        showtime=showtime,
        customer=customer,
        other_customer=other_customer,
        theater_admin=theater_admin,
        platform_owner=platform_owner,
    )


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------


@pytest.fixture
def test_app(db: AsyncSession) -> FastAPI:
    """Minimal FastAPI app without the APScheduler lifespan, bound to the test session."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health.router)
    app.include_router(auth.router)
    for module in (movies, theaters, showtimes, bookings, profile, checkin, dashboard):
        app.include_router(module.router, prefix="/api")

    async def override_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_db
    return app


@pytest.fixture
def sign_in(test_app: FastAPI) -> Callable[[User | AuthState | None], None]:
    """Make every request of ``test_app`` carry the given user, auth state, or no session."""

    def _sign_in(who: User | AuthState | None) -> None:
        if isinstance(who, User):
            state = AuthState(user=Principal(id=who.id, email=who.email, display_name=who.name))
        elif who is None:
            state = AuthState(user=None)
        else:
            state = who

        async def override() -> AuthState:
            return state

        test_app.dependency_overrides[get_auth_state] = override

    return _sign_in
