"""Seed script to populate demo theaters, screens, movies and showtimes."""

import asyncio
from datetime import date, time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinebooker.database import AsyncSessionLocal
from cinebooker.models import Movie, Screen, Showtime, Theater
from cinebooker.models.movie import COMING_SOON, NOW_SHOWING
from cinebooker.models.theater import APPROVED, PENDING
from cinebooker.services.seat_planner import BOOKING_WINDOW_DAYS, SeatLayout

THEATERS = [
    {"id": "pvr-phoenix", "name": "PVR Phoenix", "location": "Phoenix Marketcity, Whitefield", "city": "Bengaluru", "status": APPROVED},
    {"id": "inox-forum", "name": "INOX Forum", "location": "Forum Mall, Koramangala", "city": "Bengaluru", "status": APPROVED},
    {"id": "cinepolis-andheri", "name": "Cinepolis Andheri", "location": "Fun Republic, Andheri West", "city": "Mumbai", "status": APPROVED},
    {"id": "galaxy-bandra", "name": "Galaxy Bandra", "location": "Hill Road, Bandra West", "city": "Mumbai", "status": PENDING},
]

STANDARD_LAYOUT = {"rows": 10, "seatsPerRow": 12, "premium": [9, 10], "gold": [6, 7, 8], "regular": [1, 2, 3, 4, 5]}
COMPACT_LAYOUT = {"rows": 6, "seatsPerRow": 10, "premium": [6], "gold": [4, 5], "regular": [1, 2, 3]}

SCREENS = [
    {"id": "pvr-phoenix-1", "theater_id": "pvr-phoenix", "name": "Audi 1", "format": "IMAX", "seat_layout": STANDARD_LAYOUT},
    {"id": "pvr-phoenix-2", "theater_id": "pvr-phoenix", "name": "Audi 2", "format": "2D", "seat_layout": COMPACT_LAYOUT},
    {"id": "inox-forum-1", "theater_id": "inox-forum", "name": "Screen 1", "format": "3D", "seat_layout": STANDARD_LAYOUT},
    {"id": "cinepolis-andheri-1", "theater_id": "cinepolis-andheri", "name": "Screen 1", "format": "2D", "seat_layout": STANDARD_LAYOUT},
]

MOVIES = [
    {
        "id": "the-last-reel",
        "title": "The Last Reel",
        "description": "A projectionist races to save the town's last single-screen cinema.",
        "duration": 128,
        "language": "English",
        "genre": "Drama",
        "rating": 8.1,
        "status": NOW_SHOWING,
        "cast_crew": {"director": "Asha Menon", "cast": ["Ravi Kapoor", "Leela Iyer"]},
    },
    {
        "id": "monsoon-heist",
        "title": "Monsoon Heist",
        "description": "Four strangers plan a robbery during the city's worst flood.",
        "duration": 142,
        "language": "Hindi",
        "genre": "Thriller",
        "rating": 7.6,
        "status": NOW_SHOWING,
        "cast_crew": {"director": "Kabir Sethi", "cast": ["Arjun Rao", "Meera Das"]},
    },
    {
        "id": "paper-kites",
        "title": "Paper Kites",
        "description": "Two siblings enter the city's kite-flying championship.",
        "duration": 104,
        "language": "Tamil",
        "genre": "Family",
        "rating": 7.9,
        "status": NOW_SHOWING,
    },
    {
        "id": "orbit-zero",
        "title": "Orbit Zero",
        "description": "A stranded crew improvises a way home from a dead station.",
        "duration": 131,
        "language": "English",
        "genre": "Sci-Fi",
        "status": COMING_SOON,
    },
]

SHOW_TIMES = [time(10, 30), time(14, 0), time(18, 15), time(21, 45)]
PRICES = {"price_regular": 180.0, "price_gold": 250.0, "price_platinum": 400.0}


def build_showtimes(start: date) -> list[dict]:
    """One showtime per screen and slot for each day of the booking window."""
    now_showing = [movie["id"] for movie in MOVIES if movie["status"] == NOW_SHOWING]
    showtimes: list[dict] = []
    for offset in range(BOOKING_WINDOW_DAYS):
        show_date = start + timedelta(days=offset)
        for screen_index, screen in enumerate(SCREENS):
            capacity = SeatLayout.from_descriptor(screen["seat_layout"]).capacity
            for slot_index, show_time in enumerate(SHOW_TIMES):
                movie_id = now_showing[(screen_index + slot_index) % len(now_showing)]
                showtimes.append(
                    {
                        "id": f"{screen['id']}-{show_date:%Y%m%d}-{show_time:%H%M}",
                        "movie_id": movie_id,
                        "theater_id": screen["theater_id"],
                        "screen_id": screen["id"],
                        "show_date": show_date,
                        "show_time": show_time,
                        "available_seats": capacity,
                        "total_seats": capacity,
                        **PRICES,
                    }
                )
    return showtimes


async def _add_missing(session: AsyncSession, model, rows: list[dict]) -> int:
    added = 0
    for row in rows:
        existing = await session.execute(select(model.id).where(model.id == row["id"]))
        if existing.scalar_one_or_none():
            continue
        session.add(model(**row))
        added += 1
    await session.flush()
    return added


async def seed_catalog_in(session: AsyncSession, start: date | None = None) -> dict[str, int]:
    """Insert demo records that do not exist yet; returns how many were added per table."""
    start = start or date.today()
    return {
        "theaters": await _add_missing(session, Theater, THEATERS),
        "screens": await _add_missing(session, Screen, SCREENS),
        "movies": await _add_missing(session, Movie, MOVIES),
        "showtimes": await _add_missing(session, Showtime, build_showtimes(start)),
    }


async def seed_catalog() -> dict[str, int]:
    """Seed the database with the demo catalog."""
    async with AsyncSessionLocal() as session:
        added = await seed_catalog_in(session)
        await session.commit()

    for table, count in added.items():
        print(f"Added {count} {table}")
    print("Catalog seeding complete")
    return added


if __name__ == "__main__":
    asyncio.run(seed_catalog())
