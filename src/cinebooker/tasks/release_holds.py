"""Scheduled job that deletes expired seat holds."""

import logging

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinebooker.database import AsyncSessionLocal
from cinebooker.models import SeatClaim
from cinebooker.models.base import utcnow

logger = logging.getLogger(__name__)


async def release_expired_holds_in(db: AsyncSession) -> int:
    """Delete holds past their expiry in one session and return how many went."""
    stmt = (
        delete(SeatClaim)
        .where(SeatClaim.booking_id.is_(None), SeatClaim.expires_at <= utcnow())
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount or 0


async def release_expired_holds() -> None:
    """Sweep expired holds across all showtimes.

    Creates its own DB session so it can be called from the scheduler
    without depending on a request context.
    """
    async with AsyncSessionLocal() as db:
        try:
            released = await release_expired_holds_in(db)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error releasing expired seat holds: {e}", exc_info=True)
            await db.rollback()
            return

    if released:
        logger.info(f"Released {released} expired seat holds")
