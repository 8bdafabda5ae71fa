"""Data access gateway: list/create/update over named record collections."""

import logging
from collections.abc import Mapping
from typing import Any, Generic, Literal, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinebooker.exceptions import GatewayError, NotFoundError
from cinebooker.models import Base, Booking, Movie, Review, Screen, SeatClaim, Showtime, Theater, User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

OrderBy = Mapping[str, Literal["asc", "desc"]]


class Collection(Generic[ModelT]):
    """
    A named record collection backed by one ORM model.

    Supports equality-only filtering, ordering and a row limit. Writes are
    flushed immediately so generated values are visible to the caller; the
    surrounding session decides when to commit.
    """

    def __init__(self, db: AsyncSession, model: type[ModelT], name: str) -> None:
        self.db = db
        self.model = model
        self.name = name

    def _column(self, field: str):
        column = getattr(self.model, field, None)
        if column is None:
            raise ValueError(f"{self.name} has no field {field!r}")
        return column

    async def list(
        self,
        where: Mapping[str, Any] | None = None,
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[ModelT]:
        """
        Fetch records matching every equality filter in ``where``.

        Args:
            where: Field name to required value
            order_by: Field name to "asc" or "desc", applied in order
            limit: Maximum number of records

        Returns:
            Matching records in the requested order
        """
        stmt = select(self.model)
        for field, value in (where or {}).items():
            stmt = stmt.where(self._column(field) == value)
        for field, direction in (order_by or {}).items():
            column = self._column(field)
            stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {self.name}: {e}", exc_info=True)
            raise GatewayError(f"Failed to list {self.name}") from e
        return list(result.scalars().all())

    async def count(self, where: Mapping[str, Any] | None = None) -> int:
        stmt = select(func.count()).select_from(self.model)
        for field, value in (where or {}).items():
            stmt = stmt.where(self._column(field) == value)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to count {self.name}: {e}", exc_info=True)
            raise GatewayError(f"Failed to count {self.name}") from e
        return int(result.scalar_one())

    async def first(self, where: Mapping[str, Any]) -> ModelT | None:
        records = await self.list(where=where, limit=1)
        return records[0] if records else None

    async def get(self, record_id: Any) -> ModelT:
        """Fetch one record by primary key or raise NotFoundError."""
        try:
            record = await self.db.get(self.model, record_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get {self.name} {record_id!r}: {e}", exc_info=True)
            raise GatewayError(f"Failed to get {self.name}") from e
        if record is None:
            raise NotFoundError(self.name, str(record_id))
        return record

    async def create(self, **fields: Any) -> ModelT:
        """
        Insert a new record.

        IntegrityError is propagated unchanged so callers can translate
        constraint violations into domain conflicts.
        """
        record = self.model(**fields)
        self.db.add(record)
        try:
            await self.db.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed to create {self.name}: {e}", exc_info=True)
            raise GatewayError(f"Failed to create {self.name}") from e
        return record

    async def update(self, record_id: Any, partial: Mapping[str, Any]) -> ModelT:
        """Apply ``partial`` to an existing record and return it."""
        record = await self.get(record_id)
        for field, value in partial.items():
            self._column(field)
            setattr(record, field, value)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update {self.name} {record_id!r}: {e}", exc_info=True)
            raise GatewayError(f"Failed to update {self.name}") from e
        return record

    async def update_if(
        self,
        record_id: Any,
        expected: Mapping[str, Any],
        partial: Mapping[str, Any],
    ) -> bool:
        """
        Compare-and-set: apply ``partial`` only if the record still matches ``expected``.

        Returns:
            True if a row was updated (any loaded instance is refreshed)
        """
        stmt = update(self.model).where(self._column("id") == record_id)
        for field, value in expected.items():
            stmt = stmt.where(self._column(field) == value)
        stmt = stmt.values(**partial).execution_options(synchronize_session=False)

        try:
            result = await self.db.execute(stmt)
            if result.rowcount != 1:
                return False
            await self.db.get(self.model, record_id, populate_existing=True)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update {self.name} {record_id!r}: {e}", exc_info=True)
            raise GatewayError(f"Failed to update {self.name}") from e
        return True


class Gateway:
    """All collections the application reads and writes, bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.users = Collection(db, User, "users")
        self.movies = Collection(db, Movie, "movies")
        self.theaters = Collection(db, Theater, "theaters")
        self.screens = Collection(db, Screen, "screens")
        self.showtimes = Collection(db, Showtime, "showtimes")
        self.bookings = Collection(db, Booking, "bookings")
        self.reviews = Collection(db, Review, "reviews")
        self.seat_claims = Collection(db, SeatClaim, "seat_claims")
