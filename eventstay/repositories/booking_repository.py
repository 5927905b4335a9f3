"""Data access for bookings, rooms and the registration records they depend on."""

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventstay.config import settings
from eventstay.core.exceptions import DataUnavailableError, ForbiddenError
from eventstay.domain.booking_eligibility import ALREADY_BOOKED
from eventstay.models.booking import Booking
from eventstay.models.enrollment import Enrollment
from eventstay.models.hotel import Room
from eventstay.models.payment import Payment
from eventstay.models.ticket import Ticket

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def bounded(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Run a repository call under the configured timeout.

    Timeouts and database driver errors surface as ``DataUnavailableError``.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        repository = args[0]
        try:
            async with asyncio.timeout(repository.timeout):
                return await func(*args, **kwargs)
        except TimeoutError as e:
            logger.error(f"{func.__name__} timed out after {repository.timeout}s")
            raise DataUnavailableError("operation timed out") from e
        except SQLAlchemyError as e:
            logger.error(f"{func.__name__} failed: {e}")
            raise DataUnavailableError() from e

    return wrapper


class BookingRepository:
    """Repository bound to one session (and so to one transaction)."""

    def __init__(self, db: AsyncSession, timeout: float | None = None) -> None:
        self.db = db
        self.timeout = timeout if timeout is not None else settings.db_operation_timeout_seconds

    # Bookings

    @bounded
    async def find_by_user_id(self, user_id: int) -> Booking | None:
        result = await self.db.execute(
            select(Booking)
            .options(selectinload(Booking.room))
            .where(Booking.user_id == user_id)
            .order_by(Booking.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @bounded
    async def find_by_booking_id(self, booking_id: int) -> Booking | None:
        return await self._load_booking(booking_id)

    @bounded
    async def create(self, user_id: int, room_id: int) -> Booking:
        """Insert a booking. Room capacity is left to the caller."""
        booking = Booking(user_id=user_id, room_id=room_id)
        self.db.add(booking)
        try:
            await self.db.flush()
        except IntegrityError as e:
            # Unique user_id lost a race with a concurrent request
            raise ForbiddenError(ALREADY_BOOKED) from e
        return booking

    @bounded
    async def update(self, booking_id: int, room_id: int) -> Booking:
        """Point a booking at another room. Room capacity is left to the caller."""
        await self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .values(room_id=room_id)
            .execution_options(synchronize_session=False)
        )
        booking = await self._load_booking(booking_id)
        if booking is None:
            raise DataUnavailableError(f"booking {booking_id} vanished during update")
        return booking

    # Rooms

    @bounded
    async def find_room(self, room_id: int, *, lock: bool = False) -> Room | None:
        """Fetch a room, optionally holding a row lock until the transaction ends."""
        query = (
            select(Room)
            .where(Room.id == room_id)
            .execution_options(populate_existing=True)
        )
        if lock:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    @bounded
    async def lock_rooms(self, room_ids: list[int]) -> list[Room]:
        """Row-lock several rooms, always in ascending id order."""
        result = await self.db.execute(
            select(Room)
            .where(Room.id.in_(room_ids))
            .order_by(Room.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    @bounded
    async def increase_room_capacity(self, room_id: int) -> Room:
        await self.db.execute(
            update(Room)
            .where(Room.id == room_id)
            .values(capacity=Room.capacity + 1)
            .execution_options(synchronize_session=False)
        )
        room = await self._load_room(room_id)
        if room is None:
            raise DataUnavailableError(f"room {room_id} vanished during update")
        return room

    @bounded
    async def decrease_room_capacity(self, room_id: int) -> Room | None:
        """Take one slot from a room in a single conditional UPDATE.

        Returns None when the room had no free slot left, so check and
        decrement cannot interleave with another transaction.
        """
        result = await self.db.execute(
            update(Room)
            .where(Room.id == room_id, Room.capacity > 0)
            .values(capacity=Room.capacity - 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self._load_room(room_id)

    # Registration lookups (read-only)

    @bounded
    async def find_enrollment_by_user_id(self, user_id: int) -> Enrollment | None:
        result = await self.db.execute(
            select(Enrollment).where(Enrollment.user_id == user_id)
        )
        return result.scalar_one_or_none()

    @bounded
    async def find_ticket_by_enrollment_id(self, enrollment_id: int) -> Ticket | None:
        result = await self.db.execute(
            select(Ticket)
            .options(selectinload(Ticket.ticket_type))
            .where(Ticket.enrollment_id == enrollment_id)
        )
        return result.scalar_one_or_none()

    @bounded
    async def find_payment_by_ticket_id(self, ticket_id: int) -> Payment | None:
        result = await self.db.execute(
            select(Payment).where(Payment.ticket_id == ticket_id).limit(1)
        )
        return result.scalar_one_or_none()

    @bounded
    async def commit(self) -> None:
        """Commit the transaction this repository works in."""
        await self.db.commit()

    async def _load_booking(self, booking_id: int) -> Booking | None:
        result = await self.db.execute(
            select(Booking)
            .options(selectinload(Booking.room))
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _load_room(self, room_id: int) -> Room | None:
        result = await self.db.execute(
            select(Room)
            .where(Room.id == room_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
