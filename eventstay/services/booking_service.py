"""Hotel room booking service.

Owns the eligibility policy and the order in which the repository is called.
Every check runs before the first capacity mutation. A mutating call commits
its transaction before it returns.
"""

import logging

from eventstay.core.exceptions import ForbiddenError, NotFoundError
from eventstay.domain.booking_eligibility import (
    ROOM_FULL,
    assert_booking_owner,
    assert_no_existing_booking,
    assert_payment_on_file,
    assert_room_has_vacancy,
    assert_ticket_allows_hotel,
)
from eventstay.models.booking import Booking
from eventstay.models.hotel import Room
from eventstay.repositories.booking_repository import BookingRepository

logger = logging.getLogger(__name__)


class BookingService:
    """Reserve, move and read a participant's hotel room."""

    def __init__(self, repository: BookingRepository) -> None:
        self.repository = repository

    async def find_booking(self, user_id: int) -> Booking:
        """Return the user's booking with its room attached.

        Raises:
            NotFoundError: the user has no booking
        """
        booking = await self.repository.find_by_user_id(user_id)
        if booking is None:
            raise NotFoundError("Booking")
        return booking

    async def create_booking(self, user_id: int, room_id: int) -> Booking:
        """Reserve a slot in a room for the user.

        Args:
            user_id: Authenticated participant
            room_id: Room to book

        Returns:
            Booking: The new booking

        Raises:
            NotFoundError: no enrollment, ticket or room
            ForbiddenError: ticket not eligible, no payment, room full or
                user already booked
        """
        await self._assert_eligible(user_id)

        await self._get_bookable_room(room_id)

        existing = await self.repository.find_by_user_id(user_id)
        assert_no_existing_booking(existing)

        await self._take_slot(room_id)
        booking = await self.repository.create(user_id, room_id)
        await self.repository.commit()

        logger.info(f"User {user_id} booked room {room_id} (booking {booking.id})")
        return booking

    async def update_booking(self, user_id: int, room_id: int, booking_id: int) -> Booking:
        """Move an existing booking to another room.

        Releases one slot in the current room and takes one in the new room.

        Raises:
            NotFoundError: no enrollment, ticket, room or booking
            ForbiddenError: ticket not eligible, no payment, room full or
                booking owned by someone else
        """
        await self._assert_eligible(user_id)

        await self._get_bookable_room(room_id, lock=False)

        booking = await self.repository.find_by_booking_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking", str(booking_id))
        assert_booking_owner(booking, user_id)

        previous_room_id = booking.room_id
        if previous_room_id == room_id:
            logger.info(f"Booking {booking_id} already in room {room_id}, nothing to move")
            return booking

        # Rooms are always locked lowest id first
        await self.repository.lock_rooms(sorted([previous_room_id, room_id]))
        await self.repository.increase_room_capacity(previous_room_id)
        booking = await self.repository.update(booking_id, room_id)
        await self._take_slot(room_id)
        await self.repository.commit()

        logger.info(
            f"User {user_id} moved booking {booking_id} "
            f"from room {previous_room_id} to room {room_id}"
        )
        return booking

    async def _assert_eligible(self, user_id: int) -> None:
        enrollment = await self.repository.find_enrollment_by_user_id(user_id)
        if enrollment is None:
            raise NotFoundError("Enrollment")

        ticket = await self.repository.find_ticket_by_enrollment_id(enrollment.id)
        if ticket is None:
            raise NotFoundError("Ticket")

        assert_ticket_allows_hotel(ticket)

        payment = await self.repository.find_payment_by_ticket_id(ticket.id)
        assert_payment_on_file(payment)

    async def _get_bookable_room(self, room_id: int, *, lock: bool = True) -> Room:
        room = await self.repository.find_room(room_id, lock=lock)
        if room is None:
            raise NotFoundError("Room", str(room_id))
        assert_room_has_vacancy(room)
        return room

    async def _take_slot(self, room_id: int) -> Room:
        room = await self.repository.decrease_room_capacity(room_id)
        if room is None:
            logger.warning(f"Room {room_id} filled up before the slot was taken")
            raise ForbiddenError(ROOM_FULL)
        return room
