import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from eventstay.core.exceptions import DataUnavailableError, ForbiddenError
from eventstay.repositories.booking_repository import BookingRepository
from tests.factories import (
    create_booking,
    create_eligible_user,
    create_enrollment,
    create_hotel,
    create_payment,
    create_room,
    create_ticket,
    create_ticket_type,
    create_user,
    room_capacity,
)


@pytest.fixture
def repository(db_session):
    return BookingRepository(db_session)


class TestBookingLookups:
    async def test_find_by_user_id_without_booking_returns_none(self, db_session, repository):
        user = await create_user(db_session)

        assert await repository.find_by_user_id(user.id) is None

    async def test_find_by_user_id_attaches_room(self, db_session, repository):
        user = await create_user(db_session)
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel, capacity=2)
        booking = await create_booking(db_session, user, room)

        found = await repository.find_by_user_id(user.id)

        assert found.id == booking.id
        assert found.room.id == room.id
        assert found.room.capacity == 2

    async def test_find_by_booking_id(self, db_session, repository):
        user = await create_user(db_session)
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel)
        booking = await create_booking(db_session, user, room)

        found = await repository.find_by_booking_id(booking.id)

        assert found.user_id == user.id
        assert found.room.id == room.id
        assert await repository.find_by_booking_id(booking.id + 1000) is None


class TestBookingWrites:
    async def test_create_leaves_capacity_alone(self, db_session, session_factory, repository):
        user = await create_user(db_session)
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel, capacity=2)

        booking = await repository.create(user.id, room.id)
        await db_session.commit()

        assert booking.id is not None
        assert booking.room_id == room.id
        assert await room_capacity(session_factory, room.id) == 2

    async def test_second_booking_for_same_user_is_forbidden(self, db_session, repository):
        user = await create_user(db_session)
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel)
        await create_booking(db_session, user, room)

        with pytest.raises(ForbiddenError):
            await repository.create(user.id, room.id)

    async def test_update_repoints_booking(self, db_session, repository):
        user = await create_user(db_session)
        hotel = await create_hotel(db_session)
        old_room = await create_room(db_session, hotel, capacity=1)
        new_room = await create_room(db_session, hotel, capacity=1)
        booking = await create_booking(db_session, user, old_room)

        updated = await repository.update(booking.id, new_room.id)

        assert updated.id == booking.id
        assert updated.room_id == new_room.id
        assert updated.room.id == new_room.id
        assert updated.room.capacity == 1


class TestRoomCapacity:
    async def test_find_room(self, db_session, repository):
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel, capacity=4)

        found = await repository.find_room(room.id, lock=True)

        assert found.capacity == 4
        assert await repository.find_room(room.id + 1000) is None

    async def test_increase_adds_one(self, db_session, repository):
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel, capacity=0)

        updated = await repository.increase_room_capacity(room.id)

        assert updated.capacity == 1

    async def test_decrease_subtracts_one(self, db_session, repository):
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel, capacity=2)

        updated = await repository.decrease_room_capacity(room.id)

        assert updated.capacity == 1

    async def test_second_decrease_in_same_transaction_finds_room_full(
        self, db_session, session_factory, repository
    ):
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel, capacity=1)

        first = await repository.decrease_room_capacity(room.id)
        second = await repository.decrease_room_capacity(room.id)
        await db_session.commit()

        assert first.capacity == 0
        assert second is None
        assert await room_capacity(session_factory, room.id) == 0

    async def test_lock_rooms_returns_rooms_by_ascending_id(self, db_session, repository):
        hotel = await create_hotel(db_session)
        low = await create_room(db_session, hotel, capacity=1)
        high = await create_room(db_session, hotel, capacity=2)

        rooms = await repository.lock_rooms([high.id, low.id])

        assert [room.id for room in rooms] == [low.id, high.id]

    async def test_decrease_on_full_room_changes_nothing(self, db_session, session_factory, repository):
        hotel = await create_hotel(db_session)
        room = await create_room(db_session, hotel, capacity=0)

        assert await repository.decrease_room_capacity(room.id) is None
        await db_session.commit()

        assert await room_capacity(session_factory, room.id) == 0


class TestRegistrationLookups:
    async def test_eligible_user_chain(self, db_session, repository):
        user = await create_eligible_user(db_session)

        enrollment = await repository.find_enrollment_by_user_id(user.id)
        ticket = await repository.find_ticket_by_enrollment_id(enrollment.id)
        payment = await repository.find_payment_by_ticket_id(ticket.id)

        assert enrollment.user_id == user.id
        assert ticket.ticket_type.includes_hotel is True
        assert ticket.ticket_type.is_remote is False
        assert payment.ticket_id == ticket.id

    async def test_missing_records_return_none(self, db_session, repository):
        user = await create_user(db_session)
        enrollment = await create_enrollment(db_session, user)
        ticket_type = await create_ticket_type(db_session)

        assert await repository.find_enrollment_by_user_id(user.id + 1000) is None
        assert await repository.find_ticket_by_enrollment_id(enrollment.id) is None

        ticket = await create_ticket(db_session, enrollment, ticket_type)
        assert await repository.find_payment_by_ticket_id(ticket.id) is None

        await create_payment(db_session, ticket)
        assert await repository.find_payment_by_ticket_id(ticket.id) is not None


class TestStoreFailures:
    async def test_timeout_is_unavailable(self):
        async def slow_execute(*args, **kwargs):
            await asyncio.sleep(1)

        session = AsyncMock()
        session.execute.side_effect = slow_execute
        repository = BookingRepository(session, timeout=0.01)

        with pytest.raises(DataUnavailableError) as exc_info:
            await repository.find_room(1)

        assert exc_info.value.status_code == 503

    async def test_driver_error_is_unavailable(self):
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection lost"))
        repository = BookingRepository(session)

        with pytest.raises(DataUnavailableError):
            await repository.find_by_user_id(1)

        session.execute.assert_awaited_once()

    async def test_failed_commit_is_unavailable(self):
        session = AsyncMock()
        session.commit.side_effect = OperationalError("COMMIT", {}, Exception("could not serialize access"))
        repository = BookingRepository(session)

        with pytest.raises(DataUnavailableError):
            await repository.commit()
