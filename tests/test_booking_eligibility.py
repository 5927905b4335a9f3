import pytest

from eventstay.core.exceptions import ForbiddenError
from eventstay.domain.booking_eligibility import (
    assert_booking_owner,
    assert_no_existing_booking,
    assert_payment_on_file,
    assert_room_has_vacancy,
    assert_ticket_allows_hotel,
)
from eventstay.models import Booking, Payment, Room, Ticket, TicketType


def make_ticket(*, is_remote: bool, includes_hotel: bool) -> Ticket:
    ticket_type = TicketType(name="t", price=100, is_remote=is_remote, includes_hotel=includes_hotel)
    return Ticket(id=1, enrollment_id=1, ticket_type=ticket_type, status="PAID")


class TestTicketAllowsHotel:
    def test_in_person_ticket_with_hotel_passes(self):
        assert_ticket_allows_hotel(make_ticket(is_remote=False, includes_hotel=True))

    @pytest.mark.parametrize(
        "is_remote, includes_hotel",
        [(True, True), (False, False), (True, False)],
    )
    def test_remote_or_hotel_less_ticket_is_forbidden(self, is_remote, includes_hotel):
        with pytest.raises(ForbiddenError) as exc_info:
            assert_ticket_allows_hotel(make_ticket(is_remote=is_remote, includes_hotel=includes_hotel))

        assert exc_info.value.status_code == 403
        assert "hotel" in exc_info.value.detail


class TestPaymentOnFile:
    def test_missing_payment_is_forbidden(self):
        with pytest.raises(ForbiddenError, match="Payment required"):
            assert_payment_on_file(None)

    def test_existing_payment_passes(self):
        assert_payment_on_file(Payment(id=1, ticket_id=1, value=100))


class TestRoomVacancy:
    def test_full_room_is_forbidden(self):
        with pytest.raises(ForbiddenError, match="Room is full"):
            assert_room_has_vacancy(Room(id=1, name="101", capacity=0, hotel_id=1))

    def test_room_with_slot_passes(self):
        assert_room_has_vacancy(Room(id=1, name="101", capacity=1, hotel_id=1))


class TestBookingGuards:
    def test_existing_booking_is_forbidden(self):
        with pytest.raises(ForbiddenError, match="already has a booking"):
            assert_no_existing_booking(Booking(id=1, user_id=1, room_id=1))

    def test_no_booking_passes(self):
        assert_no_existing_booking(None)

    def test_booking_of_another_user_is_forbidden(self):
        with pytest.raises(ForbiddenError, match="another user"):
            assert_booking_owner(Booking(id=1, user_id=2, room_id=1), user_id=1)

    def test_own_booking_passes(self):
        assert_booking_owner(Booking(id=1, user_id=1, room_id=1), user_id=1)
