"""Booking eligibility guards."""

from eventstay.core.exceptions import ForbiddenError
from eventstay.models.booking import Booking
from eventstay.models.hotel import Room
from eventstay.models.payment import Payment
from eventstay.models.ticket import Ticket

HOTEL_TICKET_REQUIRED = "In-person ticket with hotel required"
PAYMENT_REQUIRED = "Payment required"
ROOM_FULL = "Room is full"
ALREADY_BOOKED = "User already has a booking"
NOT_BOOKING_OWNER = "Booking belongs to another user"


def assert_ticket_allows_hotel(ticket: Ticket) -> None:
    ticket_type = ticket.ticket_type
    if ticket_type.is_remote or not ticket_type.includes_hotel:
        raise ForbiddenError(HOTEL_TICKET_REQUIRED)


def assert_payment_on_file(payment: Payment | None) -> None:
    if payment is None:
        raise ForbiddenError(PAYMENT_REQUIRED)


def assert_room_has_vacancy(room: Room) -> None:
    if room.capacity <= 0:
        raise ForbiddenError(ROOM_FULL)


def assert_no_existing_booking(booking: Booking | None) -> None:
    if booking is not None:
        raise ForbiddenError(ALREADY_BOOKED)


def assert_booking_owner(booking: Booking, user_id: int) -> None:
    if booking.user_id != user_id:
        raise ForbiddenError(NOT_BOOKING_OWNER)
