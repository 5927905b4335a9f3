"""Database models."""

from eventstay.models.booking import Booking
from eventstay.models.enrollment import Enrollment
from eventstay.models.hotel import Hotel, Room
from eventstay.models.payment import Payment
from eventstay.models.ticket import Ticket, TicketStatus, TicketType
from eventstay.models.user import Session, User

__all__ = [
    # User
    "User",
    "Session",
    # Registration
    "Enrollment",
    "TicketType",
    "Ticket",
    "TicketStatus",
    "Payment",
    # Lodging
    "Hotel",
    "Room",
    "Booking",
]
