"""Pydantic schemas for API validation."""

from eventstay.schemas.booking import (
    BookingIdResponse,
    BookingRequest,
    BookingWithRoomResponse,
    RoomResponse,
)

__all__ = [
    "BookingRequest",
    "BookingIdResponse",
    "BookingWithRoomResponse",
    "RoomResponse",
]
