"""Data access layer."""

from eventstay.repositories.booking_repository import BookingRepository

__all__ = ["BookingRepository"]
