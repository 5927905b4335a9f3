"""Booking endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from eventstay.api.deps import get_booking_service, get_current_user_id
from eventstay.schemas.booking import (
    BookingIdResponse,
    BookingRequest,
    BookingWithRoomResponse,
)
from eventstay.services.booking_service import BookingService

router = APIRouter()


@router.get("", response_model=BookingWithRoomResponse)
async def get_booking(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingWithRoomResponse:
    """Get the current user's booking and its room."""
    booking = await service.find_booking(user_id)
    return BookingWithRoomResponse.model_validate(booking)


@router.post("", response_model=BookingIdResponse)
async def create_booking(
    request: BookingRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingIdResponse:
    """Reserve a room for the current user."""
    booking = await service.create_booking(user_id, request.room_id)
    return BookingIdResponse(booking_id=booking.id)


@router.put("/{booking_id}", response_model=BookingIdResponse)
async def update_booking(
    request: BookingRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    booking_id: Annotated[int, Path(ge=1)],
) -> BookingIdResponse:
    """Move the current user's booking to another room."""
    booking = await service.update_booking(user_id, request.room_id, booking_id)
    return BookingIdResponse(booking_id=booking.id)
