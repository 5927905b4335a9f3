"""Booking-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookingRequest(BaseModel):
    """Body of POST /booking and PUT /booking/{bookingId}."""

    model_config = ConfigDict(populate_by_name=True)

    room_id: int = Field(alias="roomId", ge=1)


class RoomResponse(BaseModel):
    """Room snapshot attached to a booking."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    capacity: int
    hotel_id: int = Field(serialization_alias="hotelId")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class BookingWithRoomResponse(BaseModel):
    """Response of GET /booking."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    room: RoomResponse = Field(serialization_alias="Room")


class BookingIdResponse(BaseModel):
    """Response of POST /booking and PUT /booking/{bookingId}."""

    booking_id: int = Field(serialization_alias="bookingId")
