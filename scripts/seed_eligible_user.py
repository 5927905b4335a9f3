#!/usr/bin/env python3
"""Seed a participant who may book a room, plus a hotel with rooms.

Prints a bearer token for the participant.
"""

import asyncio
from datetime import datetime

from sqlalchemy import select

from eventstay.core.security import create_access_token
from eventstay.database import get_db_context, init_db
from eventstay.models import (
    Enrollment,
    Hotel,
    Payment,
    Room,
    Session,
    Ticket,
    TicketStatus,
    TicketType,
    User,
)


async def seed(
    email: str = "participant@eventstay.dev",
    hotel_name: str = "Event Plaza Hotel",
    rooms: int = 3,
    room_capacity: int = 2,
) -> None:
    """Create the participant and the hotel if they don't exist."""
    await init_db()

    async with get_db_context() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user:
            print(f"User already exists: {email}")
        else:
            user = User(email=email)
            session.add(user)
            await session.flush()

            enrollment = Enrollment(
                user_id=user.id,
                name="Event Participant",
                cpf="000.000.000-00",
                birthday=datetime(1990, 1, 1),
                phone="(21) 99999-9999",
            )
            ticket_type = TicketType(
                name="In-person + Hotel",
                price=60000,
                is_remote=False,
                includes_hotel=True,
            )
            session.add_all([enrollment, ticket_type])
            await session.flush()

            ticket = Ticket(
                enrollment_id=enrollment.id,
                ticket_type_id=ticket_type.id,
                status=TicketStatus.PAID.value,
            )
            session.add(ticket)
            await session.flush()

            session.add(
                Payment(
                    ticket_id=ticket.id,
                    value=ticket_type.price,
                    card_issuer="VISA",
                    card_last_digits="4242",
                )
            )
            print(f"Created participant: {email}")

        hotel = Hotel(name=hotel_name)
        session.add(hotel)
        await session.flush()
        for number in range(1, rooms + 1):
            session.add(Room(name=f"{100 + number}", capacity=room_capacity, hotel_id=hotel.id))
        await session.flush()

        token = create_access_token(user.id)
        session.add(Session(user_id=user.id, token=token))

        result = await session.execute(select(Room.id).where(Room.hotel_id == hotel.id))
        room_ids = list(result.scalars().all())

    print(f"Hotel: {hotel_name} (id={hotel.id}), rooms: {room_ids}")
    print(f"Token: {token}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed a participant eligible for a hotel booking")
    parser.add_argument("--email", default="participant@eventstay.dev", help="Participant email")
    parser.add_argument("--hotel-name", default="Event Plaza Hotel", help="Hotel name")
    parser.add_argument("--rooms", type=int, default=3, help="Rooms to create")
    parser.add_argument("--room-capacity", type=int, default=2, help="Free slots per room")

    args = parser.parse_args()

    asyncio.run(
        seed(
            email=args.email,
            hotel_name=args.hotel_name,
            rooms=args.rooms,
            room_capacity=args.room_capacity,
        )
    )
