"""API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventstay.core.exceptions import AuthenticationError
from eventstay.core.security import get_user_id_from_token
from eventstay.database import get_db
from eventstay.models.user import Session
from eventstay.repositories.booking_repository import BookingRepository
from eventstay.services.booking_service import BookingService

# Security scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> int:
    """Resolve the bearer token to the id of a user with a live session."""
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    token = credentials.credentials
    user_id = get_user_id_from_token(token)

    result = await db.execute(select(Session.id).where(Session.token == token).limit(1))
    if result.scalar_one_or_none() is None:
        raise AuthenticationError("No active session for token")

    return user_id


async def get_booking_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingService:
    """Build a booking service bound to the request's session."""
    return BookingService(BookingRepository(db))
