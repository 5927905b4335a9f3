"""Core utilities and security modules."""

from eventstay.core.exceptions import (
    AppException,
    AuthenticationError,
    DataUnavailableError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from eventstay.core.security import (
    create_access_token,
    get_user_id_from_token,
    verify_token,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "DataUnavailableError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
    "create_access_token",
    "get_user_id_from_token",
    "verify_token",
]
