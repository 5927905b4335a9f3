from datetime import timedelta

import pytest
from jose import jwt

from eventstay.config import settings
from eventstay.core.exceptions import (
    AuthenticationError,
    DataUnavailableError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from eventstay.core.security import create_access_token, get_user_id_from_token, verify_token


class TestExceptions:
    def test_status_codes(self):
        assert ValidationError().status_code == 400
        assert AuthenticationError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert NotFoundError().status_code == 404
        assert DataUnavailableError().status_code == 503

    def test_not_found_detail_names_resource(self):
        assert NotFoundError("Booking").detail == "Booking not found"
        assert NotFoundError("Room", "7").detail == "Room with ID '7' not found"

    def test_authentication_error_asks_for_bearer(self):
        assert AuthenticationError().headers == {"WWW-Authenticate": "Bearer"}

    def test_validation_error_keeps_field_errors(self):
        errors = [{"loc": ["body", "roomId"], "msg": "too small"}]

        assert ValidationError(errors=errors).errors == errors

    def test_unavailable_detail(self):
        assert DataUnavailableError().detail == "Booking data is temporarily unavailable"
        assert DataUnavailableError("operation timed out").detail.endswith(": operation timed out")


class TestTokens:
    def test_round_trip_user_id(self):
        token = create_access_token(42)

        assert get_user_id_from_token(token) == 42
        assert "exp" in verify_token(token)

    def test_expired_token_is_rejected(self):
        token = create_access_token(42, expires_delta=timedelta(seconds=-1))

        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_foreign_signature_is_rejected(self):
        token = jwt.encode({"userId": 42}, "some-other-secret", algorithm=settings.jwt_algorithm)

        with pytest.raises(AuthenticationError):
            get_user_id_from_token(token)

    @pytest.mark.parametrize("payload", [{}, {"userId": "42"}, {"userId": True}])
    def test_payload_without_integer_user_id_is_rejected(self, payload):
        token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

        with pytest.raises(AuthenticationError, match="Invalid token payload"):
            get_user_id_from_token(token)
