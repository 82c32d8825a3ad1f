"""Unit tests for identity tokens and the JWT service."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from canopy.config import AuthSettings
from canopy.domain.service import JWTService
from canopy.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="canopy-test-secret-0123456789abcdef")


def _sign(claims: dict) -> str:
    return jwt.encode(claims, SETTINGS.jwt_secret, algorithm=SETTINGS.jwt_algorithm)


class TestTokens:
    """Tests for create_token / verify_token."""

    def test_round_trip(self):
        """A created token should verify to the same user."""
        token = create_token("user-ada", "Ada", SETTINGS)

        claims = verify_token(token, SETTINGS)

        assert claims.user_id == "user-ada"
        assert claims.name == "Ada"

    def test_user_id_is_stored_as_subject(self):
        token = create_token("user-ada", "Ada", SETTINGS)

        decoded = jwt.decode(
            token, SETTINGS.jwt_secret, algorithms=[SETTINGS.jwt_algorithm]
        )

        assert decoded["sub"] == "user-ada"
        assert "iat" in decoded

    def test_legacy_user_id_claim_is_accepted(self):
        """Tokens minted before ``sub`` was used still verify."""
        token = _sign(
            {
                "user_id": "user-ada",
                "name": "Ada",
                "exp": datetime.now(timezone.utc) + timedelta(days=1),
            }
        )

        assert verify_token(token, SETTINGS).user_id == "user-ada"

    def test_wrong_secret_is_rejected(self):
        """Tokens signed with another secret are invalid."""
        other = AuthSettings(jwt_secret="another-secret-0123456789abcdefghij")
        token = create_token("user-ada", "Ada", other)

        with pytest.raises(JWTError, match="invalid"):
            verify_token(token, SETTINGS)

    def test_expired_token_is_rejected(self):
        token = create_token(
            "user-ada", "Ada", SETTINGS, expires_in=timedelta(minutes=-1)
        )

        with pytest.raises(JWTError) as exc_info:
            verify_token(token, SETTINGS)
        assert exc_info.value.reason == "expired"

    def test_token_without_expiry_is_rejected(self):
        token = _sign({"sub": "user-ada", "name": "Ada"})

        with pytest.raises(JWTError):
            verify_token(token, SETTINGS)

    def test_token_without_name_is_rejected(self):
        """Tokens from other issuers without a name are rejected."""
        token = _sign(
            {"sub": "user-ada", "exp": datetime.now(timezone.utc) + timedelta(days=1)}
        )

        with pytest.raises(JWTError) as exc_info:
            verify_token(token, SETTINGS)
        assert exc_info.value.reason == "missing identity claims"


class TestJWTService:
    """Tests for JWTService.get_current_user."""

    def test_valid_token_gives_user(self):
        service = JWTService(auth_settings=SETTINGS)
        token = service.create_token("user-ada", "Ada")

        user = service.get_current_user(token)

        assert user is not None
        assert user.id == "user-ada"
        assert user.display_name == "Ada"

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_missing_or_invalid_token_gives_none(self, token):
        """Missing or invalid tokens mean anonymous."""
        service = JWTService(auth_settings=SETTINGS)

        assert service.get_current_user(token) is None
