"""Signed identity tokens.

The account service issues HS256 tokens that carry the user's id in ``sub``
and the display name in ``name``. Tokens minted before the move to ``sub``
carry ``user_id`` instead; both are accepted.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import AliasChoices, BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from canopy.config import AuthSettings


class IdentityClaims(BaseModel):
    """Identity carried by a verified token."""

    user_id: str = Field(validation_alias=AliasChoices("sub", "user_id"))
    name: str
    exp: datetime


class JWTError(Exception):
    """A token was rejected."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Token rejected: {reason}")


def create_token(
    user_id: str,
    name: str,
    settings: AuthSettings,
    expires_in: timedelta | None = None,
) -> str:
    """Sign an identity token.

    Args:
        user_id: Stable user id, stored as ``sub``
        name: Display name
        settings: Authentication settings
        expires_in: Token lifetime, defaults to ``jwt_expiry_days``
    """
    issued_at = datetime.now(timezone.utc)
    if expires_in is None:
        expires_in = timedelta(days=settings.jwt_expiry_days)

    claims = {
        "sub": user_id,
        "name": name,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> IdentityClaims:
    """Check a token's signature and expiry and read its identity claims.

    Raises:
        JWTError: If the token is expired, forged, malformed or lacks an identity
    """
    try:
        decoded = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"invalid ({e})") from e

    try:
        return IdentityClaims.model_validate(decoded)
    except PydanticValidationError as e:
        raise JWTError("missing identity claims") from e
