"""Identity provider backed by signed tokens."""

import logfire

from canopy.config import AuthSettings
from canopy.domain.model import CurrentUser
from canopy.domain.value import UserId
from canopy.util.jwt import IdentityClaims, JWTError, create_token, verify_token


class JWTService:
    """Turns the ``auth_token`` cookie into a ``CurrentUser``.

    Tokens normally come from the account service. ``create_token`` is only
    for trusted internal callers and tests.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, name: str) -> str:
        """Sign a token for ``user_id`` with the configured secret."""
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, name, self.auth_settings)

    def verify_token(self, token: str) -> IdentityClaims:
        """Verify a token.

        Raises:
            JWTError: If the token is rejected
        """
        with logfire.span("jwt_service.verify_token"):
            return verify_token(token, self.auth_settings)

    def get_current_user(self, token: str | None) -> CurrentUser | None:
        """Resolve the caller, or None when anonymous.

        A missing cookie and a rejected token both mean anonymous; only the
        latter is logged.
        """
        if not token:
            return None

        try:
            claims = self.verify_token(token)
        except JWTError as e:
            logfire.warn("Ignoring rejected auth token", reason=e.reason)
            return None
        return CurrentUser(id=UserId(claims.user_id), display_name=claims.name)
