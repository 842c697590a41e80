"""Caller identity domain service."""

import logfire

from agora.config import AuthSettings
from agora.domain.value import UserId
from agora.util.jwt import JWTError, verify_token

from .base import Service


class IdentityService(Service):
    """Resolves the calling user from a bearer token."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize identity service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def get_user_id_from_token(self, token: str | None) -> UserId | None:
        """Extract the user ID from a JWT without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        with logfire.span("identity_service.get_user_id_from_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                return UserId(payload.user_id)
            except JWTError as e:
                # Invalid or expired token, treat as unauthenticated
                logfire.debug(
                    "JWT verification failed, treating as unauthenticated",
                    error=str(e),
                )
                return None
