"""Bearer token verification.

Tokens are minted by the external identity provider. Agora only checks
the signature and expiry and reads the user id.
"""

from datetime import datetime
from uuid import UUID

import jwt
import pydantic
from pydantic import BaseModel

from agora.config import AuthSettings


class TokenPayload(BaseModel):
    """Claims Agora relies on."""

    user_id: UUID
    exp: datetime


class JWTError(Exception):
    """Token is unusable: bad signature, expired, or missing claims."""

    pass


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode ``token`` and validate its claims.

    Raises:
        JWTError: Token is expired, tampered with, or lacks a valid user id
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e

    try:
        return TokenPayload.model_validate(claims)
    except pydantic.ValidationError as e:
        raise JWTError("Token claims are invalid") from e
