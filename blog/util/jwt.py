"""Encoding and decoding of the ``auth_token`` cookie."""

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel

from blog.config import AuthSettings


class TokenPayload(BaseModel):
    user_id: str
    name: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """The token cannot be trusted: bad signature, malformed or expired."""


def create_token(user_id: str, name: str, now: datetime, settings: AuthSettings) -> str:
    """Sign a token for ``user_id`` valid for ``jwt_expiry_days`` from ``now``."""
    claims = {
        "user_id": user_id,
        "name": name,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, now: datetime, settings: AuthSettings) -> TokenPayload:
    """Check the signature and decode the claims.

    Expiry is compared against ``now`` rather than the wall clock so that
    token lifetimes follow the injected application clock.

    Raises:
        JWTError: If the token is invalid or expired at ``now``
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False, "verify_iat": False},
        )
        payload = TokenPayload.model_validate(claims)
    except (jwt.InvalidTokenError, ValueError) as e:
        raise JWTError("Invalid token") from e

    if payload.exp <= now:
        raise JWTError("Token has expired")
    return payload
