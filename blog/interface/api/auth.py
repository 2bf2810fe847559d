"""Cookie based authentication for routes."""

import logfire
from fastapi import HTTPException, status

from blog.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from blog.domain.error import NotFoundError
from blog.util.jwt import JWTError


async def authenticate(
    auth_token: str | None, use_case: GetCurrentUserUseCase
) -> GetCurrentUserResponse:
    """Resolve the acting user from the ``auth_token`` cookie.

    Raises:
        HTTPException: 401 if the token is missing, invalid or names no user
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    try:
        return await use_case.execute(GetCurrentUserRequest(token=auth_token))
    except JWTError as e:
        logfire.warn("Rejected auth token", reason=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    except (NotFoundError, ValueError):
        logfire.warn("Token does not name a known user")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )
