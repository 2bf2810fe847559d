"""Resolve the acting user from an auth token."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import JWTService, UserService
from blog.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    token: str


class GetCurrentUserResponse(BaseModel):
    """The acting user, as routes see it."""

    user_id: str
    name: str
    email: str | None


class GetCurrentUserUseCase(BaseUseCase[GetCurrentUserRequest, GetCurrentUserResponse]):
    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Load the user named by a valid token.

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If the user no longer exists
        """
        with logfire.span("get_current_user.execute"):
            claims = self.jwt_service.verify_token(request.token)
            user = await self.user_service.get_by_id(UserId(UUID(claims.user_id)))
            return GetCurrentUserResponse(
                user_id=str(user.id), name=user.name, email=user.email
            )
