"""Auth token service."""

import logfire

from blog.config import AuthSettings
from blog.util.clock import Clock
from blog.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and checks the tokens carried in the ``auth_token`` cookie."""

    def __init__(self, auth_settings: AuthSettings, clock: Clock) -> None:
        self.auth_settings = auth_settings
        self.clock = clock

    def create_token(self, user_id: str, name: str) -> str:
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, name, self.clock.now(), self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a token issued by ``create_token``.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            payload = verify_token(token, self.clock.now(), self.auth_settings)
            logfire.info("Token accepted", user_id=payload.user_id)
            return payload
