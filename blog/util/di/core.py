"""Configuration providers."""

from dishka import Scope, provide

from blog.config import AuthSettings, ContentSettings, Settings
from blog.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings read once per process; sections are exposed on their own."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_content_settings(self, settings: Settings) -> ContentSettings:
        return settings.content
