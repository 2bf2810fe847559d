"""Domain layer DI providers."""

from dishka import Scope, provide

from blog.config import AuthSettings, ContentSettings
from blog.domain.repository import (
    CategoryRepository,
    PostLikeRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from blog.domain.service import (
    CategoryService,
    JWTService,
    PostService,
    TagService,
    UserService,
)
from blog.util.clock import Clock
from blog.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings, clock: Clock) -> JWTService:
        """Provide auth token service."""
        return JWTService(auth_settings=auth_settings, clock=clock)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_category_service(
        self,
        category_repository: CategoryRepository,
        post_repository: PostRepository,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> CategoryService:
        """Provide category domain service."""
        return CategoryService(
            category_repository=category_repository,
            post_repository=post_repository,
            clock=clock,
            content_settings=content_settings,
        )

    @provide
    def get_tag_service(
        self,
        tag_repository: TagRepository,
        post_repository: PostRepository,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> TagService:
        """Provide tag domain service."""
        return TagService(
            tag_repository=tag_repository,
            post_repository=post_repository,
            clock=clock,
            content_settings=content_settings,
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        post_like_repository: PostLikeRepository,
        tag_service: TagService,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            post_like_repository=post_like_repository,
            tag_service=tag_service,
            clock=clock,
            content_settings=content_settings,
        )
