"""Application layer DI providers."""

from dishka import Scope, provide

from blog.application.usecase.auth import GetCurrentUserUseCase
from blog.application.usecase.category import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryBreadcrumbUseCase,
    GetCategoryChildrenUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    ListCategoryPostsUseCase,
    UpdateCategoryUseCase,
)
from blog.application.usecase.items import ItemAssembler
from blog.application.usecase.post import (
    ChangePostStatusUseCase,
    CreatePostUseCase,
    DeletePostUseCase,
    GetNextPostUseCase,
    GetPostUseCase,
    GetPreviousPostUseCase,
    GetRelatedPostsUseCase,
    LikePostUseCase,
    ListPostsUseCase,
    UnlikePostUseCase,
    UpdatePostUseCase,
)
from blog.application.usecase.tag import (
    CreateTagUseCase,
    DeleteTagUseCase,
    FindOrCreateTagsUseCase,
    FindOrCreateTagUseCase,
    GetPopularTagsUseCase,
    GetRelatedTagsUseCase,
    GetTagPostSelectionUseCase,
    GetTagStatisticsUseCase,
    GetTagsWithPostCountUseCase,
    GetTagUseCase,
    ListTagPostsUseCase,
    ListTagsUseCase,
    UpdateTagUseCase,
)
from blog.config import ContentSettings
from blog.domain.repository import CategoryRepository, PostRepository, TagRepository
from blog.domain.service import (
    CategoryService,
    JWTService,
    PostService,
    TagService,
    UserService,
)
from blog.util.clock import Clock
from blog.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_item_assembler(
        self,
        user_service: UserService,
        category_service: CategoryService,
        tag_service: TagService,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> ItemAssembler:
        """Provide response item assembler."""
        return ItemAssembler(
            user_service=user_service,
            category_service=category_service,
            tag_service=tag_service,
            clock=clock,
            content_settings=content_settings,
        )

    # Auth use cases
    @provide
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Category use cases
    @provide
    def get_list_categories_use_case(
        self, category_repository: CategoryRepository, assembler: ItemAssembler
    ) -> ListCategoriesUseCase:
        """Provide list categories use case."""
        return ListCategoriesUseCase(
            category_repository=category_repository, assembler=assembler
        )

    @provide
    def get_get_category_use_case(
        self, category_service: CategoryService, assembler: ItemAssembler
    ) -> GetCategoryUseCase:
        """Provide get category use case."""
        return GetCategoryUseCase(category_service=category_service, assembler=assembler)

    @provide
    def get_create_category_use_case(
        self, category_service: CategoryService, assembler: ItemAssembler, clock: Clock
    ) -> CreateCategoryUseCase:
        """Provide create category use case."""
        return CreateCategoryUseCase(
            category_service=category_service, assembler=assembler, clock=clock
        )

    @provide
    def get_update_category_use_case(
        self, category_service: CategoryService, assembler: ItemAssembler, clock: Clock
    ) -> UpdateCategoryUseCase:
        """Provide update category use case."""
        return UpdateCategoryUseCase(
            category_service=category_service, assembler=assembler, clock=clock
        )

    @provide
    def get_delete_category_use_case(
        self, category_service: CategoryService
    ) -> DeleteCategoryUseCase:
        """Provide delete category use case."""
        return DeleteCategoryUseCase(category_service=category_service)

    @provide
    def get_category_children_use_case(
        self, category_service: CategoryService, assembler: ItemAssembler
    ) -> GetCategoryChildrenUseCase:
        """Provide category children use case."""
        return GetCategoryChildrenUseCase(
            category_service=category_service, assembler=assembler
        )

    @provide
    def get_category_breadcrumb_use_case(
        self, category_service: CategoryService, assembler: ItemAssembler
    ) -> GetCategoryBreadcrumbUseCase:
        """Provide category breadcrumb use case."""
        return GetCategoryBreadcrumbUseCase(
            category_service=category_service, assembler=assembler
        )

    @provide
    def get_list_category_posts_use_case(
        self,
        category_service: CategoryService,
        post_repository: PostRepository,
        assembler: ItemAssembler,
    ) -> ListCategoryPostsUseCase:
        """Provide list category posts use case."""
        return ListCategoryPostsUseCase(
            category_service=category_service,
            post_repository=post_repository,
            assembler=assembler,
        )

    # Post use cases
    @provide
    def get_list_posts_use_case(
        self,
        post_repository: PostRepository,
        post_service: PostService,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_repository=post_repository,
            post_service=post_service,
            assembler=assembler,
            clock=clock,
        )

    @provide
    def get_get_post_use_case(
        self, post_service: PostService, assembler: ItemAssembler
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, assembler=assembler)

    @provide
    def get_create_post_use_case(
        self,
        post_service: PostService,
        category_service: CategoryService,
        tag_service: TagService,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service,
            category_service=category_service,
            tag_service=tag_service,
            assembler=assembler,
            clock=clock,
        )

    @provide
    def get_update_post_use_case(
        self,
        post_service: PostService,
        category_service: CategoryService,
        tag_service: TagService,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(
            post_service=post_service,
            category_service=category_service,
            tag_service=tag_service,
            assembler=assembler,
            clock=clock,
        )

    @provide
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    @provide
    def get_change_post_status_use_case(
        self, post_service: PostService, assembler: ItemAssembler
    ) -> ChangePostStatusUseCase:
        """Provide change post status use case."""
        return ChangePostStatusUseCase(post_service=post_service, assembler=assembler)

    @provide
    def get_related_posts_use_case(
        self, post_service: PostService, assembler: ItemAssembler
    ) -> GetRelatedPostsUseCase:
        """Provide related posts use case."""
        return GetRelatedPostsUseCase(post_service=post_service, assembler=assembler)

    @provide
    def get_next_post_use_case(
        self, post_service: PostService, assembler: ItemAssembler
    ) -> GetNextPostUseCase:
        """Provide next post use case."""
        return GetNextPostUseCase(post_service=post_service, assembler=assembler)

    @provide
    def get_previous_post_use_case(
        self, post_service: PostService, assembler: ItemAssembler
    ) -> GetPreviousPostUseCase:
        """Provide previous post use case."""
        return GetPreviousPostUseCase(post_service=post_service, assembler=assembler)

    @provide
    def get_like_post_use_case(self, post_service: PostService) -> LikePostUseCase:
        """Provide like post use case."""
        return LikePostUseCase(post_service=post_service)

    @provide
    def get_unlike_post_use_case(self, post_service: PostService) -> UnlikePostUseCase:
        """Provide unlike post use case."""
        return UnlikePostUseCase(post_service=post_service)

    # Tag use cases
    @provide
    def get_list_tags_use_case(
        self, tag_repository: TagRepository, assembler: ItemAssembler
    ) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(tag_repository=tag_repository, assembler=assembler)

    @provide
    def get_get_tag_use_case(
        self, tag_service: TagService, assembler: ItemAssembler
    ) -> GetTagUseCase:
        """Provide get tag use case."""
        return GetTagUseCase(tag_service=tag_service, assembler=assembler)

    @provide
    def get_create_tag_use_case(
        self, tag_service: TagService, assembler: ItemAssembler, clock: Clock
    ) -> CreateTagUseCase:
        """Provide create tag use case."""
        return CreateTagUseCase(tag_service=tag_service, assembler=assembler, clock=clock)

    @provide
    def get_update_tag_use_case(
        self, tag_service: TagService, assembler: ItemAssembler, clock: Clock
    ) -> UpdateTagUseCase:
        """Provide update tag use case."""
        return UpdateTagUseCase(tag_service=tag_service, assembler=assembler, clock=clock)

    @provide
    def get_delete_tag_use_case(self, tag_service: TagService) -> DeleteTagUseCase:
        """Provide delete tag use case."""
        return DeleteTagUseCase(tag_service=tag_service)

    @provide
    def get_list_tag_posts_use_case(
        self,
        tag_service: TagService,
        post_repository: PostRepository,
        assembler: ItemAssembler,
        clock: Clock,
    ) -> ListTagPostsUseCase:
        """Provide list tag posts use case."""
        return ListTagPostsUseCase(
            tag_service=tag_service,
            post_repository=post_repository,
            assembler=assembler,
            clock=clock,
        )

    @provide
    def get_tag_post_selection_use_case(
        self,
        tag_service: TagService,
        post_repository: PostRepository,
        assembler: ItemAssembler,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> GetTagPostSelectionUseCase:
        """Provide tag post selection use case."""
        return GetTagPostSelectionUseCase(
            tag_service=tag_service,
            post_repository=post_repository,
            assembler=assembler,
            clock=clock,
            content_settings=content_settings,
        )

    @provide
    def get_related_tags_use_case(
        self, tag_service: TagService, assembler: ItemAssembler
    ) -> GetRelatedTagsUseCase:
        """Provide related tags use case."""
        return GetRelatedTagsUseCase(tag_service=tag_service, assembler=assembler)

    @provide
    def get_tag_statistics_use_case(
        self, tag_service: TagService
    ) -> GetTagStatisticsUseCase:
        """Provide tag statistics use case."""
        return GetTagStatisticsUseCase(tag_service=tag_service)

    @provide
    def get_popular_tags_use_case(
        self,
        tag_repository: TagRepository,
        assembler: ItemAssembler,
        content_settings: ContentSettings,
    ) -> GetPopularTagsUseCase:
        """Provide popular tags use case."""
        return GetPopularTagsUseCase(
            tag_repository=tag_repository,
            assembler=assembler,
            content_settings=content_settings,
        )

    @provide
    def get_tags_with_post_count_use_case(
        self, tag_repository: TagRepository, assembler: ItemAssembler
    ) -> GetTagsWithPostCountUseCase:
        """Provide tags with post count use case."""
        return GetTagsWithPostCountUseCase(
            tag_repository=tag_repository, assembler=assembler
        )

    @provide
    def get_find_or_create_tag_use_case(
        self, tag_service: TagService, assembler: ItemAssembler
    ) -> FindOrCreateTagUseCase:
        """Provide find or create tag use case."""
        return FindOrCreateTagUseCase(tag_service=tag_service, assembler=assembler)

    @provide
    def get_find_or_create_tags_use_case(
        self, tag_service: TagService, assembler: ItemAssembler
    ) -> FindOrCreateTagsUseCase:
        """Provide find or create tags use case."""
        return FindOrCreateTagsUseCase(tag_service=tag_service, assembler=assembler)
