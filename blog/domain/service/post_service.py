"""Post domain service."""

from datetime import timedelta
from typing import Iterable, Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from blog.config import ContentSettings
from blog.domain.error import (
    AlreadyLikedError,
    NotAuthorizedError,
    NotFoundError,
    NotLikedError,
    ValidationError,
)
from blog.domain.model.like import PostLike
from blog.domain.model.post import Post
from blog.domain.repository import PostLikeRepository, PostRepository
from blog.domain.repository.post import PostFilter, PostOrder, PostSortField
from blog.domain.value import PostId, PostLikeId, PostStatus, Slug, TagId, UserId
from blog.util.clock import Clock

from .base import Service
from .slug import generate_unique_slug
from .tag_service import TagService


class PostService(Service):
    """Domain service for the post lifecycle, relevance queries and counters."""

    def __init__(
        self,
        post_repository: PostRepository,
        post_like_repository: PostLikeRepository,
        tag_service: TagService,
        clock: Clock,
        content_settings: ContentSettings,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            post_like_repository: Like association repository
            tag_service: Tag service (post_count reconciliation)
            clock: Source of the current time
            content_settings: Content settings
        """
        self.post_repository = post_repository
        self.post_like_repository = post_like_repository
        self.tag_service = tag_service
        self.clock = clock
        self.content_settings = content_settings

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_by_id(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If post not found or deleted
        """
        post = await self.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", str(post_id))
        return post

    async def get_authored_post(self, post_id: PostId, user_id: UserId) -> Post:
        """Get a post the acting user is allowed to manage.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If the user is not the author
        """
        post = await self.get_by_id(post_id)
        if not post.is_authored_by(user_id):
            logfire.warn(
                "Post action by non-author",
                post_id=str(post_id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError("post", str(post_id), str(user_id))
        return post

    async def generate_unique_slug(self, title: str, post_id: PostId) -> Slug:
        """Generate a unique slug from a title.

        Args:
            title: Post title to slugify
            post_id: Post ID (used for fallback if title produces empty slug)

        Returns:
            Unique slug for the post
        """
        with logfire.span(
            "post_service.generate_unique_slug", post_id=str(post_id), title=title
        ):
            slug = await generate_unique_slug(
                title,
                self.post_repository.slug_exists,
                fallback=f"post-{post_id.hex[:8]}",
            )
            logfire.info("Generated unique slug", post_id=str(post_id), slug=str(slug))
            return slug

    async def ensure_slug_available(
        self, slug: Slug, current: Optional[Slug] = None
    ) -> None:
        """Reject an explicit slug already used by another post.

        Raises:
            ValidationError: If the slug is taken
        """
        if slug != current and await self.post_repository.slug_exists(slug):
            raise ValidationError("slug", "The slug has already been taken.")

    async def save_post(
        self, post: Post, previous_tag_ids: Iterable[TagId] = ()
    ) -> Post:
        """Save a post and reconcile the post_count of every touched tag.

        Args:
            post: Post to save
            previous_tag_ids: Tags the post carried before this write

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.save_post", post_id=str(post.id), title=post.title
        ):
            saved = await self.post_repository.save(post)
            await self.tag_service.reconcile_post_counts(
                [*previous_tag_ids, *post.tag_ids]
            )
            logfire.info("Post saved", post_id=str(saved.id))
            return saved

    # Lifecycle

    async def publish(self, post_id: PostId, user_id: UserId) -> Post:
        """Publish a post, keeping an existing published_at.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span("post_service.publish", post_id=str(post_id)):
            post = await self.get_authored_post(post_id, user_id)
            published = await self.post_repository.save(post.publish(self.clock.now()))
            logfire.info(
                "Post published",
                post_id=str(post_id),
                published_at=str(published.published_at),
            )
            return published

    async def unpublish(self, post_id: PostId, user_id: UserId) -> Post:
        """Return a post to draft and clear published_at.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span("post_service.unpublish", post_id=str(post_id)):
            post = await self.get_authored_post(post_id, user_id)
            draft = await self.post_repository.save(post.unpublish(self.clock.now()))
            logfire.info("Post unpublished", post_id=str(post_id))
            return draft

    async def archive(self, post_id: PostId, user_id: UserId) -> Post:
        """Archive a post.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span("post_service.archive", post_id=str(post_id)):
            post = await self.get_authored_post(post_id, user_id)
            archived = await self.post_repository.save(post.archive(self.clock.now()))
            logfire.info("Post archived", post_id=str(post_id))
            return archived

    async def delete_post(self, post_id: PostId, user_id: UserId) -> Post:
        """Soft delete a post, dropping its tag and like associations.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            post = await self.get_authored_post(post_id, user_id)
            removed_likes = await self.post_like_repository.delete_by_post(post_id)
            deleted = post.soft_delete(self.clock.now()).model_copy(
                update={"tag_ids": []}
            )
            await self.save_post(deleted, previous_tag_ids=post.tag_ids)
            logfire.info(
                "Post deleted", post_id=str(post_id), removed_likes=removed_likes
            )
            return deleted

    # Counters

    async def record_view(self, post_id: PostId) -> Post:
        """Increment view_count and return the refreshed post.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.record_view", post_id=str(post_id)):
            await self.get_by_id(post_id)
            await self.post_repository.increment_view_count(post_id)
            return await self.get_by_id(post_id)

    async def like(self, post_id: PostId, user_id: UserId) -> int:
        """Like a post.

        The association insert and the counter increment share the request
        transaction.

        Returns:
            New like_count

        Raises:
            NotFoundError: If post not found
            AlreadyLikedError: If the user already liked the post
        """
        with logfire.span("post_service.like", post_id=str(post_id), user_id=str(user_id)):
            await self.get_by_id(post_id)

            if await self.post_like_repository.find(post_id, user_id):
                logfire.warn("Duplicate like", post_id=str(post_id), user_id=str(user_id))
                raise AlreadyLikedError(str(post_id), str(user_id))

            like = PostLike(
                id=PostLikeId(uuid4()),
                post_id=post_id,
                user_id=user_id,
                created_at=self.clock.now(),
            )
            try:
                await self.post_like_repository.save(like)
            except IntegrityError:
                logfire.warn(
                    "Duplicate like (constraint)",
                    post_id=str(post_id),
                    user_id=str(user_id),
                )
                raise AlreadyLikedError(str(post_id), str(user_id))

            like_count = await self.post_repository.increment_like_count(post_id)
            logfire.info("Post liked", post_id=str(post_id), like_count=like_count)
            return like_count

    async def unlike(self, post_id: PostId, user_id: UserId) -> int:
        """Remove a like from a post.

        Returns:
            New like_count

        Raises:
            NotFoundError: If post not found
            NotLikedError: If the user had not liked the post
        """
        with logfire.span(
            "post_service.unlike", post_id=str(post_id), user_id=str(user_id)
        ):
            await self.get_by_id(post_id)

            removed = await self.post_like_repository.delete(post_id, user_id)
            if not removed:
                logfire.warn("Unlike without like", post_id=str(post_id), user_id=str(user_id))
                raise NotLikedError(str(post_id), str(user_id))

            like_count = await self.post_repository.decrement_like_count(post_id)
            logfire.info("Post unliked", post_id=str(post_id), like_count=like_count)
            return like_count

    # Relevance

    async def get_related(self, post: Post, limit: Optional[int] = None) -> list[Post]:
        """Published posts sharing the category or a tag, newest first."""
        limit = limit or self.content_settings.related_limit
        with logfire.span("post_service.get_related", post_id=str(post.id), limit=limit):
            related = await self.post_repository.find_related(
                post, self.clock.now(), limit
            )
            logfire.info("Related posts found", post_id=str(post.id), count=len(related))
            return related

    async def get_next(self, post: Post) -> Optional[Post]:
        """The published post immediately after this one, if any."""
        if post.published_at is None:
            return None
        with logfire.span("post_service.get_next", post_id=str(post.id)):
            return await self.post_repository.find_next(post, self.clock.now())

    async def get_previous(self, post: Post) -> Optional[Post]:
        """The published post immediately before this one, if any."""
        if post.published_at is None:
            return None
        with logfire.span("post_service.get_previous", post_id=str(post.id)):
            return await self.post_repository.find_previous(post, self.clock.now())

    def popular_filter(self, days: Optional[int] = None, **criteria) -> PostFilter:
        """Published posts of the trailing ``days`` window, most viewed first."""
        now = self.clock.now()
        days = days or self.content_settings.popular_days
        return PostFilter(
            status=PostStatus.PUBLISHED,
            published_before=now,
            published_since=now - timedelta(days=days),
            order=[PostOrder(field=PostSortField.VIEW_COUNT)],
            **criteria,
        )
