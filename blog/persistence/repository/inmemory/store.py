"""Shared state behind the in-memory repositories.

Post/tag associations and likes are read by several repositories, so they
all work against one InMemoryDatabase instead of private dicts.
"""

from blog.domain.model import Category, Post, PostLike, Tag, User
from blog.domain.value import CategoryId, PostId, TagId, UserId


class InMemoryDatabase:
    """Tables of the in-memory store."""

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.categories: dict[CategoryId, Category] = {}
        # Posts are stored without tag_ids; post_tags is the association table
        self.posts: dict[PostId, Post] = {}
        self.post_tags: dict[PostId, list[TagId]] = {}
        self.tags: dict[TagId, Tag] = {}
        self.likes: list[PostLike] = []

    def live_tag_ids(self, post_id: PostId) -> list[TagId]:
        """Tag IDs of a post, skipping soft-deleted tags."""
        return [
            tag_id
            for tag_id in self.post_tags.get(post_id, [])
            if tag_id in self.tags and not self.tags[tag_id].is_deleted
        ]

    def with_tags(self, post: Post) -> Post:
        return post.model_copy(update={"tag_ids": self.live_tag_ids(post.id)})

    def count_live_posts_with_tag(self, tag_id: TagId) -> int:
        return sum(
            1
            for post_id, tag_ids in self.post_tags.items()
            if tag_id in tag_ids
            and post_id in self.posts
            and not self.posts[post_id].is_deleted
        )


def icontains(value: str | None, needle: str) -> bool:
    """Case-insensitive substring match, like SQL ILIKE '%needle%'."""
    return value is not None and needle.lower() in value.lower()


def sort_by(items: list, field: str, descending: bool) -> list:
    """Stable sort on one attribute, keeping None values last."""
    present = [item for item in items if getattr(item, field) is not None]
    missing = [item for item in items if getattr(item, field) is None]
    present.sort(key=lambda item: getattr(item, field), reverse=descending)
    return present + missing
