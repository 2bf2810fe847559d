"""Post like association."""

from datetime import datetime

from blog.domain.model.common import DomainModel
from blog.domain.value import PostId, PostLikeId, UserId


class PostLike(DomainModel):
    """Record of a user liking a post.

    One like per user per post (enforced by a unique constraint).
    """

    id: PostLikeId
    post_id: PostId
    user_id: UserId
    created_at: datetime
