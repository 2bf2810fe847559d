"""User entity.

Users author posts and like them. Account management lives outside this service.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blog.domain.model.common import DomainModel
from blog.domain.value import UserId


class User(DomainModel):
    """User entity referenced by posts and likes."""

    id: UserId
    name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime
    updated_at: datetime
