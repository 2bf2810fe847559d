"""Category entity.

Categories form a forest through ``parent_id``. Tree navigation (breadcrumb,
descendants) lives in CategoryService because it needs the repository.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from blog.domain.model.common import DomainModel
from blog.domain.value import CategoryId, Slug


class Category(DomainModel):
    """Category entity.

    Business rules:
    - A category is never its own parent
    - The slug is assigned once and kept when the name changes
    - Deletion is blocked while children or posts exist
    """

    id: CategoryId
    name: str = Field(min_length=1, max_length=255)
    slug: Slug
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=255)
    color: Optional[str] = Field(default=None, max_length=7)
    is_active: bool = True
    is_featured: bool = False
    sort_order: int = Field(default=0, ge=0)
    parent_id: Optional[CategoryId] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_not_own_parent(self) -> "Category":
        """A category cannot reference itself as parent."""
        if self.parent_id is not None and self.parent_id == self.id:
            raise ValueError("A category cannot be its own parent")
        return self

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_child(self) -> bool:
        return self.parent_id is not None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self, now: datetime) -> "Category":
        """Return a copy flagged as deleted."""
        return self.model_copy(update={"deleted_at": now, "updated_at": now})
