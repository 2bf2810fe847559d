"""Tag entity for labelling posts."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blog.domain.model.common import DomainModel
from blog.domain.value import HexColor, Slug, TagId

DEFAULT_TAG_COLOR = "#6B7280"

# Tailwind palette names for the supported tag colours
_PALETTE: dict[str, str] = {
    "#3B82F6": "blue",
    "#10B981": "green",
    "#F59E0B": "yellow",
    "#EF4444": "red",
    "#8B5CF6": "purple",
    "#F97316": "orange",
    "#06B6D4": "cyan",
    "#EC4899": "pink",
    "#6B7280": "gray",
    "#84CC16": "lime",
}


class Tag(DomainModel):
    """Tag entity.

    Tags carry optional English and Arabic variants of their name, slug and
    description. ``post_count`` mirrors the number of associated posts and is
    reconciled by TagService after every write that touches associations.
    """

    id: TagId
    name: str = Field(min_length=1, max_length=255)
    name_en: Optional[str] = Field(default=None, max_length=255)
    name_ar: Optional[str] = Field(default=None, max_length=255)
    slug: Slug
    slug_en: Optional[Slug] = None
    slug_ar: Optional[Slug] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    color: HexColor = HexColor(DEFAULT_TAG_COLOR)
    is_active: bool = True
    post_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def palette(self) -> str:
        return _PALETTE.get(self.color.root, "gray")

    @property
    def color_class(self) -> str:
        return f"bg-{self.palette}-500"

    @property
    def text_color_class(self) -> str:
        return f"text-{self.palette}-500"

    @property
    def border_color_class(self) -> str:
        return f"border-{self.palette}-500"

    def soft_delete(self, now: datetime) -> "Tag":
        """Return a copy flagged as deleted."""
        return self.model_copy(update={"deleted_at": now, "updated_at": now})
