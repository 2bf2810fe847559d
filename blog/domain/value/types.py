"""Domain value objects for the blog.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from blog.domain.value.common import RootValueObject

SLUG_MAX_LENGTH = 255

_SLUG_PATTERN = re.compile(r"^[^\W_]+(?:-[^\W_]+)*$")
_HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class PostStatus(str, Enum):
    """Publication status of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PostVisibility(str, Enum):
    """Access scope of a post, independent of its status."""

    PUBLIC = "public"
    PRIVATE = "private"
    PASSWORD_PROTECTED = "password_protected"


class SortDirection(str, Enum):
    """Direction of an ordering clause."""

    ASC = "asc"
    DESC = "desc"


class Slug(RootValueObject[str]):
    """URL-safe identifier derived from a human-readable name.

    Lowercase letters (any script) and digits separated by single hyphens.
    Examples: 'hello-world', 'news-2025'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if len(v) < 1 or len(v) > SLUG_MAX_LENGTH:
            raise ValueError(f"Slug must be 1-{SLUG_MAX_LENGTH} characters")
        if v != v.lower() or not _SLUG_PATTERN.match(v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        return v


class HexColor(RootValueObject[str]):
    """Seven character hex colour such as '#3B82F6'."""

    @field_validator("root")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        """Validate and normalise to upper case."""
        if not _HEX_COLOR_PATTERN.match(v):
            raise ValueError("Color must be a hex value like #6B7280")
        return v.upper()
