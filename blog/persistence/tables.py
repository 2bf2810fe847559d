"""SQLAlchemy table definitions for the blog.

These tables match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_email", users_table.c.email)

# ============================================================================
# CATEGORIES TABLE (self-referencing tree)
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("slug", String(255), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column("image", String(255), nullable=True),
    Column("color", String(7), nullable=True),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("is_featured", Boolean, nullable=False, server_default="false"),
    Column("sort_order", Integer, nullable=False, server_default="0"),
    Column(
        "parent_id",
        UUID,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_categories_parent_id", categories_table.c.parent_id)
Index(
    "idx_categories_active_sort",
    categories_table.c.is_active,
    categories_table.c.sort_order,
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(255), nullable=False),
    Column("slug", String(255), nullable=False, unique=True),
    Column("excerpt", Text, nullable=True),
    Column("content", Text, nullable=False),
    Column("featured_image", String(255), nullable=True),
    Column("meta_title", String(255), nullable=True),
    Column("meta_description", Text, nullable=True),
    Column("meta_keywords", JSONB, nullable=False, server_default=text("'[]'::jsonb")),
    Column("status", String(20), nullable=False, server_default="draft"),
    Column("visibility", String(20), nullable=False, server_default="public"),
    Column("password", String(255), nullable=True),
    Column("allow_comments", Boolean, nullable=False, server_default="true"),
    Column("is_featured", Boolean, nullable=False, server_default="false"),
    Column("is_sticky", Boolean, nullable=False, server_default="false"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_posts_status_published_at", posts_table.c.status, posts_table.c.published_at)
Index("idx_posts_visibility", posts_table.c.visibility)
Index("idx_posts_featured_sticky", posts_table.c.is_featured, posts_table.c.is_sticky)
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_category_id", posts_table.c.category_id)
Index("idx_posts_deleted_at", posts_table.c.deleted_at)

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("name_en", String(255), nullable=True),
    Column("name_ar", String(255), nullable=True),
    Column("slug", String(255), nullable=False, unique=True),
    Column("slug_en", String(255), nullable=True),
    Column("slug_ar", String(255), nullable=True),
    Column("description", Text, nullable=True),
    Column("description_en", Text, nullable=True),
    Column("description_ar", Text, nullable=True),
    Column("color", String(7), nullable=False, server_default="#6B7280"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("post_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

# Names are unique among live tags only
Index(
    "idx_tags_name_live",
    tags_table.c.name,
    unique=True,
    postgresql_where=tags_table.c.deleted_at.is_(None),
)
Index("idx_tags_active_post_count", tags_table.c.is_active, tags_table.c.post_count)

# ============================================================================
# POST_TAGS TABLE (junction table for many-to-many relationship)
# ============================================================================
post_tags_table = Table(
    "post_tags",
    metadata,
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_post_tags_tag_id", post_tags_table.c.tag_id)

# ============================================================================
# POST_LIKES TABLE (which users liked which post)
# ============================================================================
post_likes_table = Table(
    "post_likes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
)

Index("idx_post_likes_user_id", post_likes_table.c.user_id)
