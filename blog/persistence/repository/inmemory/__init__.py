"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .like import InMemoryPostLikeRepository
from .post import InMemoryPostRepository
from .store import InMemoryDatabase
from .tag import InMemoryTagRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCategoryRepository",
    "InMemoryDatabase",
    "InMemoryPostLikeRepository",
    "InMemoryPostRepository",
    "InMemoryTagRepository",
    "InMemoryUserRepository",
]
