"""Category use cases."""

from .category_posts import (
    ListCategoryPostsRequest,
    ListCategoryPostsResponse,
    ListCategoryPostsUseCase,
)
from .category_tree import (
    CategoryListResponse,
    CategoryTreeRequest,
    GetCategoryBreadcrumbUseCase,
    GetCategoryChildrenUseCase,
)
from .create_category import CreateCategoryRequest, CreateCategoryUseCase
from .delete_category import (
    DeleteCategoryRequest,
    DeleteCategoryResponse,
    DeleteCategoryUseCase,
)
from .get_category import GetCategoryRequest, GetCategoryResponse, GetCategoryUseCase
from .list_categories import (
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
)
from .update_category import UpdateCategoryRequest, UpdateCategoryUseCase

__all__ = [
    "CategoryListResponse",
    "CategoryTreeRequest",
    "CreateCategoryRequest",
    "CreateCategoryUseCase",
    "DeleteCategoryRequest",
    "DeleteCategoryResponse",
    "DeleteCategoryUseCase",
    "GetCategoryBreadcrumbUseCase",
    "GetCategoryChildrenUseCase",
    "GetCategoryRequest",
    "GetCategoryResponse",
    "GetCategoryUseCase",
    "ListCategoriesRequest",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "ListCategoryPostsRequest",
    "ListCategoryPostsResponse",
    "ListCategoryPostsUseCase",
    "UpdateCategoryRequest",
    "UpdateCategoryUseCase",
]
