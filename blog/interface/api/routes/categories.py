"""Category routes."""

from typing import Optional
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from blog.application.usecase.category import (
    CategoryListResponse,
    CategoryTreeRequest,
    CreateCategoryRequest,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryUseCase,
    GetCategoryBreadcrumbUseCase,
    GetCategoryChildrenUseCase,
    GetCategoryRequest,
    GetCategoryResponse,
    GetCategoryUseCase,
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
    ListCategoryPostsRequest,
    ListCategoryPostsResponse,
    ListCategoryPostsUseCase,
    UpdateCategoryRequest,
    UpdateCategoryUseCase,
)
from blog.application.usecase.items import CategoryItem
from blog.domain.repository import CategorySortField
from blog.domain.value import PostStatus, Slug, SortDirection
from blog.interface.api.envelope import Envelope, ok

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


class CategoryAPIRequest(BaseModel):
    """API request for creating a category."""

    name: str = Field(min_length=1, max_length=255)
    slug: Optional[Slug] = None
    description: str | None = None
    image: str | None = Field(default=None, max_length=255)
    color: str | None = Field(default=None, max_length=7)
    is_active: bool = True
    is_featured: bool = False
    sort_order: int = Field(default=0, ge=0)
    parent_id: UUID | None = None


class UpdateCategoryAPIRequest(BaseModel):
    """API request for updating a category. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: Optional[Slug] = None
    description: str | None = None
    image: str | None = Field(default=None, max_length=255)
    color: str | None = Field(default=None, max_length=7)
    is_active: bool | None = None
    is_featured: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)
    parent_id: UUID | None = None


def _as_str(value: UUID | None) -> str | None:
    return str(value) if value else None


@router.get("", response_model=Envelope[ListCategoriesResponse])
async def list_categories(
    use_case: FromDishka[ListCategoriesUseCase],
    active: bool | None = None,
    featured: bool | None = None,
    root: bool = False,
    parent_id: UUID | None = None,
    search: str | None = None,
    order_by: CategorySortField = CategorySortField.SORT_ORDER,
    order_direction: SortDirection = SortDirection.ASC,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=15, ge=1, le=100),
) -> Envelope[ListCategoriesResponse]:
    """List categories with filters, ordering and pagination.

    Example:
        GET /categories?root=true&order_by=name&per_page=20
    """
    with logfire.span("api.list_categories", order_by=order_by.value, page=page):
        result = await use_case.execute(
            ListCategoriesRequest(
                is_active=active,
                is_featured=featured,
                root=root,
                parent_id=_as_str(parent_id),
                search=search,
                order_by=order_by,
                order_direction=order_direction,
                page=page,
                per_page=per_page,
            )
        )
        return ok(result, "Categories retrieved successfully")


@router.post(
    "",
    response_model=Envelope[CategoryItem],
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    request: CategoryAPIRequest,
    use_case: FromDishka[CreateCategoryUseCase],
) -> Envelope[CategoryItem]:
    """Create a category. The slug is derived from the name when omitted."""
    with logfire.span("api.create_category", name=request.name):
        result = await use_case.execute(
            CreateCategoryRequest(
                **request.model_dump(exclude={"parent_id", "slug"}),
                slug=request.slug,
                parent_id=_as_str(request.parent_id),
            )
        )
        return ok(result, "Category created successfully")


@router.get("/{category_id}", response_model=Envelope[GetCategoryResponse])
async def get_category(
    category_id: UUID, use_case: FromDishka[GetCategoryUseCase]
) -> Envelope[GetCategoryResponse]:
    """Show a category with its parent, children and all descendants."""
    result = await use_case.execute(GetCategoryRequest(category_id=str(category_id)))
    return ok(result, "Category retrieved successfully")


@router.put("/{category_id}", response_model=Envelope[CategoryItem])
async def update_category(
    category_id: UUID,
    request: UpdateCategoryAPIRequest,
    use_case: FromDishka[UpdateCategoryUseCase],
) -> Envelope[CategoryItem]:
    """Update a category. Only fields present in the body are changed."""
    with logfire.span("api.update_category", category_id=str(category_id)):
        fields = {field: getattr(request, field) for field in request.model_fields_set}
        if "parent_id" in fields:
            fields["parent_id"] = _as_str(fields["parent_id"])
        result = await use_case.execute(
            UpdateCategoryRequest(category_id=str(category_id), **fields)
        )
        return ok(result, "Category updated successfully")


@router.delete("/{category_id}", response_model=Envelope[None])
async def delete_category(
    category_id: UUID, use_case: FromDishka[DeleteCategoryUseCase]
) -> Envelope[None]:
    """Soft delete a category without children or posts."""
    await use_case.execute(DeleteCategoryRequest(category_id=str(category_id)))
    return ok(None, "Category deleted successfully")


@router.get("/{category_id}/posts", response_model=Envelope[ListCategoryPostsResponse])
async def list_category_posts(
    category_id: UUID,
    use_case: FromDishka[ListCategoryPostsUseCase],
    post_status: PostStatus | None = Query(default=None, alias="status"),
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=15, ge=1, le=100),
) -> Envelope[ListCategoryPostsResponse]:
    """Page through the posts of a category."""
    result = await use_case.execute(
        ListCategoryPostsRequest(
            category_id=str(category_id),
            status=post_status,
            search=search,
            page=page,
            per_page=per_page,
        )
    )
    return ok(result, "Category posts retrieved successfully")


@router.get("/{category_id}/children", response_model=Envelope[CategoryListResponse])
async def get_category_children(
    category_id: UUID, use_case: FromDishka[GetCategoryChildrenUseCase]
) -> Envelope[CategoryListResponse]:
    """Direct children ordered by sort_order then name."""
    result = await use_case.execute(CategoryTreeRequest(category_id=str(category_id)))
    return ok(result, "Category children retrieved successfully")


@router.get(
    "/{category_id}/breadcrumb", response_model=Envelope[CategoryListResponse]
)
async def get_category_breadcrumb(
    category_id: UUID, use_case: FromDishka[GetCategoryBreadcrumbUseCase]
) -> Envelope[CategoryListResponse]:
    """Ancestor chain from the root down to the category."""
    result = await use_case.execute(CategoryTreeRequest(category_id=str(category_id)))
    return ok(result, "Category breadcrumb retrieved successfully")
