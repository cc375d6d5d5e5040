"""
Category API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Response

from storefront.api.deps import get_repositories, require_permission
from storefront.errors import RecordNotFoundError, EditConflictError, ValidationFailedError
from storefront.models.user import User
from storefront.repositories import Repositories
from storefront.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse
)
from storefront.services.category_service import CategoryService

router = APIRouter(prefix="/v1/categories", tags=["categories"])


def get_category_service(repos: Repositories = Depends(get_repositories)) -> CategoryService:
    """Dependency to get CategoryService instance"""
    return CategoryService(repos)


@router.get("", response_model=CategoryListResponse, summary="List categories")
def list_categories(
    user: User = Depends(require_permission("products:read")),
    service: CategoryService = Depends(get_category_service)
):
    return service.list_categories()


@router.get("/{category_id}", response_model=CategoryResponse, summary="Get category by ID")
def get_category(
    category_id: int,
    user: User = Depends(require_permission("products:read")),
    service: CategoryService = Depends(get_category_service)
):
    try:
        return service.get_category(category_id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category with id={category_id} not found"
        )


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED, summary="Create category")
def create_category(
    category_data: CategoryCreate,
    response: Response,
    user: User = Depends(require_permission("products:write")),
    service: CategoryService = Depends(get_category_service)
):
    """
    Create a new category

    - **title**: required, at most 1000 bytes
    - **image**: image URL (optional)
    """
    try:
        category = service.create_category(category_data)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)

    response.headers["Location"] = f"/v1/categories/{category.id}"
    return category


@router.patch("/{category_id}", response_model=CategoryResponse, summary="Update category")
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    user: User = Depends(require_permission("products:write")),
    service: CategoryService = Depends(get_category_service)
):
    try:
        return service.update_category(category_id, category_data)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category with id={category_id} not found"
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except EditConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/{category_id}", summary="Delete category")
def delete_category(
    category_id: int,
    user: User = Depends(require_permission("products:write")),
    service: CategoryService = Depends(get_category_service)
):
    try:
        service.delete_category(category_id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category with id={category_id} not found"
        )
    return {"message": "category successfully deleted"}
