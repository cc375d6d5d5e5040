"""
Product API endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status, Query, Response

from storefront.api.deps import get_repositories, require_permission
from storefront.errors import (
    RecordNotFoundError,
    EditConflictError,
    OutOfStockError,
    ReviewNotPermittedError,
    ValidationFailedError
)
from storefront.models.user import User
from storefront.repositories import Repositories
from storefront.schemas.filters import Filters, validate_filters, sort_safelist
from storefront.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    RatingCreate,
    RatingResponse
)
from storefront.services.product_service import ProductService
from storefront.validator import Validator

router = APIRouter(prefix="/v1/products", tags=["products"])

PRODUCT_SORT_SAFELIST = sort_safelist("id", "title", "price", "quantity", "total_rating")


def get_product_service(repos: Repositories = Depends(get_repositories)) -> ProductService:
    """Dependency to get ProductService instance"""
    return ProductService(repos)


def parse_category_ids(v: Validator, raw: str) -> List[int]:
    """Read a comma-separated list of category IDs"""
    ids = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit():
            v.add_error("categories", "must be a comma-separated list of category IDs")
            return []
        ids.append(int(part))
    return ids


@router.get("", response_model=ProductListResponse, summary="List products")
def list_products(
    title: str = Query("", description="Full-text search on the title"),
    categories: str = Query("", description="Comma-separated category IDs"),
    page: int = Query(1, description="Page number"),
    page_size: int = Query(20, description="Products per page"),
    sort: str = Query("id", description="Sort key, prefix with - for descending"),
    user: User = Depends(require_permission("products:read")),
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve one page of products

    - **title**: matched against the title; empty matches everything
    - **categories**: only products in any of these categories
    - **sort**: id, title, price, quantity or total_rating, optionally prefixed with -
    """
    v = Validator()
    category_ids = parse_category_ids(v, categories)
    filters = Filters(page=page, page_size=page_size, sort=sort, sort_safelist=PRODUCT_SORT_SAFELIST)
    validate_filters(v, filters)
    if not v.valid():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=v.errors)

    return service.list_products(title, category_ids, filters)


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(
    product_id: int,
    user: User = Depends(require_permission("products:read")),
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve a specific product by ID, with categories and reviews
    """
    try:
        return service.get_product(product_id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id={product_id} not found"
        )


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED, summary="Create product")
def create_product(
    product_data: ProductCreate,
    response: Response,
    user: User = Depends(require_permission("products:write")),
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product owned by the caller

    - **title**: required, at most 1000 bytes
    - **description**: more than 10 bytes
    - **price**: required, must be positive
    - **quantity**: stock, must not be negative
    - **categories**: at least one existing category ID, no duplicates
    """
    try:
        product = service.create_product(product_data, user.id)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    response.headers["Location"] = f"/v1/products/{product.id}"
    return product


@router.patch("/{product_id}", response_model=ProductResponse, summary="Update product")
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    user: User = Depends(require_permission("products:write")),
    service: ProductService = Depends(get_product_service)
):
    """
    Update an existing product

    All fields are optional. Send **version** to make sure nobody changed the
    product since you read it.
    """
    try:
        return service.update_product(product_id, product_data)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id={product_id} not found"
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except (EditConflictError, OutOfStockError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/{product_id}", summary="Delete product")
def delete_product(
    product_id: int,
    user: User = Depends(require_permission("products:write")),
    service: ProductService = Depends(get_product_service)
):
    """
    Delete a product; order items and reviews referencing it are removed too
    """
    try:
        service.delete_product(product_id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id={product_id} not found"
        )
    return {"message": "product successfully deleted"}


@router.get("/{product_id}/reviews", response_model=List[RatingResponse], summary="List product reviews")
def list_reviews(
    product_id: int,
    user: User = Depends(require_permission("products:read")),
    service: ProductService = Depends(get_product_service)
):
    try:
        return service.get_reviews(product_id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id={product_id} not found"
        )


@router.post(
    "/{product_id}/reviews",
    response_model=RatingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review product"
)
def create_review(
    product_id: int,
    review: RatingCreate,
    response: Response,
    user: User = Depends(require_permission("products:read")),
    service: ProductService = Depends(get_product_service)
):
    """
    Review a product the caller has ordered before

    - **rating**: must not be negative
    - **comment**: free text
    """
    try:
        rating = service.add_review(product_id, user.id, review)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id={product_id} not found"
        )
    except ReviewNotPermittedError as e:
        raise HTTPException(status_code=422, detail=str(e))

    response.headers["Location"] = f"/v1/products/{product_id}"
    return rating
