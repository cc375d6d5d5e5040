"""
Order API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query, Response

from storefront.api.deps import get_repositories, require_permission
from storefront.errors import RecordNotFoundError, EditConflictError, OutOfStockError, ValidationFailedError
from storefront.models.user import User
from storefront.repositories import Repositories
from storefront.schemas.filters import Filters, validate_filters, sort_safelist
from storefront.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    OrderListResponse
)
from storefront.services.order_service import OrderService
from storefront.validator import Validator

router = APIRouter(prefix="/v1/users/orders", tags=["orders"])

ORDER_SORT_SAFELIST = sort_safelist("id", "ordered_at", "status", "total_price")


def get_order_service(repos: Repositories = Depends(get_repositories)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(repos)


@router.get("", response_model=OrderListResponse, summary="List my orders")
def list_orders(
    page: int = Query(1, description="Page number"),
    page_size: int = Query(20, description="Orders per page"),
    sort: str = Query("id", description="Sort key, prefix with - for descending"),
    user: User = Depends(require_permission("products:read")),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve one page of the caller's orders
    """
    v = Validator()
    filters = Filters(page=page, page_size=page_size, sort=sort, sort_safelist=ORDER_SORT_SAFELIST)
    validate_filters(v, filters)
    if not v.valid():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=v.errors)

    return service.list_orders(user.id, filters)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Place order")
def place_order(
    order_data: OrderCreate,
    response: Response,
    user: User = Depends(require_permission("products:order")),
    service: OrderService = Depends(get_order_service)
):
    """
    Place an order

    Process:
    1. Validate address and items
    2. Reserve stock for every item (optimistic concurrency)
    3. Calculate total price
    4. Save order and items
    5. Publish OrderPlaced event to RabbitMQ

    On 409 the stock was either changed concurrently or is insufficient;
    nothing was reserved, re-read the products and try again.
    """
    try:
        order = service.place_order(user.id, order_data)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="one or more products not found"
        )
    except (EditConflictError, OutOfStockError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    response.headers["Location"] = f"/v1/users/orders/{order.id}"
    return order


@router.get("/{order_id}", response_model=OrderResponse, summary="Get my order by ID")
def get_order(
    order_id: int,
    user: User = Depends(require_permission("products:read")),
    service: OrderService = Depends(get_order_service)
):
    try:
        return service.get_order(order_id, user.id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id={order_id} not found"
        )


@router.put("/{order_id}", response_model=OrderResponse, summary="Update order")
def update_order(
    order_id: int,
    order_data: OrderUpdate,
    user: User = Depends(require_permission("products:write")),
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status, address or total price

    - **status**: integer status code, not negative
    - **version**: optional, the version you last read
    """
    try:
        return service.update_order(order_id, order_data)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id={order_id} not found"
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except EditConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/{order_id}", summary="Delete my order")
def delete_order(
    order_id: int,
    user: User = Depends(require_permission("products:read")),
    service: OrderService = Depends(get_order_service)
):
    try:
        service.delete_order(order_id, user.id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id={order_id} not found"
        )
    return {"message": "order successfully deleted"}
