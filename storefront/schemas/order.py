"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime

from storefront.schemas.filters import Metadata
from storefront.validator import Validator


class OrderItemBase(BaseModel):
    """One requested (product, quantity) pair"""
    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., description="Quantity to order")

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    """Schema for placing an order"""
    address: str = ""
    order_items: List[OrderItemBase] = Field(default_factory=list)


class OrderUpdate(BaseModel):
    """Schema for updating an order (all fields optional)"""
    status: Optional[int] = None
    address: Optional[str] = None
    total_price: Optional[float] = None
    version: Optional[int] = None


class OrderDraft(BaseModel):
    """Order header values about to be written"""
    user_id: int
    status: int = 0
    address: str = ""
    total_price: float = 0


class OrderResponse(BaseModel):
    """Schema for order response"""
    id: int
    user_id: int
    ordered_at: datetime
    status: int
    address: str
    total_price: float
    version: int
    order_items: List[OrderItemBase] = Field(default_factory=list, validation_alias="items")

    model_config = ConfigDict(from_attributes=True)


class OrderListResponse(BaseModel):
    """Schema for one page of orders"""
    orders: list[OrderResponse]
    metadata: Metadata


def validate_order(v: Validator, order: OrderCreate, user_id: int) -> None:
    v.check(order.address != "", "address", "must be provided")
    v.check(user_id >= 0, "user", "must be provided")
    v.check(len(order.order_items) >= 1, "order_items", "must contain at least 1 order item")
    for item in order.order_items:
        if item.quantity <= 0:
            v.add_error("order_items", "quantity must be greater than zero")
            break


def validate_updated_order(v: Validator, order: OrderDraft) -> None:
    v.check(order.address != "", "address", "must be provided")
    v.check(order.user_id >= 0, "user", "must be provided")
    v.check(order.status >= 0, "status", "must be greater or equal to zero")
    v.check(order.total_price != 0, "total_price", "must be provided")
    v.check(order.total_price > 0, "total_price", "must be a positive value")
