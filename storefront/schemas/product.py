"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from storefront.schemas.category import CategoryResponse
from storefront.schemas.filters import Metadata
from storefront.validator import Validator, unique


class ProductBase(BaseModel):
    """Base Product schema with common fields"""
    title: str = ""
    description: str = ""
    quantity: int = 0
    price: float = 0
    colors: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    categories: List[int] = Field(default_factory=list, description="Category IDs")


class ProductUpdate(BaseModel):
    """Schema for updating a product (all fields optional)"""
    title: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None
    colors: Optional[List[str]] = None
    images: Optional[List[str]] = None
    version: Optional[int] = Field(None, description="Version the client last read")


class RatingCreate(BaseModel):
    """Schema for submitting a product review"""
    rating: int = 0
    comment: str = ""


class RatingResponse(BaseModel):
    """Schema for a single review"""
    user_id: int
    rating: int
    comment: str

    model_config = ConfigDict(from_attributes=True)


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: int
    owner_id: int
    created_at: datetime
    version: int
    categories: List[CategoryResponse] = Field(default_factory=list)
    total_rating: float = 0
    ratings: List[RatingResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    """Schema for one page of products"""
    products: list[ProductResponse]
    metadata: Metadata


def validate_product(v: Validator, product: ProductCreate, owner_id: int) -> None:
    v.check(product.title != "", "title", "must be provided")
    v.check(len(product.title.encode()) <= 1000, "title", "must not be more than 1000 bytes long")
    v.check(len(product.description.encode()) > 10, "description", "must be more than 10 bytes long")
    v.check(product.price != 0, "price", "must be provided")
    v.check(product.price > 0, "price", "must be a positive value")
    v.check(product.quantity >= 0, "quantity", "must not be negative")
    v.check(owner_id >= 0, "owner", "must be provided")
    v.check(len(product.categories) >= 1, "categories", "must contain at least 1 category")
    v.check(unique(product.categories), "categories", "must not contain duplicate values")


def validate_review(v: Validator, review: RatingCreate, user_id: int) -> None:
    # No upper bound on rating
    v.check(review.rating >= 0, "rating", "must not be less than 0")
    v.check(user_id >= 0, "user_id", "must be provided")
