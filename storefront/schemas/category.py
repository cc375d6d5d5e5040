"""
Pydantic schemas and validation rules for categories
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional

from storefront.validator import Validator


class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    title: str = ""
    image: str = ""


class CategoryUpdate(BaseModel):
    """Schema for updating a category (all fields optional)"""
    title: Optional[str] = None
    image: Optional[str] = None
    version: Optional[int] = None


class CategoryResponse(BaseModel):
    """Schema for category response"""
    id: int
    title: str
    image: str
    version: int

    model_config = ConfigDict(from_attributes=True)


class CategoryListResponse(BaseModel):
    """Schema for list of categories response"""
    categories: list[CategoryResponse]


def validate_category(v: Validator, category: CategoryCreate) -> None:
    v.check(category.title != "", "title", "must be provided")
    v.check(len(category.title.encode()) <= 1000, "title", "must not be more than 1000 bytes long")
