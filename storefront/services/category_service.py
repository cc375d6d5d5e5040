"""
Category Service - Business Logic Layer
"""
from storefront.errors import EditConflictError
from storefront.repositories import Repositories
from storefront.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
    validate_category
)
from storefront.validator import Validator


class CategoryService:
    """Service layer for category business logic"""

    def __init__(self, repos: Repositories):
        self.repos = repos

    def list_categories(self) -> CategoryListResponse:
        return CategoryListResponse(
            categories=[CategoryResponse.model_validate(c) for c in self.repos.categories.get_all()]
        )

    def get_category(self, category_id: int) -> CategoryResponse:
        return CategoryResponse.model_validate(self.repos.categories.get_by_id(category_id))

    def create_category(self, category_data: CategoryCreate) -> CategoryResponse:
        v = Validator()
        validate_category(v, category_data)
        v.raise_if_invalid()

        return CategoryResponse.model_validate(self.repos.categories.create(category_data))

    def update_category(self, category_id: int, category_data: CategoryUpdate) -> CategoryResponse:
        """Apply a partial update; a stale client version is an edit conflict"""
        category = self.repos.categories.get_by_id(category_id)
        if category_data.version is not None and category_data.version != category.version:
            raise EditConflictError()

        merged = CategoryCreate(
            title=category.title if category_data.title is None else category_data.title,
            image=category.image if category_data.image is None else category_data.image
        )
        v = Validator()
        validate_category(v, merged)
        v.raise_if_invalid()

        new_version = self.repos.categories.update(category_id, category.version, merged)
        return CategoryResponse(id=category_id, title=merged.title, image=merged.image, version=new_version)

    def delete_category(self, category_id: int) -> None:
        self.repos.categories.delete(category_id)
