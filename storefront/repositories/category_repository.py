"""
Category Repository - Data Access Layer
"""
from typing import List, Sequence
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.errors import RecordNotFoundError
from storefront.models.category import Category
from storefront.repositories.versioning import update_versioned
from storefront.schemas.category import CategoryCreate


class CategoryRepository:
    """Repository for Category CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Category]:
        """Get all categories"""
        return list(self.db.scalars(select(Category).order_by(Category.id)))

    def get_by_id(self, category_id: int) -> Category:
        """Get category by ID"""
        if category_id < 1:
            raise RecordNotFoundError()

        category = self.db.get(Category, category_id)
        if category is None:
            raise RecordNotFoundError()
        return category

    def get_many(self, category_ids: Sequence[int]) -> List[Category]:
        """
        Get every listed category, in the order given

        Raises:
            RecordNotFoundError: If any of the IDs does not exist
        """
        if not category_ids:
            return []

        found = {
            c.id: c for c in self.db.scalars(select(Category).where(Category.id.in_(category_ids)))
        }
        missing = [i for i in category_ids if i not in found]
        if missing:
            raise RecordNotFoundError("provided category or categories not found")
        return [found[i] for i in category_ids]

    def create(self, category_data: CategoryCreate) -> Category:
        """Create new category"""
        category = Category(**category_data.model_dump())
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update(self, category_id: int, version: int, category_data: CategoryCreate) -> int:
        """Update title and image if the version still matches; returns the new version"""
        new_version = update_versioned(
            self.db, Category, category_id, version,
            title=category_data.title,
            image=category_data.image
        )
        self.db.commit()
        return new_version

    def delete(self, category_id: int) -> None:
        """Delete category"""
        if category_id < 1:
            raise RecordNotFoundError()

        result = self.db.execute(delete(Category).where(Category.id == category_id))
        if result.rowcount == 0:
            self.db.rollback()
            raise RecordNotFoundError()
        self.db.commit()
