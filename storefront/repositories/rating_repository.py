"""
Rating Repository - Data Access Layer
"""
from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.errors import RecordNotFoundError
from storefront.models.product import Rating


class RatingRepository:
    """Repository for product reviews"""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, product_id: int, user_id: int, rating: int, comment: str) -> Rating:
        """Create a review"""
        review = Rating(product_id=product_id, user_id=user_id, rating=rating, comment=comment)
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def get_for_product(self, product_id: int) -> List[Rating]:
        """Get every review of a product"""
        if product_id < 1:
            raise RecordNotFoundError()

        return list(self.db.scalars(
            select(Rating).where(Rating.product_id == product_id).order_by(Rating.id)
        ))
