"""
Repositories package
"""
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from storefront.repositories.interfaces import (
    Products,
    Categories,
    Orders,
    Ratings,
    Users,
    Tokens,
    Permissions
)
from storefront.repositories.category_repository import CategoryRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.rating_repository import RatingRepository
from storefront.repositories.user_repository import UserRepository
from storefront.repositories.token_repository import TokenRepository
from storefront.repositories.permission_repository import PermissionRepository
from storefront.repositories.mock import (
    MockProductRepository,
    MockCategoryRepository,
    MockOrderRepository,
    MockRatingRepository,
    MockUserRepository,
    MockTokenRepository,
    MockPermissionRepository
)


@dataclass
class Repositories:
    """One repository per entity, sharing a single session"""
    products: Products
    categories: Categories
    orders: Orders
    ratings: Ratings
    users: Users
    tokens: Tokens
    permissions: Permissions
    session: Optional[Session] = None

    @contextmanager
    def atomic(self):
        """
        Run a block as one transaction

        Commits when the block finishes, rolls back on any exception.
        """
        if self.session is None:
            yield
            return
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise


def new_repositories(db: Session) -> Repositories:
    return Repositories(
        products=ProductRepository(db),
        categories=CategoryRepository(db),
        orders=OrderRepository(db),
        ratings=RatingRepository(db),
        users=UserRepository(db),
        tokens=TokenRepository(db),
        permissions=PermissionRepository(db),
        session=db
    )


def new_mock_repositories() -> Repositories:
    return Repositories(
        products=MockProductRepository(),
        categories=MockCategoryRepository(),
        orders=MockOrderRepository(),
        ratings=MockRatingRepository(),
        users=MockUserRepository(),
        tokens=MockTokenRepository(),
        permissions=MockPermissionRepository()
    )


__all__ = [
    "Repositories",
    "new_repositories",
    "new_mock_repositories",
    "CategoryRepository",
    "ProductRepository",
    "OrderRepository",
    "RatingRepository",
    "UserRepository",
    "TokenRepository",
    "PermissionRepository"
]
