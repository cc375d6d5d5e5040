"""
No-op repositories for tests that exercise routing without a database

Nothing is stored: lookups report not found, listings are empty and writes
succeed without effect.
"""
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Sequence, Tuple

from storefront.errors import RecordNotFoundError
from storefront.models import Category, Product, Order, Rating, User, Token
from storefront.models.user import DEFAULT_PROFILE_PIC
from storefront.repositories.token_repository import generate_token
from storefront.schemas.category import CategoryCreate
from storefront.schemas.filters import Filters, Metadata, calculate_metadata
from storefront.schemas.order import OrderItemBase, OrderDraft
from storefront.schemas.product import ProductBase
from storefront.schemas.user import UserCreate


class MockProductRepository:
    def get_by_id(self, product_id: int) -> Product:
        raise RecordNotFoundError()

    def get_row(self, product_id: int):
        raise RecordNotFoundError()

    def get_all(self, title: str, category_ids: Sequence[int],
                filters: Filters) -> Tuple[List[Tuple[Product, float]], Metadata]:
        return [], calculate_metadata(0, filters.page, filters.page_size)

    def create(self, product_data: ProductBase, owner_id: int, categories: List[Category]) -> Product:
        return Product(id=0, owner_id=owner_id, version=1, created_at=datetime.now(timezone.utc),
                       categories=list(categories), **product_data.model_dump(include=set(ProductBase.model_fields)))

    def update(self, product_id: int, version: int, product_data: ProductBase) -> int:
        return version + 1

    def delete(self, product_id: int) -> None:
        return None

    def reserve_stock(self, product_id: int, quantity: int, version: int) -> int:
        return version + 1


class MockCategoryRepository:
    def get_all(self) -> List[Category]:
        return []

    def get_by_id(self, category_id: int) -> Category:
        raise RecordNotFoundError()

    def get_many(self, category_ids: Sequence[int]) -> List[Category]:
        if category_ids:
            raise RecordNotFoundError("provided category or categories not found")
        return []

    def create(self, category_data: CategoryCreate) -> Category:
        return Category(id=0, version=1, **category_data.model_dump())

    def update(self, category_id: int, version: int, category_data: CategoryCreate) -> int:
        return version + 1

    def delete(self, category_id: int) -> None:
        return None


class MockOrderRepository:
    def add(self, user_id: int, address: str, total_price: float, items: Sequence[OrderItemBase]) -> Order:
        return Order(id=0, user_id=user_id, address=address, total_price=total_price, status=0, version=1,
                     ordered_at=datetime.now(timezone.utc))

    def get_by_id(self, order_id: int) -> Order:
        raise RecordNotFoundError()

    def get_all_for_user(self, user_id: int, filters: Filters) -> Tuple[List[Order], Metadata]:
        return [], calculate_metadata(0, filters.page, filters.page_size)

    def update(self, order_id: int, version: int, order_data: OrderDraft) -> int:
        return version + 1

    def delete(self, order_id: int) -> None:
        return None

    def has_user_ordered_product(self, user_id: int, product_id: int) -> bool:
        return False


class MockRatingRepository:
    def insert(self, product_id: int, user_id: int, rating: int, comment: str) -> Rating:
        return Rating(id=0, product_id=product_id, user_id=user_id, rating=rating, comment=comment)

    def get_for_product(self, product_id: int) -> List[Rating]:
        return []


class MockUserRepository:
    def insert(self, user_data: UserCreate, password_hash: str) -> User:
        return User(id=0, password_hash=password_hash, activated=False, version=1, profile_pic=DEFAULT_PROFILE_PIC,
                    created_at=datetime.now(timezone.utc), **user_data.model_dump(exclude={"password"}))

    def get_by_email(self, email: str) -> User:
        raise RecordNotFoundError()

    def update(self, user_id: int, version: int, **fields) -> int:
        return version + 1

    def get_for_token(self, token_scope: str, token_plaintext: str) -> User:
        raise RecordNotFoundError()


class MockTokenRepository:
    def new(self, user_id: int, ttl: timedelta, scope: str) -> Tuple[str, Token]:
        return generate_token(user_id, ttl, scope)

    def insert(self, token: Token) -> None:
        return None

    def delete_all_for_user(self, scope: str, user_id: int) -> None:
        return None


class MockPermissionRepository:
    def get_all_for_user(self, user_id: int) -> List[str]:
        return []

    def add_for_user(self, user_id: int, *codes: str) -> None:
        return None

    def ensure_codes(self, codes: Iterable[str]) -> None:
        return None
