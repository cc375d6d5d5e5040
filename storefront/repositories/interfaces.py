"""
Repository interfaces

Services and routers depend on these protocols; the SQL repositories and the
no-op doubles in ``mock`` both satisfy them.
"""
from datetime import timedelta
from typing import Iterable, List, Protocol, Sequence, Tuple

from storefront.models import Category, Product, Order, Rating, User, Token
from storefront.schemas.category import CategoryCreate
from storefront.schemas.filters import Filters, Metadata
from storefront.schemas.order import OrderItemBase, OrderDraft
from storefront.schemas.product import ProductBase
from storefront.schemas.user import UserCreate


class Products(Protocol):
    def get_by_id(self, product_id: int) -> Product: ...
    def get_row(self, product_id: int): ...
    def get_all(self, title: str, category_ids: Sequence[int],
                filters: Filters) -> Tuple[List[Tuple[Product, float]], Metadata]: ...
    def create(self, product_data: ProductBase, owner_id: int, categories: List[Category]) -> Product: ...
    def update(self, product_id: int, version: int, product_data: ProductBase) -> int: ...
    def delete(self, product_id: int) -> None: ...
    def reserve_stock(self, product_id: int, quantity: int, version: int) -> int: ...


class Categories(Protocol):
    def get_all(self) -> List[Category]: ...
    def get_by_id(self, category_id: int) -> Category: ...
    def get_many(self, category_ids: Sequence[int]) -> List[Category]: ...
    def create(self, category_data: CategoryCreate) -> Category: ...
    def update(self, category_id: int, version: int, category_data: CategoryCreate) -> int: ...
    def delete(self, category_id: int) -> None: ...


class Orders(Protocol):
    def add(self, user_id: int, address: str, total_price: float, items: Sequence[OrderItemBase]) -> Order: ...
    def get_by_id(self, order_id: int) -> Order: ...
    def get_all_for_user(self, user_id: int, filters: Filters) -> Tuple[List[Order], Metadata]: ...
    def update(self, order_id: int, version: int, order_data: OrderDraft) -> int: ...
    def delete(self, order_id: int) -> None: ...
    def has_user_ordered_product(self, user_id: int, product_id: int) -> bool: ...


class Ratings(Protocol):
    def insert(self, product_id: int, user_id: int, rating: int, comment: str) -> Rating: ...
    def get_for_product(self, product_id: int) -> List[Rating]: ...


class Users(Protocol):
    def insert(self, user_data: UserCreate, password_hash: str) -> User: ...
    def get_by_email(self, email: str) -> User: ...
    def update(self, user_id: int, version: int, **fields) -> int: ...
    def get_for_token(self, token_scope: str, token_plaintext: str) -> User: ...


class Tokens(Protocol):
    def new(self, user_id: int, ttl: timedelta, scope: str) -> Tuple[str, Token]: ...
    def insert(self, token: Token) -> None: ...
    def delete_all_for_user(self, scope: str, user_id: int) -> None: ...


class Permissions(Protocol):
    def get_all_for_user(self, user_id: int) -> List[str]: ...
    def add_for_user(self, user_id: int, *codes: str) -> None: ...
    def ensure_codes(self, codes: Iterable[str]) -> None: ...
