"""
Order Repository - Data Access Layer
"""
from typing import List, Sequence, Tuple
from sqlalchemy import select, delete, exists, func
from sqlalchemy.orm import Session

from storefront.errors import RecordNotFoundError
from storefront.models.order import Order, OrderItem
from storefront.repositories.versioning import update_versioned
from storefront.schemas.filters import Filters, Metadata, calculate_metadata
from storefront.schemas.order import OrderItemBase, OrderDraft


class OrderRepository:
    """Repository for Order CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, user_id: int, address: str, total_price: float, items: Sequence[OrderItemBase]) -> Order:
        """
        Insert an order header and one row per item

        Runs inside the caller's transaction: flushes to obtain the order ID
        but does not commit.
        """
        order = Order(user_id=user_id, address=address, total_price=total_price)
        order.items = [OrderItem(product_id=i.product_id, quantity=i.quantity) for i in items]
        self.db.add(order)
        self.db.flush()
        return order

    def get_by_id(self, order_id: int) -> Order:
        """Get order by ID, with its items"""
        if order_id < 1:
            raise RecordNotFoundError()

        order = self.db.get(Order, order_id, populate_existing=True)
        if order is None:
            raise RecordNotFoundError()
        return order

    def get_all_for_user(self, user_id: int, filters: Filters) -> Tuple[List[Order], Metadata]:
        """Get one page of a user's orders; total count comes from a window function"""
        if user_id < 1:
            raise RecordNotFoundError()

        sort_columns = {
            "id": Order.id,
            "ordered_at": Order.ordered_at,
            "status": Order.status,
            "total_price": Order.total_price,
        }
        column = sort_columns[filters.sort_column()]
        order_by = column.desc() if filters.sort_descending() else column.asc()

        stmt = (
            select(func.count().over().label("total_records"), Order)
            .where(Order.user_id == user_id)
            .order_by(order_by, Order.id.asc())
            .limit(filters.limit())
            .offset(filters.offset())
        )
        rows = self.db.execute(stmt).all()

        total_records = rows[0].total_records if rows else 0
        return [row.Order for row in rows], calculate_metadata(total_records, filters.page, filters.page_size)

    def update(self, order_id: int, version: int, order_data: OrderDraft) -> int:
        """Update status, address and total if the version still matches; returns the new version"""
        new_version = update_versioned(
            self.db, Order, order_id, version,
            status=order_data.status,
            address=order_data.address,
            total_price=order_data.total_price
        )
        self.db.commit()
        return new_version

    def delete(self, order_id: int) -> None:
        """Delete order; its items cascade"""
        if order_id < 1:
            raise RecordNotFoundError()

        result = self.db.execute(delete(Order).where(Order.id == order_id))
        if result.rowcount == 0:
            self.db.rollback()
            raise RecordNotFoundError()
        self.db.commit()

    def has_user_ordered_product(self, user_id: int, product_id: int) -> bool:
        """True if any order placed by the user contains the product"""
        if product_id < 1:
            raise RecordNotFoundError()

        stmt = select(
            exists()
            .where(Order.id == OrderItem.order_id)
            .where(Order.user_id == user_id, OrderItem.product_id == product_id)
        )
        return bool(self.db.scalar(stmt))
