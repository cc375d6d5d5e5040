"""
SQLAlchemy Order model
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storefront.database import Base


class Order(Base):
    """Order database model"""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    ordered_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    status = Column(Integer, nullable=False, default=0)
    total_price = Column(Float, nullable=False)
    address = Column(String(255), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    items = relationship("OrderItem", order_by="OrderItem.id", lazy="selectin", passive_deletes=True)

    def __repr__(self):
        return f"<Order(id={self.id}, user_id={self.user_id}, total_price={self.total_price}, status={self.status})>"


class OrderItem(Base):
    """Order line; immutable once created"""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint("quantity > 0", name="order_item_quantity_check"),
    )

    def __repr__(self):
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"
