"""
SQLAlchemy Product and Rating models
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storefront.database import Base
from storefront.models.category import product_category

# Matched against driver error text to detect stock underflow
QUANTITY_CHECK = "quantity_check"


class Product(Base):
    """Product database model"""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    title = Column(String(1000), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    description = Column(Text, nullable=False, default="")
    images = Column(JSON, nullable=False, default=list)
    colors = Column(JSON, nullable=False, default=list)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Float, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    categories = relationship("Category", secondary=product_category, order_by="Category.id", lazy="selectin")
    ratings = relationship("Rating", order_by="Rating.id", lazy="selectin", passive_deletes=True)

    # Constraints
    __table_args__ = (
        CheckConstraint("quantity >= 0", name=QUANTITY_CHECK),
        CheckConstraint("price > 0", name="price_check"),
        Index(
            "products_title_fts_idx",
            func.to_tsvector("simple", title),
            postgresql_using="gin",
        ).ddl_if(dialect="postgresql"),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, title='{self.title}', price={self.price}, quantity={self.quantity})>"


class Rating(Base):
    """Product rating left by a user who ordered the product"""

    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")

    def __repr__(self):
        return f"<Rating(product_id={self.product_id}, user_id={self.user_id}, rating={self.rating})>"
