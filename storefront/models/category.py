"""
SQLAlchemy Category model
"""
from sqlalchemy import Column, Integer, String, Table, ForeignKey
from storefront.database import Base


product_category = Table(
    "product_category",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    """Category database model"""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(1000), nullable=False)
    image = Column(String(500), nullable=False, default="")
    version = Column(Integer, nullable=False, default=1)

    def __repr__(self):
        return f"<Category(id={self.id}, title='{self.title}')>"
