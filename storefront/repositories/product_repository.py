"""
Product Repository - Data Access Layer
"""
from typing import List, Sequence, Tuple
from sqlalchemy import select, delete, func
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.errors import RecordNotFoundError, OutOfStockError
from storefront.models.category import Category, product_category
from storefront.models.product import Product, Rating, QUANTITY_CHECK
from storefront.repositories.versioning import update_versioned
from storefront.schemas.filters import Filters, Metadata, calculate_metadata
from storefront.schemas.product import ProductBase


def is_quantity_violation(exc: IntegrityError) -> bool:
    """True if the integrity error comes from the non-negative quantity check"""
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint is not None:
        return constraint == QUANTITY_CHECK
    return QUANTITY_CHECK in str(exc.orig)


class ProductRepository:
    """Repository for Product CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, product_id: int) -> Product:
        """Get product by ID, with categories and ratings"""
        if product_id < 1:
            raise RecordNotFoundError()

        product = self.db.get(Product, product_id, populate_existing=True)
        if product is None:
            raise RecordNotFoundError()
        return product

    def get_row(self, product_id: int) -> Row:
        """
        Read id, price, quantity and version straight from the table

        Bypasses the identity map so the version is the one currently stored.
        """
        if product_id < 1:
            raise RecordNotFoundError()

        row = self.db.execute(
            select(Product.id, Product.price, Product.quantity, Product.version)
            .where(Product.id == product_id)
        ).first()
        if row is None:
            raise RecordNotFoundError()
        return row

    def get_all(
        self,
        title: str,
        category_ids: Sequence[int],
        filters: Filters
    ) -> Tuple[List[Tuple[Product, float]], Metadata]:
        """
        Get one page of products matching a title search and category set

        The total count comes from a window function in the same query.

        Returns:
            ((product, average rating) pairs, pagination metadata)
        """
        ratings = (
            select(Rating.product_id, func.avg(Rating.rating).label("avg_rating"))
            .group_by(Rating.product_id)
            .subquery()
        )
        total_rating = func.coalesce(ratings.c.avg_rating, 0).label("total_rating")

        stmt = (
            select(func.count().over().label("total_records"), Product, total_rating)
            .outerjoin(ratings, ratings.c.product_id == Product.id)
        )
        if title:
            stmt = stmt.where(self._title_matches(title))
        # Only products filed under at least one (matching) category are listed
        categorized = select(product_category.c.product_id)
        if category_ids:
            categorized = categorized.where(product_category.c.category_id.in_(list(category_ids)))
        stmt = stmt.where(Product.id.in_(categorized))

        sort_columns = {
            "id": Product.id,
            "title": Product.title,
            "price": Product.price,
            "quantity": Product.quantity,
            "total_rating": total_rating,
        }
        column = sort_columns[filters.sort_column()]
        order = column.desc() if filters.sort_descending() else column.asc()

        stmt = stmt.order_by(order, Product.id.asc()).limit(filters.limit()).offset(filters.offset())
        rows = self.db.execute(stmt).all()

        total_records = rows[0].total_records if rows else 0
        products = [(row.Product, float(row.total_rating)) for row in rows]
        return products, calculate_metadata(total_records, filters.page, filters.page_size)

    def _title_matches(self, title: str):
        if self.db.get_bind().dialect.name == "postgresql":
            return func.to_tsvector("simple", Product.title).op("@@")(
                func.plainto_tsquery("simple", title)
            )
        return Product.title.icontains(title, autoescape=True)

    def create(self, product_data: ProductBase, owner_id: int, categories: List[Category]) -> Product:
        """Create new product linked to its categories"""
        product = Product(**product_data.model_dump(include=set(ProductBase.model_fields)), owner_id=owner_id)
        product.categories = list(categories)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update(self, product_id: int, version: int, product_data: ProductBase) -> int:
        """Overwrite product fields if the version still matches; returns the new version"""
        values = product_data.model_dump(include=set(ProductBase.model_fields))
        try:
            new_version = update_versioned(self.db, Product, product_id, version, **values)
        except IntegrityError as e:
            self.db.rollback()
            if is_quantity_violation(e):
                raise OutOfStockError("quantity must not be negative") from e
            raise
        self.db.commit()
        return new_version

    def delete(self, product_id: int) -> None:
        """Delete product; order items and ratings cascade"""
        if product_id < 1:
            raise RecordNotFoundError()

        result = self.db.execute(delete(Product).where(Product.id == product_id))
        if result.rowcount == 0:
            self.db.rollback()
            raise RecordNotFoundError()
        self.db.commit()

    def reserve_stock(self, product_id: int, quantity: int, version: int) -> int:
        """
        Decrement stock with a compare-and-swap on version

        Runs inside the caller's transaction and does not commit.

        Returns:
            The new version

        Raises:
            EditConflictError: If the version changed since it was read
            OutOfStockError: If the decrement would make quantity negative
        """
        try:
            return update_versioned(
                self.db, Product, product_id, version,
                quantity=Product.quantity - quantity
            )
        except IntegrityError as e:
            if is_quantity_violation(e):
                raise OutOfStockError() from e
            raise

