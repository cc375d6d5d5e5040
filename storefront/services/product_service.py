"""
Product Service - Business Logic Layer
"""
import logging
from typing import List, Optional, Sequence

from storefront.errors import EditConflictError, ReviewNotPermittedError
from storefront.models.product import Product
from storefront.repositories import Repositories
from storefront.schemas.filters import Filters
from storefront.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    RatingCreate,
    RatingResponse,
    validate_product,
    validate_review
)
from storefront.validator import Validator

logger = logging.getLogger(__name__)


def to_product_response(product: Product, total_rating: Optional[float] = None) -> ProductResponse:
    """Serialize a product; the average rating is computed from its reviews unless given"""
    if total_rating is None:
        ratings = [r.rating for r in product.ratings]
        total_rating = sum(ratings) / len(ratings) if ratings else 0
    response = ProductResponse.model_validate(product)
    return response.model_copy(update={"total_rating": total_rating})


class ProductService:
    """Service layer for product business logic"""

    def __init__(self, repos: Repositories):
        self.repos = repos

    def list_products(self, title: str, category_ids: Sequence[int], filters: Filters) -> ProductListResponse:
        """Get one page of products; filters must already be validated"""
        rows, metadata = self.repos.products.get_all(title, category_ids, filters)
        return ProductListResponse(
            products=[to_product_response(p, total_rating) for p, total_rating in rows],
            metadata=metadata
        )

    def get_product(self, product_id: int) -> ProductResponse:
        """Get product by ID"""
        return to_product_response(self.repos.products.get_by_id(product_id))

    def create_product(self, product_data: ProductCreate, owner_id: int) -> ProductResponse:
        """
        Create new product

        Raises:
            ValidationFailedError: If any field is invalid
            RecordNotFoundError: If a listed category does not exist
        """
        v = Validator()
        validate_product(v, product_data, owner_id)
        v.raise_if_invalid()

        categories = self.repos.categories.get_many(product_data.categories)
        product = self.repos.products.create(product_data, owner_id, categories)
        logger.info("Product %s created by user %s", product.id, owner_id)
        return to_product_response(product)

    def update_product(self, product_id: int, product_data: ProductUpdate) -> ProductResponse:
        """
        Apply a partial update under optimistic concurrency

        Raises:
            RecordNotFoundError: If the product does not exist
            EditConflictError: If the client's version is stale or the row changed meanwhile
            ValidationFailedError: If the merged product is invalid
        """
        product = self.repos.products.get_by_id(product_id)
        if product_data.version is not None and product_data.version != product.version:
            raise EditConflictError()

        current = ProductCreate(
            title=product.title,
            description=product.description,
            quantity=product.quantity,
            price=product.price,
            colors=list(product.colors or []),
            images=list(product.images or []),
            categories=[c.id for c in product.categories]
        )
        changes = {
            k: val for k, val in product_data.model_dump(exclude_unset=True, exclude={"version"}).items()
            if val is not None
        }
        merged = current.model_copy(update=changes)

        v = Validator()
        validate_product(v, merged, product.owner_id)
        v.raise_if_invalid()

        self.repos.products.update(product_id, product.version, merged)
        return self.get_product(product_id)

    def delete_product(self, product_id: int) -> None:
        """Delete product"""
        self.repos.products.delete(product_id)

    def add_review(self, product_id: int, user_id: int, review: RatingCreate) -> RatingResponse:
        """
        Submit a review; only users who ordered the product may review it

        Raises:
            ValidationFailedError: If the rating is invalid
            RecordNotFoundError: If the product does not exist
            ReviewNotPermittedError: If the user never ordered the product
        """
        v = Validator()
        validate_review(v, review, user_id)
        v.raise_if_invalid()

        self.repos.products.get_by_id(product_id)
        if not self.repos.orders.has_user_ordered_product(user_id, product_id):
            raise ReviewNotPermittedError()

        rating = self.repos.ratings.insert(product_id, user_id, review.rating, review.comment)
        return RatingResponse.model_validate(rating)

    def get_reviews(self, product_id: int) -> List[RatingResponse]:
        """Get every review of a product"""
        self.repos.products.get_by_id(product_id)
        return [RatingResponse.model_validate(r) for r in self.repos.ratings.get_for_product(product_id)]
