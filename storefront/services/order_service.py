"""
Order Service - Business Logic Layer
"""
import logging
from typing import Optional

from storefront.errors import RecordNotFoundError, EditConflictError, OutOfStockError
from storefront.publishers.event_publisher import EventPublisher
from storefront.repositories import Repositories
from storefront.schemas.filters import Filters
from storefront.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderDraft,
    OrderResponse,
    OrderListResponse,
    validate_order,
    validate_updated_order
)
from storefront.validator import Validator

logger = logging.getLogger(__name__)


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, repos: Repositories, event_publisher: Optional[EventPublisher] = None):
        self.repos = repos
        self.event_publisher = event_publisher or EventPublisher()

    def place_order(self, user_id: int, order_data: OrderCreate) -> OrderResponse:
        """
        Place an order, reserving stock for every item

        Steps, all in one transaction:
        1. Read each product's price, quantity and version
        2. Decrement its stock guarded by that version
        3. Accumulate the total price
        4. Insert the order header and its items

        Any failure rolls back every stock decrement made so far. Nothing is
        retried here; on EditConflictError the caller may place the order again.

        Raises:
            ValidationFailedError: If the address or items are invalid
            RecordNotFoundError: If a product does not exist
            EditConflictError: If a product changed between read and write
            OutOfStockError: If a product has fewer units than requested
        """
        v = Validator()
        validate_order(v, order_data, user_id)
        v.raise_if_invalid()

        try:
            with self.repos.atomic():
                total_price = 0.0
                for item in order_data.order_items:
                    product = self.repos.products.get_row(item.product_id)
                    self.repos.products.reserve_stock(product.id, item.quantity, product.version)
                    # Unit price plus quantity, not price times quantity
                    total_price += product.price + item.quantity

                order = self.repos.orders.add(user_id, order_data.address, total_price, order_data.order_items)
        except (EditConflictError, OutOfStockError, RecordNotFoundError) as e:
            logger.info("Order placement by user %s rejected: %s", user_id, e)
            raise

        response = OrderResponse.model_validate(order)
        logger.info("Order %s placed by user %s, total %.2f", response.id, user_id, response.total_price)

        # Try to publish event (non-blocking)
        self.event_publisher.publish_order_placed(response.model_dump(mode="json"))

        return response

    def get_order(self, order_id: int, user_id: int) -> OrderResponse:
        """Get one of the user's orders"""
        order = self.repos.orders.get_by_id(order_id)
        if order.user_id != user_id:
            raise RecordNotFoundError()
        return OrderResponse.model_validate(order)

    def list_orders(self, user_id: int, filters: Filters) -> OrderListResponse:
        """Get one page of the user's orders; filters must already be validated"""
        orders, metadata = self.repos.orders.get_all_for_user(user_id, filters)
        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            metadata=metadata
        )

    def update_order(self, order_id: int, order_data: OrderUpdate) -> OrderResponse:
        """
        Update status, address or total under optimistic concurrency

        Raises:
            RecordNotFoundError: If the order does not exist
            EditConflictError: If the client's version is stale or the row changed meanwhile
            ValidationFailedError: If the merged order is invalid
        """
        order = self.repos.orders.get_by_id(order_id)
        if order_data.version is not None and order_data.version != order.version:
            raise EditConflictError()

        changes = {
            k: val for k, val in order_data.model_dump(exclude_unset=True, exclude={"version"}).items()
            if val is not None
        }
        draft = OrderDraft(
            user_id=order.user_id,
            status=order.status,
            address=order.address,
            total_price=order.total_price
        ).model_copy(update=changes)

        v = Validator()
        validate_updated_order(v, draft)
        v.raise_if_invalid()

        self.repos.orders.update(order_id, order.version, draft)
        return OrderResponse.model_validate(self.repos.orders.get_by_id(order_id))

    def delete_order(self, order_id: int, user_id: int) -> None:
        """Delete one of the user's orders together with its items"""
        order = self.repos.orders.get_by_id(order_id)
        if order.user_id != user_id:
            raise RecordNotFoundError()
        self.repos.orders.delete(order_id)
