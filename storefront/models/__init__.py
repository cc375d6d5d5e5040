"""
Models package
"""
from storefront.models.category import Category, product_category
from storefront.models.product import Product, Rating, QUANTITY_CHECK
from storefront.models.order import Order, OrderItem
from storefront.models.user import (
    User,
    Token,
    Permission,
    users_permissions,
    PERMISSION_CODES,
    SCOPE_ACTIVATION,
    SCOPE_AUTHENTICATION
)

__all__ = [
    "Category",
    "product_category",
    "Product",
    "Rating",
    "QUANTITY_CHECK",
    "Order",
    "OrderItem",
    "User",
    "Token",
    "Permission",
    "users_permissions",
    "PERMISSION_CODES",
    "SCOPE_ACTIVATION",
    "SCOPE_AUTHENTICATION"
]
