"""
Services package
"""
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService
from storefront.services.order_service import OrderService
from storefront.services.user_service import UserService

__all__ = ["CategoryService", "ProductService", "OrderService", "UserService"]
