"""
Schemas package
"""
from storefront.schemas.filters import Filters, Metadata, validate_filters, calculate_metadata, sort_safelist
from storefront.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
    validate_category
)
from storefront.schemas.product import (
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    RatingCreate,
    RatingResponse,
    validate_product,
    validate_review
)
from storefront.schemas.order import (
    OrderItemBase,
    OrderCreate,
    OrderUpdate,
    OrderDraft,
    OrderResponse,
    OrderListResponse,
    validate_order,
    validate_updated_order
)
from storefront.schemas.user import (
    UserCreate,
    UserResponse,
    ActivationRequest,
    CredentialsRequest,
    TokenResponse,
    AuthenticationTokenResponse,
    validate_user,
    validate_email,
    validate_password_plaintext,
    validate_token_plaintext
)

__all__ = [
    "Filters",
    "Metadata",
    "validate_filters",
    "calculate_metadata",
    "sort_safelist",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryListResponse",
    "validate_category",
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "RatingCreate",
    "RatingResponse",
    "validate_product",
    "validate_review",
    "OrderItemBase",
    "OrderCreate",
    "OrderUpdate",
    "OrderDraft",
    "OrderResponse",
    "OrderListResponse",
    "validate_order",
    "validate_updated_order",
    "UserCreate",
    "UserResponse",
    "ActivationRequest",
    "CredentialsRequest",
    "TokenResponse",
    "AuthenticationTokenResponse",
    "validate_user",
    "validate_email",
    "validate_password_plaintext",
    "validate_token_plaintext"
]
