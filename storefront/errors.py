"""
Domain errors raised by the repositories and services
"""
from typing import Dict


class StorefrontError(Exception):
    """Base exception for storefront errors"""
    pass


class RecordNotFoundError(StorefrontError):
    """Record not found"""

    def __init__(self, message: str = "the requested resource could not be found"):
        super().__init__(message)


class EditConflictError(StorefrontError):
    """Row version changed since it was read"""

    def __init__(self, message: str = "unable to update the record due to an edit conflict, please try again"):
        super().__init__(message)


class OutOfStockError(StorefrontError):
    """Requested quantity exceeds the available stock"""

    def __init__(self, message: str = "not enough products in stock"):
        super().__init__(message)


class ReviewNotPermittedError(StorefrontError):
    """User has never ordered the product being reviewed"""

    def __init__(self, message: str = "you can only review products you have ordered"):
        super().__init__(message)


class DuplicateEmailError(StorefrontError):
    """Email address already registered"""
    pass


class ValidationFailedError(StorefrontError):
    """One or more fields failed validation"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("validation failed")
        self.errors = dict(errors)


class InvalidCredentialsError(StorefrontError):
    """Email/password pair does not match a user"""

    def __init__(self, message: str = "invalid authentication credentials"):
        super().__init__(message)
