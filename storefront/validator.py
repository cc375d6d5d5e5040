"""
Field validation accumulator
"""
from typing import Dict, Iterable, Hashable

from storefront.errors import ValidationFailedError


class Validator:
    """Collects field -> message violations for a single request"""

    def __init__(self):
        self.errors: Dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        # First message for a field wins
        self.errors.setdefault(key, message)

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)

    def raise_if_invalid(self) -> None:
        """Raise ValidationFailedError carrying every collected violation"""
        if not self.valid():
            raise ValidationFailedError(self.errors)


def permitted_value(value, *permitted) -> bool:
    return value in permitted


def unique(values: Iterable[Hashable]) -> bool:
    values = list(values)
    return len(set(values)) == len(values)
