"""
Pagination, sorting and listing metadata
"""
import math
from typing import List

from pydantic import BaseModel, Field

from storefront.validator import Validator, permitted_value


class Filters(BaseModel):
    """Page/sort parameters read from the query string"""
    page: int = 1
    page_size: int = 20
    sort: str = "id"
    sort_safelist: List[str] = Field(default_factory=list)

    def sort_column(self) -> str:
        """
        Column name for ORDER BY

        Raises:
            ValueError: If the sort key was never validated against the safelist
        """
        if self.sort in self.sort_safelist:
            return self.sort.lstrip("-")
        raise ValueError(f"unsafe sort parameter: {self.sort}")

    def sort_descending(self) -> bool:
        return self.sort.startswith("-")

    def limit(self) -> int:
        return self.page_size

    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def validate_filters(v: Validator, filters: Filters) -> None:
    v.check(filters.page > 0, "page", "must be greater than zero")
    v.check(filters.page <= 10_000_000, "page", "must be a maximum of 10 million")
    v.check(filters.page_size > 0, "page_size", "must be greater than zero")
    v.check(filters.page_size <= 100, "page_size", "must be a maximum of 100")
    v.check(permitted_value(filters.sort, *filters.sort_safelist), "sort", "invalid sort value")


def sort_safelist(*columns: str) -> List[str]:
    """Ascending and descending keys for each column"""
    return list(columns) + [f"-{c}" for c in columns]


class Metadata(BaseModel):
    """Pagination metadata returned alongside a page"""
    current_page: int = 0
    page_size: int = 0
    first_page: int = 0
    last_page: int = 0
    total_records: int = 0
    total_pages: int = 0


def calculate_metadata(total_records: int, page: int, page_size: int) -> Metadata:
    if total_records == 0:
        return Metadata(current_page=page, page_size=page_size)

    total_pages = math.ceil(total_records / page_size)
    return Metadata(
        current_page=page,
        page_size=page_size,
        first_page=1,
        last_page=total_pages,
        total_records=total_records,
        total_pages=total_pages
    )
