import pytest

from storefront.errors import ValidationFailedError
from storefront.schemas.filters import Filters, calculate_metadata, sort_safelist, validate_filters
from storefront.schemas.order import OrderCreate, OrderItemBase, validate_order
from storefront.schemas.product import ProductCreate, RatingCreate, validate_product, validate_review
from storefront.schemas.user import UserCreate, validate_email, validate_user
from storefront.validator import Validator, permitted_value, unique


def test_validator_keeps_first_message_per_field():
    v = Validator()
    v.check(False, "title", "must be provided")
    v.check(False, "title", "must not be more than 1000 bytes long")
    v.check(True, "price", "must be provided")

    assert not v.valid()
    assert v.errors == {"title": "must be provided"}


def test_raise_if_invalid_carries_errors():
    v = Validator()
    v.add_error("email", "must be provided")

    with pytest.raises(ValidationFailedError) as exc:
        v.raise_if_invalid()
    assert exc.value.errors == {"email": "must be provided"}


def test_helpers():
    assert permitted_value("-id", "id", "-id")
    assert not permitted_value("name", "id", "-id")
    assert unique([1, 2, 3])
    assert not unique([1, 2, 1])


@pytest.mark.parametrize("email", ["bob@", "carol@localhost", "no-at-sign.example.com", "dan@exa mple.com"])
def test_invalid_email_addresses(email):
    v = Validator()
    validate_email(v, email)

    assert v.errors == {"email": "must be a valid email address"}


def test_valid_email_address():
    v = Validator()
    validate_email(v, "bob@example.com")
    assert v.valid()


def test_missing_email_reports_one_message():
    v = Validator()
    validate_email(v, "")
    assert v.errors == {"email": "must be provided"}


def test_metadata_for_empty_result_echoes_page():
    metadata = calculate_metadata(0, 3, 20)

    assert metadata.current_page == 3
    assert metadata.page_size == 20
    assert metadata.first_page == 0
    assert metadata.last_page == 0
    assert metadata.total_records == 0
    assert metadata.total_pages == 0


def test_metadata_rounds_pages_up():
    metadata = calculate_metadata(23, 1, 20)

    assert metadata.first_page == 1
    assert metadata.last_page == 2
    assert metadata.total_pages == 2
    assert metadata.total_records == 23


def test_filters_reject_out_of_range_values():
    v = Validator()
    validate_filters(v, Filters(page=0, page_size=101, sort="name", sort_safelist=sort_safelist("id")))

    assert set(v.errors) == {"page", "page_size", "sort"}
    assert v.errors["sort"] == "invalid sort value"


def test_filters_sort_column_and_direction():
    filters = Filters(page=3, page_size=10, sort="-price", sort_safelist=sort_safelist("id", "price"))

    assert filters.sort_column() == "price"
    assert filters.sort_descending()
    assert filters.limit() == 10
    assert filters.offset() == 20


def test_unsafe_sort_column_raises():
    filters = Filters(sort="id; DROP TABLE products", sort_safelist=sort_safelist("id"))

    with pytest.raises(ValueError):
        filters.sort_column()


def test_product_validation():
    v = Validator()
    validate_product(v, ProductCreate(title="", description="short", price=-1, quantity=-2, categories=[1, 1]), 1)

    assert set(v.errors) == {"title", "description", "price", "quantity", "categories"}
    assert v.errors["price"] == "must be a positive value"


def test_product_needs_a_category():
    v = Validator()
    validate_product(v, ProductCreate(title="Boot", description="Waterproof leather boot", price=5), 1)

    assert v.errors == {"categories": "must contain at least 1 category"}


def test_rating_has_no_upper_bound():
    v = Validator()
    validate_review(v, RatingCreate(rating=1000, comment="great"), 1)
    assert v.valid()

    v = Validator()
    validate_review(v, RatingCreate(rating=-1), 1)
    assert "rating" in v.errors


def test_order_validation():
    v = Validator()
    validate_order(v, OrderCreate(address="", order_items=[]), 1)
    assert set(v.errors) == {"address", "order_items"}

    v = Validator()
    validate_order(v, OrderCreate(address="1 Main St", order_items=[OrderItemBase(product_id=1, quantity=0)]), 1)
    assert set(v.errors) == {"order_items"}


def test_user_validation():
    v = Validator()
    validate_user(v, UserCreate(first_name="Ann", last_name="Lee", phone_number="1", email="nope", password="short"))

    assert set(v.errors) == {"email", "password"}
