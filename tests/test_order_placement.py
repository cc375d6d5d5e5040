import pytest
from sqlalchemy import func, select, update

from storefront.errors import EditConflictError, OutOfStockError, RecordNotFoundError, ValidationFailedError
from storefront.models import Order, Product
from storefront.schemas.order import OrderCreate, OrderItemBase, OrderUpdate
from storefront.services.order_service import OrderService

from conftest import make_category, make_product, make_user


def order_for(*items, address="221B Baker Street"):
    return OrderCreate(
        address=address,
        order_items=[OrderItemBase(product_id=pid, quantity=qty) for pid, qty in items]
    )


def count_orders(db):
    return db.scalar(select(func.count()).select_from(Order))


def test_place_order_reserves_stock(db, repos):
    user = make_user(db)
    product = make_product(db, user, quantity=3, price=10.0, categories=[make_category(db)])

    order = OrderService(repos).place_order(user.id, order_for((product.id, 3)))

    row = repos.products.get_row(product.id)
    assert row.quantity == 0
    assert row.version == 2
    assert order.user_id == user.id
    assert order.status == 0
    assert order.version == 1
    assert [(i.product_id, i.quantity) for i in order.order_items] == [(product.id, 3)]
    # price + quantity per line
    assert order.total_price == pytest.approx(13.0)


def test_total_accumulates_every_line(db, repos):
    user = make_user(db)
    shoe = make_product(db, user, title="Shoe", quantity=5, price=10.0)
    sock = make_product(db, user, title="Sock", quantity=5, price=5.0)

    order = OrderService(repos).place_order(user.id, order_for((shoe.id, 2), (sock.id, 1)))

    assert order.total_price == pytest.approx(18.0)
    assert repos.products.get_row(shoe.id).quantity == 3
    assert repos.products.get_row(sock.id).quantity == 4


def test_unknown_product_is_not_found(db, repos):
    user = make_user(db)

    with pytest.raises(RecordNotFoundError):
        OrderService(repos).place_order(user.id, order_for((999, 1)))
    assert count_orders(db) == 0


def test_insufficient_stock_leaves_product_untouched(db, repos):
    user = make_user(db)
    product = make_product(db, user, quantity=1)

    with pytest.raises(OutOfStockError):
        OrderService(repos).place_order(user.id, order_for((product.id, 2)))

    row = repos.products.get_row(product.id)
    assert row.quantity == 1
    assert row.version == 1
    assert count_orders(db) == 0


def test_failure_on_later_item_rolls_back_earlier_reservations(db, repos):
    user = make_user(db)
    first = make_product(db, user, title="First", quantity=5)
    second = make_product(db, user, title="Second", quantity=1)

    with pytest.raises(OutOfStockError):
        OrderService(repos).place_order(user.id, order_for((first.id, 2), (second.id, 3)))

    assert repos.products.get_row(first.id).quantity == 5
    assert repos.products.get_row(first.id).version == 1
    assert count_orders(db) == 0


def test_last_unit_can_only_be_sold_once(db, repos):
    user = make_user(db)
    product = make_product(db, user, quantity=1)
    service = OrderService(repos)

    service.place_order(user.id, order_for((product.id, 1)))
    with pytest.raises(OutOfStockError):
        service.place_order(user.id, order_for((product.id, 1)))

    assert repos.products.get_row(product.id).quantity == 0
    assert count_orders(db) == 1


def test_stale_version_is_an_edit_conflict(db, repos):
    user = make_user(db)
    product = make_product(db, user, quantity=4)

    with pytest.raises(EditConflictError):
        repos.products.reserve_stock(product.id, 1, version=5)
    db.rollback()

    assert repos.products.get_row(product.id).quantity == 4


def test_invalid_order_is_rejected_before_touching_stock(db, repos):
    user = make_user(db)
    product = make_product(db, user, quantity=4)

    with pytest.raises(ValidationFailedError) as exc:
        OrderService(repos).place_order(user.id, order_for((product.id, 1), address=""))

    assert "address" in exc.value.errors
    assert repos.products.get_row(product.id).quantity == 4


def test_update_order_bumps_version(db, repos):
    user = make_user(db)
    product = make_product(db, user, quantity=4)
    service = OrderService(repos)
    order = service.place_order(user.id, order_for((product.id, 1)))

    updated = service.update_order(order.id, OrderUpdate(status=2, version=1))
    assert updated.status == 2
    assert updated.version == 2
    assert updated.address == order.address

    with pytest.raises(EditConflictError):
        service.update_order(order.id, OrderUpdate(status=3, version=1))


def test_orders_of_other_users_are_hidden(db, repos):
    owner = make_user(db)
    other = make_user(db, email="bob@example.com")
    product = make_product(db, owner, quantity=4)
    service = OrderService(repos)
    order = service.place_order(owner.id, order_for((product.id, 1)))

    with pytest.raises(RecordNotFoundError):
        service.get_order(order.id, other.id)
    with pytest.raises(RecordNotFoundError):
        service.delete_order(order.id, other.id)

    service.delete_order(order.id, owner.id)
    assert count_orders(db) == 0


def test_concurrent_edit_on_later_item_rolls_back_earlier_reservations(db, repos, monkeypatch):
    user = make_user(db)
    first = make_product(db, user, title="First", quantity=5)
    second = make_product(db, user, title="Second", quantity=5)
    first_id, second_id = first.id, second.id
    read_row = repos.products.get_row

    def get_row_then_competing_write(product_id):
        row = read_row(product_id)
        if product_id == second_id:
            # another writer updates the product between read and reserve
            db.execute(update(Product).where(Product.id == second_id).values(version=Product.version + 1))
        return row

    monkeypatch.setattr(repos.products, "get_row", get_row_then_competing_write)

    with pytest.raises(EditConflictError):
        OrderService(repos).place_order(user.id, order_for((first_id, 2), (second_id, 1)))

    row = read_row(first_id)
    assert row.quantity == 5
    assert row.version == 1
    assert read_row(second_id).quantity == 5
    assert count_orders(db) == 0
