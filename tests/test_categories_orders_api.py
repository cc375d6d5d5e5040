from conftest import auth_headers, make_category, make_product, make_user

WRITER_PERMISSIONS = ("products:read", "products:write", "products:order")


def test_category_lifecycle(client, db):
    user = make_user(db, permissions=WRITER_PERMISSIONS)
    headers = auth_headers(db, user)

    response = client.post("/v1/categories", json={"title": "Boots", "image": "boots.png"}, headers=headers)
    assert response.status_code == 201
    category = response.json()
    assert response.headers["Location"] == f"/v1/categories/{category['id']}"
    assert category["version"] == 1

    response = client.patch(f"/v1/categories/{category['id']}", json={"title": "Winter boots"}, headers=headers)
    assert response.status_code == 200
    assert response.json() == {"id": category["id"], "title": "Winter boots", "image": "boots.png", "version": 2}

    response = client.patch(f"/v1/categories/{category['id']}", json={"title": "Rain boots", "version": 1},
                            headers=headers)
    assert response.status_code == 409

    response = client.get("/v1/categories", headers=headers)
    assert [c["title"] for c in response.json()["categories"]] == ["Winter boots"]

    assert client.delete(f"/v1/categories/{category['id']}", headers=headers).status_code == 200
    assert client.get(f"/v1/categories/{category['id']}", headers=headers).status_code == 404


def test_category_requires_title(client, db):
    user = make_user(db, permissions=WRITER_PERMISSIONS)

    response = client.post("/v1/categories", json={"image": "x.png"}, headers=auth_headers(db, user))

    assert response.status_code == 400
    assert response.json()["detail"] == {"title": "must be provided"}


def test_place_and_list_orders(client, db):
    user = make_user(db)
    product = make_product(db, user, quantity=3, price=10.0, categories=[make_category(db)])
    headers = auth_headers(db, user)

    response = client.post(
        "/v1/users/orders",
        json={"address": "1 Main St", "order_items": [{"product_id": product.id, "quantity": 3}]},
        headers=headers
    )
    assert response.status_code == 201
    order = response.json()
    assert response.headers["Location"] == f"/v1/users/orders/{order['id']}"
    assert order["total_price"] == 13.0
    assert order["order_items"] == [{"product_id": product.id, "quantity": 3}]

    response = client.get(f"/v1/products/{product.id}", headers=headers)
    assert response.json()["quantity"] == 0
    assert response.json()["version"] == 2

    response = client.get("/v1/users/orders", headers=headers)
    assert [o["id"] for o in response.json()["orders"]] == [order["id"]]
    assert response.json()["metadata"]["total_records"] == 1

    assert client.get(f"/v1/users/orders/{order['id']}", headers=headers).status_code == 200


def test_place_order_status_codes(client, db):
    user = make_user(db)
    product = make_product(db, user, quantity=1)
    headers = auth_headers(db, user)

    def place(product_id, quantity, address="1 Main St"):
        return client.post(
            "/v1/users/orders",
            json={"address": address, "order_items": [{"product_id": product_id, "quantity": quantity}]},
            headers=headers
        )

    assert place(product.id, 1, address="").status_code == 400
    assert place(product.id, 0).status_code == 400
    assert place(999, 1).status_code == 404
    assert place(product.id, 2).status_code == 409
    assert place(product.id, 1).status_code == 201
    assert place(product.id, 1).status_code == 409


def test_place_order_requires_order_permission(client, db):
    user = make_user(db, permissions=("products:read",))
    product = make_product(db, user)

    response = client.post(
        "/v1/users/orders",
        json={"address": "1 Main St", "order_items": [{"product_id": product.id, "quantity": 1}]},
        headers=auth_headers(db, user)
    )
    assert response.status_code == 403


def test_update_and_delete_order(client, db):
    user = make_user(db, permissions=WRITER_PERMISSIONS)
    product = make_product(db, user, quantity=5)
    headers = auth_headers(db, user)
    order = client.post(
        "/v1/users/orders",
        json={"address": "1 Main St", "order_items": [{"product_id": product.id, "quantity": 1}]},
        headers=headers
    ).json()

    response = client.put(f"/v1/users/orders/{order['id']}", json={"status": 1, "version": 1}, headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == 1
    assert response.json()["version"] == 2

    response = client.put(f"/v1/users/orders/{order['id']}", json={"status": 2, "version": 1}, headers=headers)
    assert response.status_code == 409

    response = client.put(f"/v1/users/orders/{order['id']}", json={"status": -1}, headers=headers)
    assert response.status_code == 400

    assert client.delete(f"/v1/users/orders/{order['id']}", headers=headers).status_code == 200
    assert client.get(f"/v1/users/orders/{order['id']}", headers=headers).status_code == 404


def test_orders_list_rejects_unknown_sort(client, db):
    user = make_user(db)

    response = client.get("/v1/users/orders", params={"sort": "address"}, headers=auth_headers(db, user))
    assert response.status_code == 400
