from decimal import Decimal

from app.domain.exceptions import ErrorCode

from tests.conftest import auth_headers


def test_empty_cart_is_not_an_error(client, user_headers):
    resp = client.get("/cart/", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["items"] == []
    assert Decimal(resp.json()["total"]) == Decimal("0")


def test_add_item_returns_line_with_product(client, user_headers, make_product):
    product = make_product(name="Mouse", price="49.50")

    resp = client.post("/cart/", json={"product_id": product.id, "quantity": 2}, headers=user_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["quantity"] == 2
    assert body["product"]["name"] == "Mouse"
    assert Decimal(body["product"]["price"]) == Decimal("49.50")


def test_adding_same_product_twice_merges_into_one_line(client, user_headers, make_product):
    product = make_product(price="10.00")

    first = client.post("/cart/", json={"product_id": product.id, "quantity": 2}, headers=user_headers)
    second = client.post("/cart/", json={"product_id": product.id, "quantity": 3}, headers=user_headers)
    assert first.json()["id"] == second.json()["id"]

    cart = client.get("/cart/", headers=user_headers).json()
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 5
    assert Decimal(cart["total"]) == Decimal("50.00")


def test_add_unknown_product_is_not_found(client, user_headers):
    resp = client.post("/cart/", json={"product_id": 999, "quantity": 1}, headers=user_headers)
    assert resp.status_code == 404
    assert resp.json()["errorCode"] == ErrorCode.PRODUCT_NOT_FOUND


def test_zero_quantity_is_rejected(client, user_headers, make_product):
    product = make_product()
    resp = client.post("/cart/", json={"product_id": product.id, "quantity": 0}, headers=user_headers)
    assert resp.status_code == 422

    cart = client.get("/cart/", headers=user_headers).json()
    assert cart["items"] == []


def test_change_quantity_on_owned_line(client, user_headers, make_product):
    product = make_product()
    item = client.post("/cart/", json={"product_id": product.id, "quantity": 1}, headers=user_headers).json()

    resp = client.put(f"/cart/{item['id']}", json={"quantity": 7}, headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 7


def test_change_quantity_rejects_non_positive(client, user_headers, make_product):
    product = make_product()
    item = client.post("/cart/", json={"product_id": product.id, "quantity": 1}, headers=user_headers).json()

    resp = client.put(f"/cart/{item['id']}", json={"quantity": -1}, headers=user_headers)
    assert resp.status_code == 422


def test_remove_line(client, user_headers, make_product):
    product = make_product()
    item = client.post("/cart/", json={"product_id": product.id, "quantity": 1}, headers=user_headers).json()

    resp = client.delete(f"/cart/{item['id']}", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == item["id"]
    assert client.get("/cart/", headers=user_headers).json()["items"] == []


def test_cannot_touch_another_users_cart_line(client, user_headers, make_user, make_product):
    other = make_user(email="other@example.com")
    other_headers = auth_headers(other)
    product = make_product()
    item = client.post("/cart/", json={"product_id": product.id, "quantity": 1}, headers=other_headers).json()

    put = client.put(f"/cart/{item['id']}", json={"quantity": 9}, headers=user_headers)
    delete = client.delete(f"/cart/{item['id']}", headers=user_headers)
    assert put.status_code == 404
    assert delete.status_code == 404
    assert put.json()["errorCode"] == ErrorCode.CART_ITEM_NOT_FOUND

    # cudzy koszyk nie wycieka i pozostaje nietkniety
    assert client.get("/cart/", headers=user_headers).json()["items"] == []
    other_cart = client.get("/cart/", headers=other_headers).json()
    assert other_cart["items"][0]["quantity"] == 1


def test_cart_requires_auth(client):
    assert client.get("/cart/").status_code == 401
