from decimal import Decimal

from sqlalchemy.dialects import postgresql, sqlite

from app.domain.exceptions import ErrorCode
from app.repos.product_repo import search_condition


def test_admin_creates_product_with_tags(client, admin_headers):
    resp = client.post(
        "/products/",
        json={"name": "Keyboard", "description": "Mechanical", "price": "199.99", "tags": ["pc", "usb"]},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["tags"] == ["pc", "usb"]
    assert Decimal(body["price"]) == Decimal("199.99")


def test_regular_user_cannot_create_product(client, user_headers):
    resp = client.post("/products/", json={"name": "X", "price": "1.00"}, headers=user_headers)
    assert resp.status_code == 403


def test_list_products_is_paginated(client, admin_headers, make_product):
    for i in range(7):
        make_product(name=f"P{i}")

    first = client.get("/products/", headers=admin_headers).json()
    second = client.get("/products/", params={"skip": 5}, headers=admin_headers).json()
    assert first["count"] == 7
    assert len(first["data"]) == 5
    assert len(second["data"]) == 2


def test_update_product_partial(client, admin_headers, make_product):
    product = make_product(name="Old", price="5.00", tags=["a"])

    resp = client.put(f"/products/{product.id}", json={"name": "New"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "New"
    assert Decimal(resp.json()["price"]) == Decimal("5.00")
    assert resp.json()["tags"] == ["a"]


def test_get_and_delete_unknown_product(client, admin_headers):
    assert client.get("/products/404", headers=admin_headers).status_code == 404
    resp = client.delete("/products/404", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["errorCode"] == ErrorCode.PRODUCT_NOT_FOUND


def test_delete_product(client, admin_headers, make_product):
    product = make_product(name="Gone")
    resp = client.delete(f"/products/{product.id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Gone"
    assert client.get(f"/products/{product.id}", headers=admin_headers).status_code == 404


def test_delete_ordered_product_is_rejected(
    client, admin_headers, user, user_headers, make_product, make_address
):
    make_address(user, default=True)
    product = make_product(name="Keyboard")
    client.post("/cart/", json={"product_id": product.id, "quantity": 1}, headers=user_headers)
    assert client.post("/orders/", headers=user_headers).status_code == 201

    resp = client.delete(f"/products/{product.id}", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["errorCode"] == ErrorCode.PRODUCT_IN_USE
    assert client.get(f"/products/{product.id}", headers=admin_headers).status_code == 200


def test_delete_product_drops_it_from_carts(client, admin_headers, user_headers, make_product):
    gone = make_product(name="Gone", price="3.00")
    kept = make_product(name="Kept", price="2.00")
    client.post("/cart/", json={"product_id": gone.id, "quantity": 1}, headers=user_headers)
    client.post("/cart/", json={"product_id": kept.id, "quantity": 2}, headers=user_headers)

    assert client.delete(f"/products/{gone.id}", headers=admin_headers).status_code == 200

    resp = client.get("/cart/", headers=user_headers)
    assert resp.status_code == 200
    assert [i["product_id"] for i in resp.json()["items"]] == [kept.id]
    assert Decimal(resp.json()["total"]) == Decimal("4.00")


def test_search_matches_name_description_and_tags(client, make_product):
    make_product(name="Gaming Mouse")
    make_product(name="Desk", description="Standing desk for gaming")
    make_product(name="Cable", tags=["usb", "gaming-gear"])
    make_product(name="Lamp")

    resp = client.get("/products/search", params={"q": "gaming"})
    assert resp.status_code == 200
    assert sorted(p["name"] for p in resp.json()) == ["Cable", "Desk", "Gaming Mouse"]


def test_search_short_query_returns_empty(client, make_product):
    make_product(name="A")
    assert client.get("/products/search", params={"q": " a "}).json() == []
    assert client.get("/products/search").json() == []


def test_tags_with_commas_are_rejected(client, admin_headers, make_product):
    resp = client.post(
        "/products/",
        json={"name": "Cable", "price": "1.00", "tags": ["usb,c"]},
        headers=admin_headers,
    )
    assert resp.status_code == 422
    assert resp.json()["errorCode"] == ErrorCode.UNPROCESSABLE_ENTITY

    product = make_product(name="Hub", tags=["usb"])
    resp = client.put(f"/products/{product.id}", json={"tags": ["a,b"]}, headers=admin_headers)
    assert resp.status_code == 422


def test_search_uses_full_text_on_postgres():
    pg = str(search_condition("mouse", "postgresql").compile(dialect=postgresql.dialect()))
    assert "to_tsvector" in pg
    assert "@@" in pg
    assert "tsquery" in pg

    generic = str(search_condition("mouse", "sqlite").compile(dialect=sqlite.dialect()))
    assert "@@" not in generic
    assert "LIKE" in generic.upper()
