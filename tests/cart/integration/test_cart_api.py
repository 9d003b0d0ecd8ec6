"""Integration tests for the cart endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from orderflow.api import cart_router, register_exception_handlers

ALICE = {"X-User-Id": "user-001", "X-User-Email": "alice@example.com"}
BOB = {"X-User-Id": "user-002"}


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(cart_router)
    return TestClient(app)


def _add(client, product_id, quantity, headers=ALICE):
    return client.post("/api/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=headers)


class TestCartApi:
    def test_get_cart_creates_empty_cart(self, client):
        response = client.get("/api/cart", headers=ALICE)

        assert response.status_code == 200
        body = response.json()
        assert body["code"] == 1000
        assert body["result"]["user_id"] == "user-001"
        assert body["result"]["items"] == []

    def test_missing_identity_is_rejected(self, client):
        response = client.get("/api/cart")
        assert response.status_code == 401
        assert response.json()["code"] == 1006

    def test_add_item(self, client, make_product):
        product_id = make_product(price="12.50")

        response = _add(client, product_id, 2)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Item added to cart"
        assert body["result"]["total_amount"] == "25.00"
        assert body["result"]["items"][0]["quantity"] == 2

    def test_add_beyond_stock(self, client, make_product):
        product_id = make_product(stock_quantity=1)

        response = _add(client, product_id, 2)

        assert response.status_code == 409
        assert response.json()["code"] == 2003

    def test_add_zero_quantity_is_invalid(self, client, make_product):
        response = _add(client, make_product(), 0)
        assert response.status_code == 400
        assert response.json()["code"] == 1001

    def test_add_unknown_product(self, client):
        response = _add(client, "missing", 1)
        assert response.status_code == 404
        assert response.json()["code"] == 2001

    def test_update_and_remove_item(self, client, make_product):
        product_id = make_product(price="3.00")
        item_id = _add(client, product_id, 1).json()["result"]["items"][0]["id"]

        updated = client.put(f"/api/cart/items/{item_id}", json={"quantity": 4}, headers=ALICE)
        assert updated.status_code == 200
        assert updated.json()["result"]["total_amount"] == "12.00"

        removed = client.delete(f"/api/cart/items/{item_id}", headers=ALICE)
        assert removed.status_code == 200
        assert removed.json()["result"]["items"] == []

    def test_other_user_cannot_update_line(self, client, make_product):
        item_id = _add(client, make_product(), 1).json()["result"]["items"][0]["id"]

        response = client.put(f"/api/cart/items/{item_id}", json={"quantity": 2}, headers=BOB)

        assert response.status_code == 404
        assert response.json()["code"] == 3002

    def test_clear_cart(self, client, make_product):
        _add(client, make_product(name="Rose"), 1)
        _add(client, make_product(name="Lily"), 1)

        response = client.delete("/api/cart", headers=ALICE)

        assert response.status_code == 200
        assert response.json()["message"] == "Cart cleared"
        assert response.json()["result"]["items"] == []
