"""Integration tests for the storefront, cart, checkout, order and dashboard endpoints."""

import pytest
from fastapi import FastAPI, Header
from fastapi.testclient import TestClient
from identity.sessions import resolve_session
from marketplace.api import cart_router, checkout_router, dashboard_router, order_router, product_router
from marketplace.checkout.orchestrator import CheckoutFailed
from marketplace.order.order import Order
from marketplace.product.product import Product
from protean import current_domain
from shared.errors import register_error_handlers
from shared.session import Session

SHIPPING = {
    "full_name": "Asha Rao",
    "phone": "9845012345",
    "address": "12 Lake Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "pincode": "560001",
}


def _header_session(x_user_id: str = Header(...), x_role: str = Header("buyer")) -> Session:
    return Session(user_id=x_user_id, role=x_role)


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app, {CheckoutFailed: 500})
    for router in (product_router, cart_router, checkout_router, order_router, dashboard_router):
        app.include_router(router)
    app.dependency_overrides[resolve_session] = _header_session
    return TestClient(app)


def _as(user_id, role):
    return {"X-User-Id": user_id, "X-Role": role}


BUYER = _as("buyer-001", "buyer")
SELLER_A = _as("seller-a", "seller")
SELLER_B = _as("seller-b", "seller")


def _list(client, headers, **overrides):
    body = {"name": "Spring Water", "size_ml": 750, "price": 199.0, "stock_quantity": 10}
    body.update(overrides)
    response = client.post("/products", headers=headers, json=body)
    assert response.status_code == 201
    return response.json()["product_id"]


class TestProductEndpoints:
    def test_seller_lists_product(self, client):
        product_id = _list(client, SELLER_A, certifications={"bis": "IS 14543"})
        product = current_domain.repository_for(Product).get(product_id)
        assert product.certification_map == {"bis": "IS 14543"}

    def test_buyer_cannot_list(self, client):
        response = client.post("/products", headers=BUYER, json={"name": "X", "size_ml": 750, "price": 10.0})
        assert response.status_code == 403
        assert "error" in response.json()

    def test_unsupported_size(self, client):
        response = client.post("/products", headers=SELLER_A, json={"name": "X", "size_ml": 1000, "price": 10.0})
        assert response.status_code == 400

    def test_storefront_is_public(self, client):
        _list(client, SELLER_A, name="Shown")
        _list(client, SELLER_A, name="Hidden", is_active=False)
        response = client.get("/products")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Shown"]

    def test_seller_sees_own_products(self, client):
        _list(client, SELLER_A, name="Mine")
        _list(client, SELLER_B, name="Theirs")
        response = client.get("/products/mine", headers=SELLER_A)
        assert [p["name"] for p in response.json()] == ["Mine"]

    def test_update_by_other_seller(self, client):
        product_id = _list(client, SELLER_A)
        response = client.put(f"/products/{product_id}", headers=SELLER_B, json={"price": 1.0})
        assert response.status_code == 403

    def test_delete_product(self, client):
        product_id = _list(client, SELLER_A)
        assert client.delete(f"/products/{product_id}", headers=SELLER_A).status_code == 200
        assert client.get("/products").json() == []


class TestCartEndpoints:
    def test_add_view_and_count(self, client):
        product_id = _list(client, SELLER_A)
        response = client.post("/cart/items", headers=BUYER, json={"product_id": product_id, "quantity": 2})
        assert response.status_code == 201

        cart = client.get("/cart", headers=BUYER).json()
        assert cart["total"] == 398.0
        assert cart["items"][0]["seller_id"] == "seller-a"
        assert client.get("/cart/count", headers=BUYER).json() == {"count": 2}

    def test_sellers_have_no_cart(self, client):
        assert client.get("/cart", headers=SELLER_A).status_code == 403
        assert client.get("/cart/count", headers=SELLER_A).json() == {"count": 0}

    def test_update_and_remove_item(self, client):
        product_id = _list(client, SELLER_A)
        item_id = client.post("/cart/items", headers=BUYER, json={"product_id": product_id}).json()["item_id"]

        client.put(f"/cart/items/{item_id}", headers=BUYER, json={"quantity": 4})
        assert client.get("/cart/count", headers=BUYER).json() == {"count": 4}

        client.delete(f"/cart/items/{item_id}", headers=BUYER)
        assert client.get("/cart/count", headers=BUYER).json() == {"count": 0}


class TestCheckoutEndpoint:
    def _fill_cart(self, client):
        p1 = _list(client, SELLER_A, name="P1", price=199.0, stock_quantity=10)
        p2 = _list(client, SELLER_B, name="P2", price=299.0, stock_quantity=5)
        client.post("/cart/items", headers=BUYER, json={"product_id": p1, "quantity": 2})
        client.post("/cart/items", headers=BUYER, json={"product_id": p2, "quantity": 1})
        return p1, p2

    def test_checkout_splits_by_seller(self, client):
        p1, p2 = self._fill_cart(client)
        response = client.post("/checkout", headers=BUYER, json={"shipping": SHIPPING, "payment_method": "cod"})

        assert response.status_code == 201
        totals = {o["seller_id"]: o["total_amount"] for o in response.json()["orders"]}
        assert totals == {"seller-a": 398.0, "seller-b": 299.0}

        repo = current_domain.repository_for(Product)
        assert repo.get(p1).stock_quantity == 8
        assert repo.get(p2).stock_quantity == 4
        assert client.get("/cart/count", headers=BUYER).json() == {"count": 0}

    def test_checkout_selected_items(self, client):
        self._fill_cart(client)
        items = client.get("/cart", headers=BUYER).json()["items"]
        chosen = [i["item_id"] for i in items if i["name"] == "P2"]

        response = client.post("/checkout", headers=BUYER, json={"shipping": SHIPPING, "item_ids": chosen})
        assert [o["seller_id"] for o in response.json()["orders"]] == ["seller-b"]

    def test_empty_cart(self, client):
        response = client.post("/checkout", headers=BUYER, json={"shipping": SHIPPING})
        assert response.status_code == 400

    def test_failure_returns_generic_message(self, client, monkeypatch):
        self._fill_cart(client)

        def broken_place(*args, **kwargs):
            raise RuntimeError("database is locked")

        monkeypatch.setattr(Order, "place", broken_place)
        response = client.post("/checkout", headers=BUYER, json={"shipping": SHIPPING})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to place order. Please try again."}


class TestOrderEndpoints:
    def _checkout(self, client):
        product_id = _list(client, SELLER_A)
        client.post("/cart/items", headers=BUYER, json={"product_id": product_id})
        response = client.post("/checkout", headers=BUYER, json={"shipping": SHIPPING, "payment_method": "online"})
        return response.json()["orders"][0]["order_id"]

    def test_buyer_and_seller_read_order(self, client):
        order_id = self._checkout(client)
        for headers in (BUYER, SELLER_A):
            response = client.get(f"/orders/{order_id}", headers=headers)
            assert response.status_code == 200
            assert response.json()["payment_status"] == "paid"
            assert response.json()["shipping_address"]["city"] == "Bengaluru"

    def test_stranger_cannot_read_order(self, client):
        order_id = self._checkout(client)
        response = client.get(f"/orders/{order_id}", headers=_as("buyer-999", "buyer"))
        assert response.status_code == 403

    def test_unknown_order(self, client):
        assert client.get("/orders/no-such-order", headers=BUYER).status_code == 404

    def test_seller_updates_status(self, client):
        order_id = self._checkout(client)
        response = client.put(f"/orders/{order_id}/status", headers=SELLER_A, json={"status": "confirmed"})
        assert response.status_code == 200

        summary = client.get("/orders/summary", headers=BUYER).json()
        assert summary[0]["status"] == "confirmed"

    def test_invalid_transition(self, client):
        order_id = self._checkout(client)
        response = client.put(f"/orders/{order_id}/status", headers=SELLER_A, json={"status": "delivered"})
        assert response.status_code == 400

    def test_list_orders(self, client):
        self._checkout(client)
        assert len(client.get("/orders", headers=BUYER).json()) == 1
        assert len(client.get("/orders", headers=SELLER_A).json()) == 1
        assert client.get("/orders", headers=SELLER_B).json() == []


class TestSellerDashboardEndpoint:
    def test_dashboard(self, client):
        product_id = _list(client, SELLER_A)
        client.post("/cart/items", headers=BUYER, json={"product_id": product_id, "quantity": 3})
        client.post("/checkout", headers=BUYER, json={"shipping": SHIPPING})

        response = client.get("/dashboard/seller", headers=SELLER_A)
        assert response.json() == {
            "seller_id": "seller-a",
            "product_count": 1,
            "total_orders": 1,
            "pending_orders": 1,
            "revenue": 597.0,
        }

    def test_buyers_have_no_dashboard(self, client):
        assert client.get("/dashboard/seller", headers=BUYER).status_code == 403
