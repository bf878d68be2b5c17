"""Marketplace load test scenarios.

Sellers onboard and stock the storefront; shoppers browse, fill a cart with
products from several sellers, check out and ask a seller a question.
Checkout is the hot path: each run places one order per seller and writes
stock for every line.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    auth_headers,
    business_data,
    checkout_data,
    message_text,
    product_data,
    profile_data,
    unique_user_id,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import SellerState, ShopperState


class SellerOnboardingJourney(SequentialTaskSet):
    """Register -> Business details -> List products -> Check dashboard."""

    def on_start(self):
        self.state = SellerState(user_id=unique_user_id("seller"))
        self.headers = auth_headers(self.state.user_id)

    @task
    def register(self):
        with self.client.post(
            "/profiles",
            json=profile_data(role="seller"),
            headers=self.headers,
            catch_response=True,
            name="POST /profiles",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Register seller failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def register_business(self):
        with self.client.put(
            "/profiles/me/business",
            json=business_data(),
            headers=self.headers,
            catch_response=True,
            name="PUT /profiles/me/business",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Register business failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def list_products(self):
        for _ in range(random.randint(2, 5)):
            with self.client.post(
                "/products",
                json=product_data(),
                headers=self.headers,
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"List product failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def view_dashboard(self):
        self.client.get("/dashboard/seller", headers=self.headers, name="GET /dashboard/seller")

    @task
    def done(self):
        self.interrupt()


class ShopperCheckoutJourney(SequentialTaskSet):
    """Register -> Browse -> Add to cart -> Checkout -> Orders -> Chat with a seller."""

    def on_start(self):
        self.state = ShopperState(user_id=unique_user_id("buyer"))
        self.headers = auth_headers(self.state.user_id)

    @task
    def register(self):
        with self.client.post(
            "/profiles",
            json=profile_data(role="buyer"),
            headers=self.headers,
            catch_response=True,
            name="POST /profiles",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Register buyer failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            products = resp.json() if resp.status_code == 200 else []
            if not products:
                resp.success()
                self.interrupt()
                return
            random.shuffle(products)
            self.state.browsed = products

    @task
    def fill_cart(self):
        for product in self.state.pick_products(random.randint(1, 4)):
            with self.client.post(
                "/cart/items",
                json={"product_id": product["product_id"], "quantity": random.randint(1, 3)},
                headers=self.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 201:
                    self.state.cart_item_ids.append(resp.json()["item_id"])
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            "/checkout",
            json=checkout_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.extend(o["order_id"] for o in resp.json()["orders"])
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def view_orders(self):
        self.client.get("/orders/summary", headers=self.headers, name="GET /orders/summary")
        for order_id in self.state.order_ids:
            self.client.get(f"/orders/{order_id}", headers=self.headers, name="GET /orders/{id}")

    @task
    def ask_seller(self):
        if not self.state.browsed:
            return
        product = self.state.browsed[0]
        with self.client.post(
            "/chats",
            json={"seller_id": product["seller_id"], "product_id": product["product_id"]},
            headers=self.headers,
            catch_response=True,
            name="POST /chats",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Start chat failed: {resp.status_code}: {extract_error_detail(resp)}")
                return
            self.state.chat_id = resp.json()["chat_id"]

        self.client.post(
            f"/chats/{self.state.chat_id}/messages",
            json={"text": message_text()},
            headers=self.headers,
            name="POST /chats/{id}/messages",
        )

    @task
    def done(self):
        self.interrupt()


class MarketplaceUser(HttpUser):
    """Roughly one seller onboarding for every four shopping sessions."""

    wait_time = between(0.5, 3.0)
    tasks = {
        SellerOnboardingJourney: 1,
        ShopperCheckoutJourney: 4,
    }
