"""Storefront load test scenarios.

Three users: a browser paging through the catalogue, a shopper building and
editing a cart, and a checkout burst that hammers the checkout endpoint from
one client address until the rate limiter refuses it. Checkout needs a
signed-in customer, so unauthenticated bursts are expected to see 401 for
the first five attempts in a window and 429 afterwards.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_item_data, checkout_data, client_ip, product_query, session_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CartState, CheckoutBurstState


def _product_ids(client) -> list[str]:
    with client.get("/products", catch_response=True, name="GET /products") as resp:
        if resp.status_code != 200:
            resp.failure(f"List products failed: {resp.status_code} - {extract_error_detail(resp)}")
            return []
        return [p["id"] for p in resp.json()["products"]]


class BrowsingUser(HttpUser):
    """Lists, searches and filters the catalogue."""

    wait_time = between(1, 3)

    @task(5)
    def list_products(self):
        self.client.get("/products", params=product_query(), name="GET /products")

    @task(2)
    def featured(self):
        self.client.get("/products", params={"featured": "true"}, name="GET /products?featured")

    @task(1)
    def categories(self):
        with self.client.get("/products/categories", catch_response=True, name="GET /products/categories") as resp:
            if resp.status_code != 200:
                resp.failure(f"Categories failed: {resp.status_code}")
                return
            categories = [c["id"] for c in resp.json()["categories"]]
        if categories:
            self.client.get("/products", params={"category": random.choice(categories)}, name="GET /products?category")


class CartJourney(SequentialTaskSet):
    """Add items -> change a quantity -> remove one -> view -> clear."""

    def on_start(self):
        self.state = CartState(session_id=session_id(), product_ids=_product_ids(self.client))
        if not self.state.product_ids:
            self.interrupt()

    def _add(self):
        payload = cart_item_data(self.state.product_ids)
        with self.client.post(
            f"/carts/{self.state.session_id}/items",
            json=payload,
            catch_response=True,
            name="POST /carts/{sid}/items",
        ) as resp:
            if resp.status_code == 200:
                self.state.in_cart.append(payload["product_id"])
            else:
                resp.failure(f"Add item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def add_item_1(self):
        self._add()

    @task
    def add_item_2(self):
        self._add()

    @task
    def update_quantity(self):
        if not self.state.in_cart:
            return
        self.client.put(
            f"/carts/{self.state.session_id}/items/{self.state.in_cart[0]}",
            json={"quantity": random.randint(2, 5)},
            name="PUT /carts/{sid}/items/{pid}",
        )

    @task
    def remove_item(self):
        if len(self.state.in_cart) < 2:
            return
        product_id = self.state.in_cart.pop()
        self.client.delete(
            f"/carts/{self.state.session_id}/items/{product_id}",
            name="DELETE /carts/{sid}/items/{pid}",
        )

    @task
    def view_cart(self):
        self.client.get(f"/carts/{self.state.session_id}", name="GET /carts/{sid}")

    @task
    def clear_cart(self):
        self.client.delete(f"/carts/{self.state.session_id}", name="DELETE /carts/{sid}")
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(1, 4)
    tasks = [CartJourney]


class CheckoutBurstUser(HttpUser):
    """Repeated anonymous checkouts from one address; the sixth in a window must be throttled."""

    wait_time = between(0.1, 0.5)

    def on_start(self):
        self.state = CheckoutBurstState(client_ip=client_ip())

    @task
    def checkout(self):
        self.state.attempts += 1
        with self.client.post(
            f"/carts/{session_id()}/checkout",
            json=checkout_data(),
            headers={"X-Forwarded-For": self.state.client_ip},
            catch_response=True,
            name="POST /carts/{sid}/checkout",
        ) as resp:
            if resp.status_code == 429:
                self.state.throttled += 1
                resp.success()
            elif resp.status_code == 401 and self.state.attempts <= 5:
                resp.success()
            else:
                resp.failure(f"Unexpected checkout response: {resp.status_code} - {extract_error_detail(resp)}")
