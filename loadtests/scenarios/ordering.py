"""Ordering load test scenarios.

CheckoutJourney buys from a freshly listed, well-stocked product.
ContendedStockJourney has every user hammer the same low-stock product so
the conditional inventory write is exercised: losing a race must come back
as a clean 400, never as an oversell or a 500.
"""

import random

import requests
from locust import HttpUser, SequentialTaskSet, between, events, task

from loadtests.data_generators import auth_headers, checkout_data, product_data, user_id
from loadtests.helpers.response import extract_error_detail, is_stock_rejection
from loadtests.helpers.state import ShopperState

CONTENDED_STOCK = 25

_contended = {"product_id": None}


@events.test_start.add_listener
def create_contended_product(environment, **_kwargs):
    """List one low-stock product that every ContendedStockJourney fights over."""
    if environment.host is None:
        return

    owner = user_id()
    resp = requests.post(
        f"{environment.host}/products",
        json=product_data(inventory=CONTENDED_STOCK),
        headers=auth_headers(owner),
        timeout=10,
    )
    if resp.status_code == 201:
        _contended["product_id"] = resp.json()["productId"]


class CheckoutJourney(SequentialTaskSet):
    """List Product -> Browse -> Checkout -> Order History -> Order Detail."""

    def on_start(self):
        self.state = ShopperState(user_id=user_id())
        self.headers = auth_headers(self.state.user_id)

    @task
    def stock_the_shelf(self):
        with self.client.post(
            "/products",
            json=product_data(inventory=1000),
            headers=auth_headers(user_id()),
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["productId"])
            else:
                resp.failure(f"Create product failed: {resp.status_code}")
                self.interrupt()

    @task
    def browse(self):
        self.client.get(f"/products/{self.state.product_ids[0]}", name="GET /products/{id}")

    @task
    def checkout(self):
        with self.client.post(
            "/orders/checkout",
            json=checkout_data(self.state.product_ids),
            headers=self.headers,
            catch_response=True,
            name="POST /orders/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["orderId"])
            else:
                resp.failure(f"Checkout failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def history(self):
        with self.client.get(
            "/orders", headers=self.headers, catch_response=True, name="GET /orders"
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code}")
            elif len(resp.json()["items"]) != len(self.state.order_ids):
                resp.failure("Order history does not match placed orders")

    @task
    def detail(self):
        self.client.get(
            f"/orders/{self.state.order_ids[-1]}",
            headers=self.headers,
            name="GET /orders/{id}",
        )

    @task
    def done(self):
        self.interrupt()


class ContendedStockJourney(SequentialTaskSet):
    """Many shoppers, one low-stock product."""

    def on_start(self):
        self.state = ShopperState(user_id=user_id())
        self.headers = auth_headers(self.state.user_id)
        if _contended["product_id"] is None:
            self.interrupt()

    @task
    def grab(self):
        payload = {"items": [{"productId": _contended["product_id"], "quantity": random.randint(1, 2)}]}
        with self.client.post(
            "/orders/checkout",
            json=payload,
            headers=self.headers,
            catch_response=True,
            name="POST /orders/checkout (contended)",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["orderId"])
            elif is_stock_rejection(resp):
                # Losing the race is the expected outcome once stock runs out
                self.state.rejected += 1
                resp.success()
            else:
                resp.failure(f"Contended checkout failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Locust user simulating shoppers.

    Weighted distribution:
    - 60% ordinary checkouts
    - 40% contention on the shared low-stock product
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        CheckoutJourney: 3,
        ContendedStockJourney: 2,
    }
