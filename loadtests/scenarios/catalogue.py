"""Catalogue load test scenarios.

A store owner listing and maintaining products, and anonymous visitors
browsing the store front. Owner steps execute in order; each depends on
the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, TaskSet, between, task

from loadtests.data_generators import auth_headers, product_data, search_term, user_id
from loadtests.helpers.state import StoreOwnerState


class StoreOwnerJourney(SequentialTaskSet):
    """Create Product -> Create Product -> Reprice -> Restock to zero -> Delete."""

    def on_start(self):
        self.state = StoreOwnerState(user_id=user_id())
        self.headers = auth_headers(self.state.user_id)

    def _create(self):
        with self.client.post(
            "/products",
            json=product_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["productId"])
            else:
                resp.failure(f"Create product failed: {resp.status_code}")
                self.interrupt()

    @task
    def create_first(self):
        self._create()

    @task
    def create_second(self):
        self._create()

    @task
    def reprice(self):
        payload = product_data()
        with self.client.put(
            f"/products/{self.state.product_ids[0]}",
            json=payload,
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update product failed: {resp.status_code}")

    @task
    def sell_out(self):
        with self.client.put(
            f"/products/{self.state.product_ids[1]}",
            json=product_data(inventory=0),
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Zero-stock update failed: {resp.status_code}")

    @task
    def delete(self):
        with self.client.delete(
            f"/products/{self.state.product_ids[1]}",
            headers=self.headers,
            catch_response=True,
            name="DELETE /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete product failed: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class BrowsingJourney(TaskSet):
    """Read-only traffic: listing pages, featured shelf, search and detail views."""

    @task(5)
    def list_page(self):
        params = {"limit": 20, "sortBy": random.choice(["price", "name", "createdAt"])}
        with self.client.get("/products", params=params, catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code}")
                return
            cursor = resp.json().get("nextCursor")
        if cursor:
            self.client.get("/products", params={**params, "cursor": cursor}, name="GET /products (next)")

    @task(2)
    def featured(self):
        self.client.get("/products/featured", name="GET /products/featured")

    @task(3)
    def search(self):
        self.client.get("/products/search", params={"q": search_term()}, name="GET /products/search")

    @task(3)
    def detail(self):
        resp = self.client.get("/products", params={"limit": 10}, name="GET /products")
        items = resp.json().get("items", []) if resp.status_code == 200 else []
        if items:
            product_id = random.choice(items)["id"]
            self.client.get(f"/products/{product_id}", name="GET /products/{id}")

    @task(1)
    def stop(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    """Locust user simulating Catalogue interactions.

    Weighted distribution:
    - 80% browsing (the store front is read-heavy)
    - 20% store-owner maintenance
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        BrowsingJourney: 8,
        StoreOwnerJourney: 2,
    }
