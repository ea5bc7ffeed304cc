"""Integration tests for the Products API via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import register_error_handlers
from storefront.catalogue.api import product_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    register_error_handlers(app)
    return TestClient(app)


def _create(client, headers, **overrides):
    body = {
        "name": "Stoneware Mug",
        "description": "Speckled glaze, 350 ml",
        "price": "18.00",
        "sku": "MUG-01",
        "inventory": 12,
    }
    body.update(overrides)
    response = client.post("/products", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["productId"]


class TestBrowseProductsAPI:
    def test_list_returns_page(self, client, make_product):
        make_product(name="Stoneware Mug", price_cents=1800)
        response = client.get("/products")
        assert response.status_code == 200
        data = response.json()
        assert [item["name"] for item in data["items"]] == ["Stoneware Mug"]
        assert data["items"][0]["price"] == "18.00"
        assert data["nextCursor"] is None

    def test_list_with_filters(self, client, make_product):
        make_product(name="Stoneware Mug", price_cents=1800)
        make_product(name="Brass Lamp", price_cents=8900)
        response = client.get("/products", params={"minPrice": "50", "sortBy": "price", "sortOrder": "asc"})
        assert [item["name"] for item in response.json()["items"]] == ["Brass Lamp"]

    def test_bad_sort_is_bad_request(self, client):
        response = client.get("/products", params={"sortBy": "colour"})
        assert response.status_code == 400
        assert response.json()["errorKind"] == "BadRequest"

    def test_featured(self, client, make_product):
        make_product(name="Stoneware Mug", price_cents=1800)
        make_product(name="Brass Lamp", price_cents=8900)
        response = client.get("/products/featured", params={"limit": 1})
        assert [item["name"] for item in response.json()] == ["Brass Lamp"]

    def test_search(self, client, make_product):
        make_product(name="Brass Lamp")
        response = client.get("/products/search", params={"q": "brass"})
        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Brass Lamp"]

    def test_detail(self, client, make_product):
        lamp = make_product(name="Brass Lamp", inventory=4)
        response = client.get(f"/products/{lamp.id}")
        assert response.status_code == 200
        assert response.json()["inventory"] == 4
        assert response.json()["isActive"] is True

    def test_detail_unknown(self, client):
        response = client.get("/products/missing")
        assert response.status_code == 404
        assert response.json() == {"errorKind": "NotFound", "message": "Product not found"}


class TestManageProductsAPI:
    def test_create_requires_sign_in(self, client):
        response = client.post("/products", json={"name": "Mug", "price": "1.00", "inventory": 1})
        assert response.status_code == 401
        assert response.json()["errorKind"] == "Unauthorized"

    def test_create_with_bad_token(self, client):
        response = client.post(
            "/products",
            json={"name": "Mug", "price": "1.00", "inventory": 1},
            headers={"Authorization": "Bearer forged.token"},
        )
        assert response.status_code == 401

    def test_create_and_read_back(self, client, auth_headers):
        product_id = _create(client, auth_headers("owner-1"))
        data = client.get(f"/products/{product_id}").json()
        assert data["name"] == "Stoneware Mug"
        assert data["price"] == "18.00"
        assert data["sku"] == "MUG-01"

    def test_create_with_zero_inventory_is_hidden(self, client, auth_headers):
        product_id = _create(client, auth_headers("owner-1"), inventory=0)
        assert client.get(f"/products/{product_id}").json()["isActive"] is False
        assert client.get("/products").json()["items"] == []

    def test_create_rejects_negative_price(self, client, auth_headers):
        response = client.post(
            "/products",
            json={"name": "Mug", "price": "-1.00", "inventory": 1},
            headers=auth_headers("owner-1"),
        )
        assert response.status_code == 400
        assert response.json()["errorKind"] == "BadRequest"

    def test_update(self, client, auth_headers):
        headers = auth_headers("owner-1")
        product_id = _create(client, headers)
        response = client.put(
            f"/products/{product_id}",
            json={"name": "Large Mug", "price": "22.50", "inventory": 3},
            headers=headers,
        )
        assert response.status_code == 200
        data = client.get(f"/products/{product_id}").json()
        assert data["name"] == "Large Mug"
        assert data["price"] == "22.50"

    def test_update_unknown(self, client, auth_headers):
        response = client.put(
            "/products/missing",
            json={"name": "Ghost", "price": "1.00", "inventory": 1},
            headers=auth_headers("owner-1"),
        )
        assert response.status_code == 404

    def test_delete(self, client, auth_headers):
        headers = auth_headers("owner-1")
        product_id = _create(client, headers)
        response = client.delete(f"/products/{product_id}", headers=headers)
        assert response.status_code == 200
        assert client.get(f"/products/{product_id}").status_code == 404
