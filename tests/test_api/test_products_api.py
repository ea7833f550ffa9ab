"""Tests for product table endpoints."""

import pytest
from httpx import AsyncClient


@pytest.fixture
def payload(days_from_today) -> dict:
    return {
        "name": "Almond Milk",
        "category": "Dairy",
        "quantity": 45,
        "price": 240,
        "expiryDate": days_from_today(200),
        "notes": "top shelf",
    }


class TestProductEndpoints:

    @pytest.mark.asyncio
    async def test_create_product(self, client: AsyncClient, payload: dict):
        response = await client.post("/products", json=payload)
        assert response.status_code == 201

        data = response.json()
        assert data["id"]
        assert data["expiryDate"] == payload["expiryDate"]
        assert data["notes"] == "top shelf"

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_payload(self, client: AsyncClient, payload: dict):
        payload["quantity"] = -5
        response = await client.post("/products", json=payload)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_includes_status(self, client: AsyncClient, payload: dict, days_from_today):
        await client.post("/products", json=payload)
        await client.post("/products", json={**payload, "name": "Old Cheese", "quantity": 3,
                                             "expiryDate": days_from_today(-10)})

        response = await client.get("/products")
        assert response.status_code == 200

        rows = response.json()
        assert [r["name"] for r in rows] == ["Old Cheese", "Almond Milk"]
        assert [r["status"] for r in rows] == ["Expired", "Good"]

    @pytest.mark.asyncio
    async def test_list_search_filter_and_sort(self, client: AsyncClient, payload: dict):
        await client.post("/products", json=payload)
        await client.post("/products", json={**payload, "name": "bagel", "category": "Bakery"})
        await client.post("/products", json={**payload, "name": "Butter"})

        response = await client.get(
            "/products",
            params={"search": "B", "category": "All", "sort_field": "name", "sort_order": "desc"},
        )
        assert [r["name"] for r in response.json()] == ["Butter", "bagel"]

        response = await client.get("/products", params={"category": "Bakery"})
        assert [r["name"] for r in response.json()] == ["bagel"]

    @pytest.mark.asyncio
    async def test_list_rejects_unknown_sort_field(self, client: AsyncClient):
        response = await client.get("/products", params={"sort_field": "colour"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_update_delete(self, client: AsyncClient, payload: dict):
        product_id = (await client.post("/products", json=payload)).json()["id"]

        response = await client.get(f"/products/{product_id}")
        assert response.status_code == 200
        assert response.json()["status"] == "Good"

        response = await client.put(f"/products/{product_id}", json={**payload, "quantity": 2})
        assert response.status_code == 200
        assert response.json()["id"] == product_id
        assert response.json()["quantity"] == 2

        response = await client.delete(f"/products/{product_id}")
        assert response.status_code == 204

        response = await client.get(f"/products/{product_id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_unknown_product(self, client: AsyncClient, payload: dict):
        response = await client.put("/products/missing", json=payload)
        assert response.status_code == 404
        assert "missing" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_delete_unknown_product(self, client: AsyncClient):
        response = await client.delete("/products/missing")
        assert response.status_code == 404
