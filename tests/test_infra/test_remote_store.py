"""Tests for the remote table store client."""

import json

import httpx
import pytest

from stock_manager.core.errors import RemoteOperationFailed, RemoteUnavailable
from stock_manager.infra.remote_store import RemoteTableStore


def make_store(handler) -> RemoteTableStore:
    return RemoteTableStore(
        "https://example.supabase.co/",
        "anon-key",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


class TestConstruction:

    @pytest.mark.parametrize("url", ["", "not a url", "ftp://example.com", "https://"])
    def test_invalid_url(self, url):
        with pytest.raises(RemoteUnavailable):
            RemoteTableStore(url, "anon-key")

    def test_empty_key(self):
        with pytest.raises(RemoteUnavailable):
            RemoteTableStore("https://example.supabase.co", "")

    def test_trailing_slash_removed(self):
        store = RemoteTableStore("https://example.supabase.co/", "anon-key")
        assert store.url == "https://example.supabase.co"


class TestRequests:

    @pytest.mark.asyncio
    async def test_select(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"name": "Dairy"}])

        store = make_store(handler)
        rows = await store.select("categories", columns="name")
        await store.close()

        assert rows == [{"name": "Dairy"}]
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/categories"
        assert request.url.params["select"] == "name"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["Authorization"] == "Bearer anon-key"

    @pytest.mark.asyncio
    async def test_upsert(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201)

        store = make_store(handler)
        await store.upsert("products", [{"id": "1"}], on_conflict="id")

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/rest/v1/products"
        assert request.url.params["on_conflict"] == "id"
        assert "resolution=merge-duplicates" in request.headers["Prefer"]
        assert json.loads(request.content) == [{"id": "1"}]

    @pytest.mark.asyncio
    async def test_delete(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        store = make_store(handler)
        await store.delete("categories", "name", "Canned Goods")

        request = seen[0]
        assert request.method == "DELETE"
        assert request.url.params["name"] == "eq.Canned Goods"

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        store = make_store(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(RemoteOperationFailed) as exc_info:
            await store.select("products")
        assert exc_info.value.operation == "select"
        assert exc_info.value.table == "products"
        assert "500" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        store = make_store(handler)
        with pytest.raises(RemoteOperationFailed) as exc_info:
            await store.upsert("products", {"id": "1"})
        assert "Connection refused" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_non_list_body_raises(self):
        store = make_store(lambda request: httpx.Response(200, json={"message": "hi"}))
        with pytest.raises(RemoteOperationFailed):
            await store.select("products")
