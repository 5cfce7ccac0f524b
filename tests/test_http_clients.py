"""Tests for HTTP-based adapters."""

import asyncio

import httpx
import pytest

from book_nest.adapters.google_books_client import HttpxGoogleBooksClient


def test_google_books_client_search_and_get() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/volumes"):
            return httpx.Response(200, json={"totalItems": 0})
        return httpx.Response(200, json={"id": "abc123", "volumeInfo": {}})

    transport = httpx.MockTransport(handler)
    client = HttpxGoogleBooksClient(
        api_key="key",
        base_url="https://books.test/v1",
        http_client=httpx.AsyncClient(transport=transport),
    )

    search = asyncio.run(client.search_volumes("dune", max_results=3))
    volume = asyncio.run(client.get_volume("abc123"))

    assert search == {"totalItems": 0}
    assert volume["id"] == "abc123"
    assert seen[0].url.params["q"] == "dune"
    assert seen[0].url.params["maxResults"] == "3"
    assert seen[0].url.params["key"] == "key"
    assert seen[1].url.path == "/v1/volumes/abc123"


def test_google_books_client_omits_missing_key() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    client = HttpxGoogleBooksClient(
        api_key=None,
        base_url="https://books.test/v1",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    asyncio.run(client.search_volumes("dune"))

    assert "key" not in seen[0].url.params


def test_google_books_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": {"message": "not found"}})

    client = HttpxGoogleBooksClient(
        api_key=None,
        base_url="https://books.test/v1",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.get_volume("missing"))
