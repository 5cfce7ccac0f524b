"""Google Books API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class GoogleBooksClient(Protocol):
    """Interface for Google Books API interactions."""

    async def search_volumes(
        self, query: str, max_results: int = 10
    ) -> dict[str, object]:
        """Search volumes by query and return raw API data."""

    async def get_volume(self, volume_id: str) -> dict[str, object]:
        """Fetch a volume by id and return raw API data."""


@dataclass
class HttpxGoogleBooksClient(GoogleBooksClient):
    """HTTPX-backed Google Books client."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str | None, base_url: str) -> "HttpxGoogleBooksClient":
        """Create a Google Books client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_volumes(
        self, query: str, max_results: int = 10
    ) -> dict[str, object]:
        """Search volumes by query."""
        response = await self.http_client.get(
            f"{self.base_url}/volumes",
            params=self._params(q=query, maxResults=max_results),
        )
        response.raise_for_status()
        return response.json()

    async def get_volume(self, volume_id: str) -> dict[str, object]:
        """Fetch a volume by id."""
        response = await self.http_client.get(
            f"{self.base_url}/volumes/{volume_id}",
            params=self._params(),
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _params(self, **params: object) -> dict[str, object]:
        if self.api_key:
            params["key"] = self.api_key
        return params
