"""Catalog lookups against Google Books."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from book_nest.adapters.google_books_client import GoogleBooksClient
from book_nest.domain.books import BookSummary, CachedBook
from book_nest.domain.errors import UpstreamError

_logger = logging.getLogger(__name__)

_CATALOG_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


class BookRepository(Protocol):
    """Persistence interface for cached catalog books."""

    def get_by_catalog_id(self, catalog_id: str) -> CachedBook | None:
        """Return the cached book, if present."""

    def upsert_from_summary(self, summary: BookSummary) -> CachedBook:
        """Insert or refresh descriptive fields, keeping ratings and addedBy."""


@dataclass
class CatalogService:
    """Searches the external catalog and reshapes its volumes."""

    client: GoogleBooksClient
    book_repository: BookRepository | None = None

    async def search(self, query: str, max_results: int = 10) -> list[BookSummary]:
        """Search the catalog. Any failure becomes a single UpstreamError."""
        try:
            payload = await self.client.search_volumes(query, max_results=max_results)
            return [map_volume(item) for item in payload.get("items") or []]
        except _CATALOG_ERRORS as exc:
            _logger.warning("Catalog search failed: query=%s error=%s", query, exc)
            raise UpstreamError("Failed to search books") from exc

    async def get_by_id(self, volume_id: str) -> BookSummary:
        """Fetch a single volume and cache it when a repository is configured."""
        try:
            payload = await self.client.get_volume(volume_id)
            summary = map_volume(payload)
        except _CATALOG_ERRORS as exc:
            _logger.warning("Catalog fetch failed: id=%s error=%s", volume_id, exc)
            raise UpstreamError("Failed to fetch book details") from exc
        if self.book_repository is not None:
            try:
                self.book_repository.upsert_from_summary(summary)
            except Exception:
                _logger.exception("Failed to cache book %s", volume_id)
        return summary


def map_volume(volume: dict[str, object]) -> BookSummary:
    """Reshape a catalog volume into a BookSummary."""
    info = volume.get("volumeInfo") or {}
    return BookSummary(
        id=str(volume["id"]),
        title=info.get("title"),
        authors=list(info.get("authors") or []),
        description=info.get("description"),
        page_count=info.get("pageCount"),
        categories=list(info.get("categories") or []),
        image_links=info.get("imageLinks"),
        published_date=info.get("publishedDate"),
        publisher=info.get("publisher"),
        average_rating=info.get("averageRating"),
    )
