"""Catalog search endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from book_nest.api.dependencies import get_container
from book_nest.domain.errors import ValidationFailed

if TYPE_CHECKING:
    from book_nest.containers import AppContainer

router = APIRouter(prefix="/api/books", tags=["books"])


@router.get("/search")
async def search_books(
    request: Request,
    query: str | None = None,
    max_results: int = Query(default=10, alias="maxResults", ge=1, le=40),
) -> list[dict[str, object]]:
    """Search the catalog."""
    if not query or not query.strip():
        raise ValidationFailed("Search query is required")
    container: AppContainer = get_container(request)
    books = await container.catalog_service.search(query, max_results=max_results)
    return [book.to_dict() for book in books]


@router.get("/{book_id}")
async def get_book(book_id: str, request: Request) -> dict[str, object]:
    """Return a single catalog volume."""
    container: AppContainer = get_container(request)
    book = await container.catalog_service.get_by_id(book_id)
    return book.to_dict()
