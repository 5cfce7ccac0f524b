"""Supabase repository for cached catalog books."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from book_nest.domain.books import BookSummary, CachedBook, UserRating
from book_nest.services.catalog import BookRepository


@dataclass
class SupabaseBookRepository(BookRepository):
    """Supabase implementation for the books cache."""

    client: Client

    def get_by_catalog_id(self, catalog_id: str) -> CachedBook | None:
        """Return the cached book, if present."""
        response = (
            self.client.table("books")
            .select("*")
            .eq("catalog_id", catalog_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_book(response.data[0])

    def upsert_from_summary(self, summary: BookSummary) -> CachedBook:
        """Insert or refresh descriptive columns keyed on the catalog id."""
        response = (
            self.client.table("books")
            .upsert(
                {
                    "catalog_id": summary.id,
                    "title": summary.title or "",
                    "authors": summary.authors,
                    "description": summary.description,
                    "page_count": summary.page_count,
                    "categories": summary.categories,
                    "image_links": summary.image_links,
                    "published_date": summary.published_date,
                    "publisher": summary.publisher,
                    "average_rating": summary.average_rating,
                },
                on_conflict="catalog_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to cache book")
        return _parse_book(response.data[0])


def _parse_book(row: dict[str, object]) -> CachedBook:
    """Parse a books row into a domain model."""
    created_raw = row.get("created_at")
    return CachedBook(
        catalog_id=str(row["catalog_id"]),
        title=str(row.get("title") or ""),
        authors=list(row.get("authors") or []),
        description=row.get("description"),
        page_count=row.get("page_count"),
        categories=list(row.get("categories") or []),
        image_links=row.get("image_links"),
        published_date=row.get("published_date"),
        publisher=row.get("publisher"),
        average_rating=row.get("average_rating"),
        user_ratings=[
            UserRating(
                user_id=UUID(str(item["user_id"])),
                rating=int(item["rating"]),
                review=str(item.get("review") or ""),
            )
            for item in row.get("user_ratings") or []
        ],
        added_by=[UUID(str(item)) for item in row.get("added_by") or []],
        created_at=datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None,
    )
