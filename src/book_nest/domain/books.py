"""Catalog book models."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from book_nest.domain.errors import ValidationFailed

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class BookSummary:
    """A catalog volume reshaped into the internal summary form."""

    id: str
    title: str | None
    authors: list[str] = field(default_factory=list)
    description: str | None = None
    page_count: int | None = None
    categories: list[str] = field(default_factory=list)
    image_links: dict[str, str] | None = None
    published_date: str | None = None
    publisher: str | None = None
    average_rating: float | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "authors": list(self.authors),
            "description": self.description,
            "pageCount": self.page_count,
            "categories": list(self.categories),
            "imageLinks": self.image_links,
            "publishedDate": self.published_date,
            "publisher": self.publisher,
            "averageRating": self.average_rating,
        }


@dataclass(frozen=True)
class UserRating:
    """A user's rating and review of a cached book."""

    user_id: UUID
    rating: int
    review: str = ""

    def __post_init__(self) -> None:
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValidationFailed(
                "Rating must be between 1 and 5",
                details=[f"rating: {self.rating}"],
            )


@dataclass(frozen=True)
class CachedBook:
    """Catalog volume cached in the database."""

    catalog_id: str
    title: str
    authors: list[str] = field(default_factory=list)
    description: str | None = None
    page_count: int | None = None
    categories: list[str] = field(default_factory=list)
    image_links: dict[str, str] | None = None
    published_date: str | None = None
    publisher: str | None = None
    average_rating: float | None = None
    user_ratings: list[UserRating] = field(default_factory=list)
    added_by: list[UUID] = field(default_factory=list)
    created_at: datetime | None = None
