"""Domain models for a user's book library."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

UNKNOWN_TITLE = "Unknown Title"


@dataclass(frozen=True)
class ImageLinks:
    """Cover image URLs for a volume."""

    thumbnail: str = ""
    small_thumbnail: str = ""


@dataclass(frozen=True)
class IndustryIdentifier:
    """ISBN or other industry identifier for a volume."""

    type: str
    identifier: str


@dataclass(frozen=True)
class VolumeInfo:
    """Denormalized snapshot of catalog metadata stored with a library entry."""

    title: str = UNKNOWN_TITLE
    subtitle: str = ""
    authors: list[str] = field(default_factory=list)
    publisher: str = ""
    published_date: str = ""
    description: str = ""
    page_count: float | None = None
    categories: list[str] = field(default_factory=list)
    average_rating: float | None = None
    ratings_count: float | None = None
    language: str = ""
    image_links: ImageLinks = field(default_factory=ImageLinks)
    industry_identifiers: list[IndustryIdentifier] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Serialize to the camelCase shape used in storage and responses."""
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "authors": list(self.authors),
            "publisher": self.publisher,
            "publishedDate": self.published_date,
            "description": self.description,
            "pageCount": self.page_count,
            "categories": list(self.categories),
            "averageRating": self.average_rating,
            "ratingsCount": self.ratings_count,
            "language": self.language,
            "imageLinks": {
                "thumbnail": self.image_links.thumbnail,
                "smallThumbnail": self.image_links.small_thumbnail,
            },
            "industryIdentifiers": [
                {"type": item.type, "identifier": item.identifier}
                for item in self.industry_identifiers
            ],
        }


@dataclass(frozen=True)
class LibraryEntry:
    """One user's like/nest state for one book."""

    id: UUID
    user_id: UUID
    book_id: str
    volume_info: VolumeInfo
    is_liked: bool
    in_nest: bool
    added_at: datetime | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class LibraryStatus:
    """Like/nest flags for a (user, book) pair, present or not."""

    user_id: UUID
    book_id: str
    is_liked: bool = False
    in_nest: bool = False
    added_at: datetime | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "bookId": self.book_id,
            "isLiked": self.is_liked,
            "inNest": self.in_nest,
            "addedAt": self.added_at.isoformat() if self.added_at else None,
            "userId": str(self.user_id),
        }
