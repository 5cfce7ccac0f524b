"""Services for a user's liked books and reading nest."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal, Protocol
from uuid import UUID

from book_nest.domain.errors import DuplicateKeyError, ValidationFailed
from book_nest.domain.library import LibraryEntry, LibraryStatus, VolumeInfo
from book_nest.services.sanitizer import sanitize_volume_info

LibraryFlag = Literal["is_liked", "in_nest"]

_logger = logging.getLogger(__name__)


class LibraryRepository(Protocol):
    """Persistence interface for library entries."""

    def get_entry(self, user_id: UUID, book_id: str) -> LibraryEntry | None:
        """Return the entry for a (user, book) pair, if present."""

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        book_id: str,
        volume_info: VolumeInfo,
        is_liked: bool,
        in_nest: bool,
        added_at: datetime,
    ) -> LibraryEntry:
        """Insert a new entry. Raises DuplicateKeyError if the pair exists."""

    def compare_and_set_flag(
        self,
        entry_id: UUID,
        flag: LibraryFlag,
        expected: bool,
        volume_info: VolumeInfo,
    ) -> LibraryEntry | None:
        """Invert a flag only if it still equals ``expected``.

        Returns the updated entry, or None when another writer got there first.
        """

    def list_flagged(self, user_id: UUID, flag: LibraryFlag) -> list[LibraryEntry]:
        """Return the user's entries with ``flag`` set, newest addedAt first."""


@dataclass
class LibraryService:
    """Application service for like/nest bookkeeping."""

    repository: LibraryRepository
    max_attempts: int = 3

    def get_status(self, user_id: UUID, book_id: str) -> LibraryStatus:
        """Return the flags for a book, defaulting to unset when untracked."""
        entry = self.repository.get_entry(user_id, book_id)
        if entry is None:
            return LibraryStatus(user_id=user_id, book_id=book_id)
        return LibraryStatus(
            user_id=entry.user_id,
            book_id=entry.book_id,
            is_liked=entry.is_liked,
            in_nest=entry.in_nest,
            added_at=entry.added_at,
        )

    def toggle_like(self, user_id: UUID, book_id: str, volume_info: object) -> bool:
        """Flip the liked flag and return its new value."""
        return self._toggle(user_id, book_id, volume_info, "is_liked").is_liked

    def toggle_nest(self, user_id: UUID, book_id: str, volume_info: object) -> bool:
        """Flip the nest flag and return its new value."""
        return self._toggle(user_id, book_id, volume_info, "in_nest").in_nest

    def list_liked(self, user_id: UUID) -> list[LibraryEntry]:
        return self.repository.list_flagged(user_id, "is_liked")

    def list_nest(self, user_id: UUID) -> list[LibraryEntry]:
        return self.repository.list_flagged(user_id, "in_nest")

    def _toggle(
        self, user_id: UUID, book_id: str, volume_info: object, flag: LibraryFlag
    ) -> LibraryEntry:
        if not isinstance(book_id, str) or not book_id.strip():
            raise ValidationFailed(
                "Library validation failed", details=["bookId is required"]
            )
        snapshot = sanitize_volume_info(volume_info)
        for attempt in range(1, self.max_attempts + 1):
            entry = self.repository.get_entry(user_id, book_id)
            if entry is None:
                return self._create(user_id, book_id, snapshot, flag)
            updated = self.repository.compare_and_set_flag(
                entry.id, flag, expected=getattr(entry, flag), volume_info=snapshot
            )
            if updated is not None:
                return updated
            _logger.info(
                "Concurrent %s update on book %s (attempt %s/%s)",
                flag,
                book_id,
                attempt,
                self.max_attempts,
            )
        raise ValidationFailed(
            "Library validation failed",
            details=[f"{book_id}: entry was modified concurrently, please retry"],
        )

    def _create(
        self, user_id: UUID, book_id: str, snapshot: VolumeInfo, flag: LibraryFlag
    ) -> LibraryEntry:
        try:
            return self.repository.create_entry(
                user_id,
                book_id,
                snapshot,
                is_liked=flag == "is_liked",
                in_nest=flag == "in_nest",
                added_at=datetime.now(tz=UTC),
            )
        except DuplicateKeyError as exc:
            raise ValidationFailed(
                "Library validation failed",
                details=[f"{book_id}: entry already exists for this user"],
            ) from exc
