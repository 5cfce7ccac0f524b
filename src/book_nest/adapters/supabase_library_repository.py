"""Supabase implementation for library entries."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from book_nest.adapters.supabase_errors import execute_unique
from book_nest.domain.library import LibraryEntry, VolumeInfo
from book_nest.services.library import LibraryFlag, LibraryRepository
from book_nest.services.sanitizer import sanitize_volume_info

_TABLE = "library_entries"


@dataclass
class SupabaseLibraryRepository(LibraryRepository):
    """Supabase-backed repository for per-user book flags."""

    client: Client

    def get_entry(self, user_id: UUID, book_id: str) -> LibraryEntry | None:
        """Return the entry for a (user, book) pair, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("book_id", book_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        book_id: str,
        volume_info: VolumeInfo,
        is_liked: bool,
        in_nest: bool,
        added_at: datetime,
    ) -> LibraryEntry:
        """Insert an entry; the (user_id, book_id) unique key rejects duplicates."""
        response = execute_unique(
            "library_entries_user_id_book_id_key",
            lambda: self.client.table(_TABLE)
            .insert(
                {
                    "user_id": str(user_id),
                    "book_id": book_id,
                    "volume_info": volume_info.to_dict(),
                    "is_liked": is_liked,
                    "in_nest": in_nest,
                    "added_at": added_at.isoformat(),
                }
            )
            .execute(),
        )
        if not response.data:
            raise RuntimeError("Failed to create library entry")
        return _parse_entry(response.data[0])

    def compare_and_set_flag(
        self,
        entry_id: UUID,
        flag: LibraryFlag,
        expected: bool,
        volume_info: VolumeInfo,
    ) -> LibraryEntry | None:
        """Invert a flag only where it still holds the expected value."""
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    flag: not expected,
                    "volume_info": volume_info.to_dict(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(entry_id))
            .eq(flag, expected)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_flagged(self, user_id: UUID, flag: LibraryFlag) -> list[LibraryEntry]:
        """Return flagged entries, most recently added first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq(flag, True)
            .order("added_at", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_entry(row: dict[str, object]) -> LibraryEntry:
    """Parse a library_entries row into a domain model."""
    return LibraryEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        book_id=str(row["book_id"]),
        volume_info=sanitize_volume_info(row.get("volume_info")),
        is_liked=bool(row.get("is_liked", False)),
        in_nest=bool(row.get("in_nest", False)),
        added_at=_parse_timestamp(row.get("added_at")),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
