"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from book_nest.adapters.supabase_errors import execute_unique
from book_nest.domain.models import UserRecord
from book_nest.services.users import UserRepository

_COLUMNS = (
    "id, username, email, password_hash, bio, profile_picture, settings, created_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        return self._first(
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
            .data
        )

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with the given email, if present."""
        return self._first(
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
            .data
        )

    def find_conflicting(self, username: str, email: str) -> UserRecord | None:
        """Return any user holding the username or the email."""
        return self._first(
            self.client.table("users")
            .select(_COLUMNS)
            .or_(f"username.eq.{_quote(username)},email.eq.{_quote(email)}")
            .limit(1)
            .execute()
            .data
        )

    def username_taken(self, username: str, exclude_id: UUID) -> bool:
        """Return True when another user holds the username."""
        response = (
            self.client.table("users")
            .select("id")
            .eq("username", username)
            .neq("id", str(exclude_id))
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Create a new user row and return it."""
        response = execute_unique(
            "users_username_email_key",
            lambda: self.client.table("users")
            .insert(
                {
                    "username": username,
                    "email": email,
                    "password_hash": password_hash,
                    "settings": {},
                }
            )
            .execute(),
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        """Apply column changes and return the updated user."""
        response = execute_unique(
            "users_username_key",
            lambda: self.client.table("users")
            .update(changes)
            .eq("id", str(user_id))
            .execute(),
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_user(response.data[0])

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""
        self.client.table("users").delete().eq("id", str(user_id)).execute()

    @staticmethod
    def _first(rows: list[dict[str, object]] | None) -> UserRecord | None:
        if not rows:
            return None
        return _parse_user(rows[0])


def _quote(value: str) -> str:
    """Quote a value for a PostgREST ``or`` filter."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a users row into a domain model."""
    created_raw = row.get("created_at")
    settings = row.get("settings")
    return UserRecord(
        id=UUID(str(row["id"])),
        username=str(row["username"]),
        email=str(row["email"]),
        password_hash=str(row.get("password_hash") or ""),
        bio=row.get("bio"),
        profile_picture=row.get("profile_picture"),
        settings=dict(settings) if isinstance(settings, dict) else {},
        created_at=datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None,
    )
