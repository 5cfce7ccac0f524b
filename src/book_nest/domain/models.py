"""Domain models for user accounts."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    username: str
    email: str
    password_hash: str
    bio: str | None = None
    profile_picture: str | None = None
    settings: dict[str, object] = field(default_factory=dict)
    created_at: datetime | None = None


@dataclass(frozen=True)
class Identity:
    """Authenticated caller attached to a request."""

    id: UUID
    username: str | None
    email: str | None
