"""User account business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from book_nest.domain.errors import DuplicateKeyError, NotFound, ValidationFailed
from book_nest.domain.models import UserRecord
from book_nest.services.auth import TokenService, hash_password, verify_password

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with the given normalized email, if present."""

    def find_conflicting(self, username: str, email: str) -> UserRecord | None:
        """Return any user already holding the username or the email."""

    def username_taken(self, username: str, exclude_id: UUID) -> bool:
        """Return True when another user holds the username."""

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Create a user. Raises DuplicateKeyError on a unique violation."""

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        """Apply column changes and return the updated user."""

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""


@dataclass(frozen=True)
class AuthResult:
    """Issued token together with the authenticated user."""

    token: str
    user: UserRecord


@dataclass
class UserService:
    """Application service for registration, login and profile management."""

    repository: UserRepository
    tokens: TokenService

    def register(
        self, username: str | None, email: str | None, password: str | None
    ) -> AuthResult:
        """Create an account and issue a token for it."""
        username = (username or "").strip()
        email = normalize_email(email)
        if not username or not email or not password:
            raise ValidationFailed("Please provide username, email and password")
        if self.repository.find_conflicting(username, email):
            raise ValidationFailed("User already exists")
        try:
            user = self.repository.create_user(
                username, email, hash_password(password)
            )
        except DuplicateKeyError as exc:
            raise ValidationFailed("User already exists") from exc
        _logger.info("Registered user %s", user.id)
        return AuthResult(token=self.tokens.issue(user), user=user)

    def login(self, email: str | None, password: str | None) -> AuthResult:
        """Verify credentials and issue a token."""
        user = self.repository.get_by_email(normalize_email(email))
        if user is None or not password:
            raise ValidationFailed("Invalid credentials")
        if not verify_password(password, user.password_hash):
            raise ValidationFailed("Invalid credentials")
        return AuthResult(token=self.tokens.issue(user), user=user)

    def get_user(self, user_id: UUID) -> UserRecord:
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def update_profile(
        self,
        user_id: UUID,
        username: str | None = None,
        bio: str | None = None,
        profile_picture: str | None = None,
    ) -> UserRecord:
        """Update username, bio and profile picture where provided."""
        user = self.get_user(user_id)
        changes: dict[str, object] = {}
        if username is not None:
            username = username.strip()
            if not username:
                raise ValidationFailed("Username cannot be empty")
            if username != user.username:
                if self.repository.username_taken(username, exclude_id=user.id):
                    raise ValidationFailed("Username is already taken")
                changes["username"] = username
        if bio is not None:
            changes["bio"] = bio
        if profile_picture is not None:
            if profile_picture and not profile_picture.startswith("data:"):
                raise ValidationFailed(
                    "Profile picture must be a data URI",
                    details=["profilePicture: expected data:<mime>;base64,..."],
                )
            changes["profile_picture"] = profile_picture or None
        if not changes:
            return user
        try:
            return self.repository.update_user(user.id, changes)
        except DuplicateKeyError as exc:
            raise ValidationFailed("Username is already taken") from exc

    def get_settings(self, user_id: UUID) -> dict[str, object]:
        return dict(self.get_user(user_id).settings)

    def update_settings(
        self, user_id: UUID, updates: dict[str, object]
    ) -> dict[str, object]:
        """Shallow-merge updates into the stored settings map."""
        user = self.get_user(user_id)
        merged = {**user.settings, **updates}
        updated = self.repository.update_user(user.id, {"settings": merged})
        return dict(updated.settings)

    def change_password(
        self,
        user_id: UUID,
        current_password: str | None,
        new_password: str | None,
    ) -> None:
        """Replace the password after verifying the current one."""
        if not current_password or not new_password:
            raise ValidationFailed("Please provide current and new password")
        user = self.get_user(user_id)
        if not verify_password(current_password, user.password_hash):
            raise ValidationFailed("Current password is incorrect")
        self.repository.update_user(
            user.id, {"password_hash": hash_password(new_password)}
        )

    def delete_account(self, user_id: UUID) -> None:
        """Delete the account. Library entries are left in place."""
        user = self.get_user(user_id)
        self.repository.delete_user(user.id)
        _logger.info("Deleted user %s", user.id)


def normalize_email(email: str | None) -> str:
    """Trim and lower-case an email address."""
    return (email or "").strip().lower()


def public_user(
    user: UserRecord, *, include_settings: bool = False
) -> dict[str, object]:
    """Return the user fields safe to send to clients."""
    payload: dict[str, object] = {
        "id": str(user.id),
        "username": user.username,
        "email": user.email,
    }
    if include_settings:
        payload["settings"] = dict(user.settings)
    return payload


def profile_payload(user: UserRecord) -> dict[str, object]:
    """Return the full profile representation."""
    return {
        **public_user(user, include_settings=True),
        "bio": user.bio,
        "profilePicture": user.profile_picture,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }
