"""Pydantic models for request bodies."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Registration payload."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """Login payload."""

    email: str | None = None
    password: str | None = None


class ProfileUpdateRequest(BaseModel):
    """Profile update payload; omitted fields are left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    bio: str | None = None
    profile_picture: str | None = Field(default=None, alias="profilePicture")


class ChangePasswordRequest(BaseModel):
    """Password change payload."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")


class LibraryToggleRequest(BaseModel):
    """Like/nest toggle payload. volumeInfo is sanitized by the service."""

    model_config = ConfigDict(populate_by_name=True)

    book_id: str = Field(alias="bookId")
    volume_info: Any = Field(default=None, alias="volumeInfo")
