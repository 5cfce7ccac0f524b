"""Account endpoints: registration, login, profile and settings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Depends, Request, status

from book_nest.api.dependencies import get_container, require_user
from book_nest.api.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)
from book_nest.domain.models import Identity  # noqa: TC001
from book_nest.services.users import profile_payload, public_user

if TYPE_CHECKING:
    from book_nest.containers import AppContainer

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an account and return a token for it."""
    container: AppContainer = get_container(request)
    result = container.user_service.register(
        payload.username, payload.email, payload.password
    )
    return {"token": result.token, "user": public_user(result.user)}


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange credentials for a token."""
    container: AppContainer = get_container(request)
    result = container.user_service.login(payload.email, payload.password)
    return {
        "token": result.token,
        "user": public_user(result.user, include_settings=True),
    }


@router.get("/profile")
async def get_profile(
    request: Request, identity: Identity = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's profile."""
    container: AppContainer = get_container(request)
    return profile_payload(container.user_service.get_user(identity.id))


@router.put("/profile")
async def update_profile(
    payload: ProfileUpdateRequest,
    request: Request,
    identity: Identity = Depends(require_user),
) -> dict[str, object]:
    """Update username, bio and profile picture."""
    container: AppContainer = get_container(request)
    user = container.user_service.update_profile(
        identity.id,
        username=payload.username,
        bio=payload.bio,
        profile_picture=payload.profile_picture,
    )
    return profile_payload(user)


@router.get("/settings")
async def get_settings(
    request: Request, identity: Identity = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's settings map."""
    container: AppContainer = get_container(request)
    return container.user_service.get_settings(identity.id)


@router.put("/settings")
async def update_settings(
    request: Request,
    updates: dict[str, Any] = Body(...),
    identity: Identity = Depends(require_user),
) -> dict[str, object]:
    """Merge the body into the caller's settings."""
    container: AppContainer = get_container(request)
    return container.user_service.update_settings(identity.id, updates)


@router.put("/change-password")
async def change_password(
    payload: ChangePasswordRequest,
    request: Request,
    identity: Identity = Depends(require_user),
) -> dict[str, str]:
    """Replace the caller's password."""
    container: AppContainer = get_container(request)
    container.user_service.change_password(
        identity.id, payload.current_password, payload.new_password
    )
    return {"message": "Password updated successfully"}


@router.delete("/delete-account")
async def delete_account(
    request: Request, identity: Identity = Depends(require_user)
) -> dict[str, str]:
    """Delete the caller's account."""
    container: AppContainer = get_container(request)
    container.user_service.delete_account(identity.id)
    return {"message": "Account deleted successfully"}
