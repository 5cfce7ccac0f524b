"""Library endpoints for liked books and the reading nest."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from book_nest.api.dependencies import get_container, require_user
from book_nest.api.schemas import LibraryToggleRequest
from book_nest.domain.library import LibraryEntry
from book_nest.domain.models import Identity  # noqa: TC001

if TYPE_CHECKING:
    from book_nest.containers import AppContainer

router = APIRouter(prefix="/api/library", tags=["library"])


@router.get("/status/{book_id}")
async def book_status(
    book_id: str, request: Request, identity: Identity = Depends(require_user)
) -> dict[str, object]:
    """Return like/nest flags for a book."""
    container: AppContainer = get_container(request)
    return container.library_service.get_status(identity.id, book_id).to_dict()


@router.post("/like")
async def toggle_like(
    payload: LibraryToggleRequest,
    request: Request,
    identity: Identity = Depends(require_user),
) -> dict[str, object]:
    """Flip the liked flag for a book."""
    container: AppContainer = get_container(request)
    is_liked = container.library_service.toggle_like(
        identity.id, payload.book_id, payload.volume_info
    )
    return {
        "success": True,
        "message": "Like status updated successfully",
        "isLiked": is_liked,
    }


@router.post("/nest")
async def toggle_nest(
    payload: LibraryToggleRequest,
    request: Request,
    identity: Identity = Depends(require_user),
) -> dict[str, object]:
    """Flip the nest flag for a book."""
    container: AppContainer = get_container(request)
    in_nest = container.library_service.toggle_nest(
        identity.id, payload.book_id, payload.volume_info
    )
    return {
        "success": True,
        "message": "Nest status updated successfully",
        "inNest": in_nest,
    }


@router.get("/liked")
async def liked_books(
    request: Request, identity: Identity = Depends(require_user)
) -> list[dict[str, object]]:
    """Return liked books, most recently added first."""
    container: AppContainer = get_container(request)
    entries = container.library_service.list_liked(identity.id)
    return [_serialize_entry(entry) for entry in entries]


@router.get("/nest")
async def nest_books(
    request: Request, identity: Identity = Depends(require_user)
) -> list[dict[str, object]]:
    """Return books in the nest, most recently added first."""
    container: AppContainer = get_container(request)
    entries = container.library_service.list_nest(identity.id)
    return [_serialize_entry(entry) for entry in entries]


def _serialize_entry(entry: LibraryEntry) -> dict[str, object]:
    return {"id": entry.book_id, "volumeInfo": entry.volume_info.to_dict()}
