"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from book_nest.adapters.google_books_client import HttpxGoogleBooksClient
from book_nest.adapters.supabase_book_repository import SupabaseBookRepository
from book_nest.adapters.supabase_library_repository import (
    SupabaseLibraryRepository,
)
from book_nest.adapters.supabase_user_repository import SupabaseUserRepository
from book_nest.config import Settings
from book_nest.services.auth import TokenService
from book_nest.services.catalog import CatalogService
from book_nest.services.library import LibraryService
from book_nest.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    user_service: UserService
    library_service: LibraryService
    catalog_service: CatalogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    token_service = TokenService(
        secret=resolved_settings.jwt_secret,
        ttl_hours=resolved_settings.token_ttl_hours,
    )
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        tokens=token_service,
    )
    library_service = LibraryService(SupabaseLibraryRepository(supabase_client))
    google_books_client = HttpxGoogleBooksClient.create(
        api_key=resolved_settings.google_books_api_key,
        base_url=resolved_settings.google_books_base_url,
    )
    catalog_service = CatalogService(
        client=google_books_client,
        book_repository=SupabaseBookRepository(supabase_client),
    )

    async def close_resources() -> None:
        await google_books_client.close()

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        user_service=user_service,
        library_service=library_service,
        catalog_service=catalog_service,
        close_resources=close_resources,
    )
