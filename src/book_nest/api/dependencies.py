"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Cookie, Header, Request

from book_nest.domain.models import Identity  # noqa: TC001

if TYPE_CHECKING:
    from book_nest.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the application."""
    return request.app.state.container


async def require_user(
    request: Request,
    x_auth_token: str | None = Header(default=None),
    token: str | None = Cookie(default=None),
) -> Identity:
    """Ensure requests carry a valid token and expose the caller identity."""
    container = get_container(request)
    identity = container.token_service.authenticate(x_auth_token, token)
    request.state.user = identity
    return identity
