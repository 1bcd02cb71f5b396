"""Bearer token gate for protected routes."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

if TYPE_CHECKING:
    from travel_stories.containers import AppContainer

bearer_scheme = HTTPBearer(auto_error=False)


async def require_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UUID:
    """Return the caller's user id or reject the request with 401."""
    container: AppContainer = request.app.state.container
    token = credentials.credentials if credentials else None
    return container.token_service.verify(token)
