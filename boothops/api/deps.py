"""Shared API dependencies."""
from typing import Optional
from fastapi import Depends, Header, Request

from boothops.db import get_db
from boothops.core.constants import ADMIN_TOKEN_HEADER, ADMIN_TOKEN_QUERY_PARAM
from boothops.core.sessions import AdminSession, SessionStore
from boothops.services.auth import authenticate, ensure_super_admin


def get_session_store(request: Request) -> SessionStore:
    """The application's session store, created at startup."""
    return request.app.state.session_store


def get_admin_token(
    request: Request,
    admin_token: Optional[str] = Header(default=None, alias=ADMIN_TOKEN_HEADER),
) -> Optional[str]:
    """Token from the x-admin-token header, falling back to the query string."""
    return admin_token or request.query_params.get(ADMIN_TOKEN_QUERY_PARAM)


def require_booth_admin(
    token: Optional[str] = Depends(get_admin_token),
    store: SessionStore = Depends(get_session_store),
) -> AdminSession:
    """
    Resolve the caller's admin session.

    Raises:
        AuthenticationError: UNAUTHORIZED or EXPIRED (401)
    """
    return authenticate(store, token)


def require_super_admin(session: AdminSession = Depends(require_booth_admin)) -> AdminSession:
    """Raises ForbiddenError (403) unless the session belongs to the super admin."""
    ensure_super_admin(session)
    return session


__all__ = [
    "get_db",
    "get_session_store",
    "get_admin_token",
    "require_booth_admin",
    "require_super_admin",
]
