"""Booth admin authentication endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from boothops.api.deps import get_db, get_session_store, require_booth_admin
from boothops.core.config import settings
from boothops.core.rate_limit import limiter, RATE_LIMITS
from boothops.core.sessions import AdminSession, SessionStore
from boothops.core.utils import isoformat_utc
from boothops.schemas import BoothLoginRequest, BoothLoginResponse, SessionInfo, SuccessResponse
from boothops.services.auth import login, logout

router = APIRouter()


@router.post("/admin/booth-login", response_model=BoothLoginResponse)
@limiter.limit(RATE_LIMITS["booth_login"])
async def booth_login(
    request: Request,
    payload: Optional[BoothLoginRequest] = None,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """
    Log a booth admin in and issue a bearer token.

    The class name and PIN are compared as stored. The class named by
    SUPERADMIN_CLASS_NAME logs in as the super admin, which has no booth of
    its own and may act on every booth.

    Example:
        Request:
            POST /api/admin/booth-login
            {"className": "1-1", "password": "0000"}

        Response (200):
            {
                "token": "9f2c...",
                "adminId": 2,
                "className": "1-1",
                "isSuperAdmin": false,
                "boothId": 1
            }

        Response (401):
            {"error": "INVALID_CREDENTIALS"}

    Rate Limit:
        30 requests per minute per IP
    """
    payload = payload or BoothLoginRequest()
    session = login(db, store, payload.class_name, payload.password, settings)
    return BoothLoginResponse(
        token=session.token,
        admin_id=session.admin_id,
        class_name=session.class_name,
        is_super_admin=session.is_super_admin,
        booth_id=session.default_booth_id,
    )


@router.post("/admin/booth-logout", response_model=SuccessResponse)
async def booth_logout(
    session: AdminSession = Depends(require_booth_admin),
    store: SessionStore = Depends(get_session_store),
):
    """Drop the caller's token from the session store."""
    logout(store, session.token)
    return SuccessResponse(success=True, message="Logged out")


@router.get("/admin/booth-ops/me", response_model=SessionInfo)
async def current_session(session: AdminSession = Depends(require_booth_admin)):
    """Identity and expiry of the caller's token."""
    return SessionInfo(
        admin_id=session.admin_id,
        class_name=session.class_name,
        is_super_admin=session.is_super_admin,
        booth_id=session.default_booth_id,
        expires_at=isoformat_utc(session.expires_at),
    )
