"""Super admin operations: dashboard, usage reset, booth PINs."""
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from boothops.api.deps import get_db, get_session_store, require_super_admin
from boothops.core.config import settings
from boothops.core.sessions import AdminSession, SessionStore
from boothops.schemas import Dashboard, PasswordChangeRequest, ResetResponse, SuccessResponse
from boothops.services.auth import set_booth_admin_password
from boothops.services.stats import get_dashboard, reset_all_usage

router = APIRouter()


@router.get("/dashboard", response_model=Dashboard)
async def dashboard(
    session: AdminSession = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    """
    Festival-wide usage overview (super admin only).

    Recomputed from the usage ledger on every call: totals, per-booth
    usage with the last check-in time, the 50 most recent check-ins and the
    20 students with the most check-ins.
    """
    return get_dashboard(db)


@router.post("/reset", response_model=ResetResponse)
async def reset_usage(
    session: AdminSession = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    """
    Delete every usage and void record (super admin only).

    Irreversible. Students and booths are kept.
    """
    deleted = reset_all_usage(db)
    return ResetResponse(
        success=True,
        deletedUsages=deleted["usages"],
        deletedVoids=deleted["voids"],
    )


@router.put("/booth-admins/{class_name}/password", response_model=SuccessResponse)
async def change_booth_password(
    class_name: str,
    payload: Optional[PasswordChangeRequest] = None,
    session: AdminSession = Depends(require_super_admin),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """
    Set a booth's PIN (super admin only).

    Every token issued to that class stops working immediately; the booth
    has to log in again with the new PIN.

    Response (400):
        {"error": "MISSING_PASSWORD"} or {"error": "CANNOT_CHANGE_SUPERADMIN"}

    Response (404):
        {"error": "NOT_FOUND"} when no booth has that class name
    """
    payload = payload or PasswordChangeRequest()
    set_booth_admin_password(db, store, class_name, payload.password, settings)
    return SuccessResponse(success=True, message="Password updated")
