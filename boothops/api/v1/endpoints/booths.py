"""Booth check-in endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from boothops.api.deps import get_db, require_booth_admin
from boothops.core.config import settings
from boothops.core.constants import MAX_USAGE_PER_BOOTH
from boothops.core.errors import InvalidRequestError, NotFoundError
from boothops.core.rate_limit import limiter, RATE_LIMITS
from boothops.core.sessions import AdminSession
from boothops.db.models import Booth
from boothops.schemas import (
    BoothResponse,
    BoothSummary,
    CheckinRequest,
    CheckinResponse,
    SuccessResponse,
    VoidRequest,
)
from boothops.services.auth import ensure_booth_access
from boothops.services.booths import get_booth, list_booths
from boothops.services.roster import get_student
from boothops.services.stats import get_booth_summary
from boothops.services.usage import check_in, void_usage

router = APIRouter()


def _load_booth(db: Session, session: AdminSession, booth_id: int) -> Booth:
    """Authorize the session for the booth, then make sure the booth exists."""
    ensure_booth_access(session, booth_id)
    booth = get_booth(db, booth_id)
    if booth is None:
        raise NotFoundError()
    return booth


@router.get("", response_model=List[BoothResponse])
async def list_booths_endpoint(db: Session = Depends(get_db)):
    """All booths with their class, name and location."""
    return list_booths(db)


@router.get("/{booth_id}/usages/summary", response_model=BoothSummary)
async def booth_summary(
    booth_id: int,
    session: AdminSession = Depends(require_booth_admin),
    db: Session = Depends(get_db),
):
    """
    Usage summary for one booth.

    Class admins may only read their own booth (403 FORBIDDEN otherwise).
    perStudentCounts maps student id to active check-ins; remainingBuckets
    maps remaining uses (0..3) to the number of students in the roster with
    that many left, students who never visited counting as 3.
    """
    _load_booth(db, session, booth_id)
    return get_booth_summary(db, booth_id, MAX_USAGE_PER_BOOTH)


@router.post("/{booth_id}/use", response_model=CheckinResponse)
@limiter.limit(RATE_LIMITS["check_in"])
async def use_booth(
    request: Request,
    booth_id: int,
    payload: Optional[CheckinRequest] = None,
    session: AdminSession = Depends(require_booth_admin),
    db: Session = Depends(get_db),
):
    """
    Record that a student used the booth.

    Each student may use each booth at most 3 times. A refused check-in
    leaves the ledger untouched.

    Example:
        Request:
            POST /api/booths/1/use
            x-admin-token: 9f2c...
            {"studentId": 17}

        Response (200):
            {
                "success": true,
                "totalUsed": 2,
                "remaining": 1,
                "recentEntry": {"id": 88, "student_name": "김민준", ...}
            }

        Response (400):
            {"error": "OVER_LIMIT", "totalUsed": 3, "remaining": 0}

    Rate Limit:
        300 requests per minute per IP
    """
    _load_booth(db, session, booth_id)

    if payload is None or not payload.student_id:
        raise InvalidRequestError("MISSING_STUDENT")
    if get_student(db, payload.student_id) is None:
        raise NotFoundError()

    return check_in(db, booth_id, payload.student_id, session.admin_id, MAX_USAGE_PER_BOOTH)


@router.post("/{booth_id}/use/{usage_id}/void", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["void"])
async def void_booth_usage(
    request: Request,
    booth_id: int,
    usage_id: int,
    payload: Optional[VoidRequest] = None,
    session: AdminSession = Depends(require_booth_admin),
    db: Session = Depends(get_db),
):
    """
    Undo a check-in made at this booth in the last VOID_WINDOW_SECONDS.

    The usage is moved to the void ledger with the reason and the voiding
    admin, which gives the student that use back.

    Response (400):
        {"error": "VOID_WINDOW_EXPIRED"}
    """
    _load_booth(db, session, booth_id)
    reason = payload.reason if payload else ""
    void_usage(
        db,
        booth_id,
        usage_id,
        session.admin_id,
        reason=reason,
        window_seconds=settings.VOID_WINDOW_SECONDS,
    )
    return SuccessResponse(success=True, message="Usage voided")
