"""Student roster and roster import endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from boothops.api.deps import get_db, require_booth_admin
from boothops.core.rate_limit import limiter, RATE_LIMITS
from boothops.core.sessions import AdminSession
from boothops.schemas import (
    ImportReport,
    StudentImportRequest,
    StudentResponse,
    StudentStats,
    TemplateResponse,
)
from boothops.services.roster import count_students, list_students
from boothops.services.student_import import get_template, import_students

router = APIRouter()


@router.get("/students", response_model=List[StudentResponse])
async def list_students_endpoint(
    search: Optional[str] = Query(default=None),
    grade: Optional[int] = Query(default=None),
    class_no: Optional[int] = Query(default=None),
    session: AdminSession = Depends(require_booth_admin),
    db: Session = Depends(get_db),
):
    """
    Roster lookup for the check-in screen.

    search matches part of the name (case-insensitive) or of the student
    number; grade and class_no are exact filters.
    """
    return list_students(db, search=search, grade=grade, class_no=class_no)


@router.get("/admin/students/template", response_model=TemplateResponse)
async def student_template():
    """CSV template with the expected header and one sample row."""
    return get_template()


@router.get("/admin/students/stats", response_model=StudentStats)
async def student_stats(db: Session = Depends(get_db)):
    return StudentStats(total_students=count_students(db))


@router.post("/admin/students/import", response_model=ImportReport)
@limiter.limit(RATE_LIMITS["student_import"])
async def import_students_endpoint(
    request: Request,
    payload: Optional[StudentImportRequest] = None,
    db: Session = Depends(get_db),
):
    """
    Load the student roster from CSV text.

    Modes:
        merge (default): add new students and correct names; never deletes
        replace: swap the whole roster. Refused with 409 HAS_USAGE_DATA while
            check-ins exist, unless resetBoothUsage is true, which also wipes
            the usage and void ledgers.

    Rows that fail to parse are skipped and reported in errors with their
    line number. If no row survives, the request fails with NO_VALID_ROWS.

    Example:
        Request:
            POST /api/admin/students/import
            {"csvText": "grade,class_no,student_no,name\\n1,1,1,홍길동\\n", "mode": "merge"}

        Response (200):
            {
                "success": true,
                "mode": "merge",
                "inserted": 1,
                "updated": 0,
                "deleted": 0,
                "usageReset": false,
                "totalStudents": 144,
                "parsed": {"rows": 1, "errors": 0},
                "errors": []
            }

    Rate Limit:
        20 requests per minute per IP
    """
    payload = payload or StudentImportRequest()
    return import_students(
        db,
        payload.csv_text,
        mode=payload.mode,
        reset_booth_usage=payload.reset_booth_usage,
    )
