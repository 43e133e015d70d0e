"""Usage ledger: capped check-ins and time-windowed voids."""
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from boothops.db.models import BoothAdmin, BoothUsage, BoothUsageVoid, Student
from boothops.core.constants import MAX_USAGE_PER_BOOTH, VOID_WINDOW_SECONDS
from boothops.core.errors import BusinessRuleError, InvalidRequestError, NotFoundError
from boothops.core.logging_config import get_logger
from boothops.core.sanitization import sanitize_void_reason
from boothops.core.utils import isoformat_utc, parse_timestamp, seconds_since, utc_now

logger = get_logger(__name__)


def count_active_usages(db: Session, booth_id: int, student_id: int) -> int:
    """Active (non-voided) usages of one booth by one student."""
    return db.query(func.count(BoothUsage.id)).filter(
        BoothUsage.booth_id == booth_id,
        BoothUsage.student_id == student_id
    ).scalar() or 0


def has_any_usage(db: Session) -> bool:
    return db.query(BoothUsage.id).first() is not None


def get_usage(db: Session, usage_id: int) -> Optional[BoothUsage]:
    return db.query(BoothUsage).filter(BoothUsage.id == usage_id).first()


def usage_entries_query(db: Session):
    """
    Usages joined with student identity and the handling admin's class name.

    Newest first; ties on used_at are broken by id.
    """
    return db.query(
        BoothUsage.id,
        BoothUsage.booth_id,
        BoothUsage.student_id,
        BoothUsage.admin_id,
        BoothUsage.used_at,
        Student.name,
        Student.grade,
        Student.class_no,
        Student.student_no,
        BoothAdmin.class_name,
    ).join(
        Student, Student.id == BoothUsage.student_id
    ).outerjoin(
        BoothAdmin, BoothAdmin.id == BoothUsage.admin_id
    ).order_by(BoothUsage.used_at.desc(), BoothUsage.id.desc())


def serialize_usage_rows(rows) -> List[Dict]:
    return [
        {
            "id": row[0],
            "booth_id": row[1],
            "student_id": row[2],
            "admin_id": row[3],
            "used_at": isoformat_utc(row[4]),
            "student_name": row[5],
            "grade": row[6],
            "class_no": row[7],
            "student_no": row[8],
            "admin_class": row[9],
        }
        for row in rows
    ]


def check_in(
    db: Session,
    booth_id: int,
    student_id: int,
    admin_id: Optional[int],
    max_usage: int = MAX_USAGE_PER_BOOTH,
) -> Dict:
    """
    Record one use of a booth by a student, refusing once the cap is reached.

    Count and insert happen in a single transaction. On SQLite the transaction
    already holds the write lock; on PostgreSQL the student row is locked so
    concurrent check-ins for the same student queue behind each other.

    Callers verify beforehand that the booth and student exist and that the
    admin session may access the booth.

    Returns:
        {"success": True, "totalUsed", "remaining", "recentEntry"}

    Raises:
        BusinessRuleError: OVER_LIMIT (with totalUsed and remaining=0); nothing is inserted
    """
    try:
        db.query(Student.id).filter(Student.id == student_id).with_for_update().first()

        used = count_active_usages(db, booth_id, student_id)
        if used >= max_usage:
            logger.info(
                "booth_checkin_over_limit",
                booth_id=booth_id,
                student_id=student_id,
                total_used=used,
            )
            raise BusinessRuleError("OVER_LIMIT", totalUsed=used, remaining=0)

        usage = BoothUsage(
            booth_id=booth_id,
            student_id=student_id,
            admin_id=admin_id,
            used_at=utc_now()
        )
        db.add(usage)
        db.flush()

        rows = usage_entries_query(db).filter(BoothUsage.id == usage.id).all()
        recent_entry = serialize_usage_rows(rows)[0]
        db.commit()
    except Exception:
        db.rollback()
        raise

    total_used = used + 1
    logger.info(
        "booth_checkin",
        booth_id=booth_id,
        student_id=student_id,
        admin_id=admin_id,
        usage_id=recent_entry["id"],
        total_used=total_used,
    )
    return {
        "success": True,
        "totalUsed": total_used,
        "remaining": max(0, max_usage - total_used),
        "recentEntry": recent_entry,
    }


def void_usage(
    db: Session,
    booth_id: int,
    usage_id: int,
    admin_id: Optional[int],
    reason: Optional[str] = "",
    window_seconds: int = VOID_WINDOW_SECONDS,
    now: Optional[datetime] = None,
) -> BoothUsageVoid:
    """
    Reverse a check-in made within the void window.

    The audit row is written before the usage row is hard-deleted, both in one
    transaction. Freeing the usage lowers the student's count at that booth,
    so a further check-in may be allowed again.

    Raises:
        NotFoundError: usage missing or recorded at another booth
        InvalidRequestError: INVALID_USAGE when used_at cannot be read
        BusinessRuleError: VOID_WINDOW_EXPIRED; nothing is changed
    """
    try:
        reason = sanitize_void_reason(reason)
    except ValueError as e:
        raise InvalidRequestError("INVALID_REASON", message=str(e))

    try:
        usage = db.query(BoothUsage).filter(BoothUsage.id == usage_id).with_for_update().first()
        if usage is None or usage.booth_id != booth_id:
            raise NotFoundError()

        used_at = parse_timestamp(usage.used_at)
        if used_at is None:
            raise InvalidRequestError("INVALID_USAGE")

        elapsed = seconds_since(used_at, now)
        if elapsed > window_seconds:
            logger.info(
                "booth_void_window_expired",
                booth_id=booth_id,
                usage_id=usage_id,
                elapsed_seconds=round(elapsed, 1),
            )
            raise BusinessRuleError("VOID_WINDOW_EXPIRED")

        record = BoothUsageVoid(
            booth_usage_id=usage.id,
            booth_id=usage.booth_id,
            student_id=usage.student_id,
            used_at=used_at,
            void_by_admin_id=admin_id,
            void_reason=reason,
            created_at=now or utc_now()
        )
        db.add(record)
        db.flush()

        db.delete(usage)
        db.commit()
        db.refresh(record)
    except Exception:
        db.rollback()
        raise

    logger.info(
        "booth_usage_voided",
        booth_id=booth_id,
        usage_id=usage_id,
        admin_id=admin_id,
        reason=reason,
    )
    return record
