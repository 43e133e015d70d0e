"""Usage aggregation for booth summaries and the super-admin dashboard.

Everything is recomputed from the usage ledger on each call.
"""
from typing import Dict, List
from sqlalchemy import func
from sqlalchemy.orm import Session

from boothops.db.models import Booth, BoothUsage, BoothUsageVoid, Student
from boothops.core.constants import (
    DASHBOARD_RECENT_LIMIT,
    DASHBOARD_TOP_STUDENTS_LIMIT,
    MAX_USAGE_PER_BOOTH,
    RECENT_USAGE_LIMIT,
    TOP_CLASSES_LIMIT,
)
from boothops.core.logging_config import get_logger
from boothops.core.utils import isoformat_utc
from boothops.services.roster import count_students
from boothops.services.usage import serialize_usage_rows, usage_entries_query

logger = get_logger(__name__)


def remaining_buckets(per_student_counts: Dict[int, int], total_students: int, max_usage: int) -> Dict[int, int]:
    """
    Histogram of remaining uses over the whole roster.

    Keys run 0..max_usage; students without any usage land in the max_usage
    bucket, so the values always sum to total_students.
    """
    buckets = {remaining: 0 for remaining in range(max_usage + 1)}
    for used in per_student_counts.values():
        buckets[max(0, max_usage - used)] += 1
    buckets[max_usage] += max(0, total_students - len(per_student_counts))
    return buckets


def get_booth_summary(db: Session, booth_id: int, max_usage: int = MAX_USAGE_PER_BOOTH) -> Dict:
    """
    Live statistics for one booth.

    Returns:
        Dict with totalUsage, uniqueStudents, topClasses, perStudentCounts,
        remainingBuckets, recent, totalStudents and maxUsage
    """
    per_student_counts = dict(
        db.query(BoothUsage.student_id, func.count(BoothUsage.id))
        .filter(BoothUsage.booth_id == booth_id)
        .group_by(BoothUsage.student_id)
        .all()
    )

    count_col = func.count(BoothUsage.id)
    top_classes = (
        db.query(Student.grade, Student.class_no, count_col)
        .join(BoothUsage, BoothUsage.student_id == Student.id)
        .filter(BoothUsage.booth_id == booth_id)
        .group_by(Student.grade, Student.class_no)
        .order_by(count_col.desc())
        .limit(TOP_CLASSES_LIMIT)
        .all()
    )

    recent_rows = (
        usage_entries_query(db)
        .filter(BoothUsage.booth_id == booth_id)
        .limit(RECENT_USAGE_LIMIT)
        .all()
    )

    total_students = count_students(db)

    return {
        "boothId": booth_id,
        "totalUsage": sum(per_student_counts.values()),
        "uniqueStudents": len(per_student_counts),
        "topClasses": [
            {"grade": grade, "class_no": class_no, "count": count}
            for grade, class_no, count in top_classes
        ],
        "perStudentCounts": per_student_counts,
        "remainingBuckets": remaining_buckets(per_student_counts, total_students, max_usage),
        "recent": serialize_usage_rows(recent_rows),
        "totalStudents": total_students,
        "maxUsage": max_usage,
    }


def get_dashboard(db: Session) -> Dict:
    """Cross-booth overview for the super admin."""
    total_usage = db.query(func.count(BoothUsage.id)).scalar() or 0
    unique_students = db.query(func.count(func.distinct(BoothUsage.student_id))).scalar() or 0

    per_booth = {
        booth_id: (usage, unique, last_used)
        for booth_id, usage, unique, last_used in db.query(
            BoothUsage.booth_id,
            func.count(BoothUsage.id),
            func.count(func.distinct(BoothUsage.student_id)),
            func.max(BoothUsage.used_at),
        ).group_by(BoothUsage.booth_id).all()
    }

    booths: List[Dict] = []
    for booth in db.query(Booth).order_by(Booth.id).all():
        usage, unique, last_used = per_booth.get(booth.id, (0, 0, None))
        booths.append({
            "id": booth.id,
            "class_name": booth.class_name,
            "name": booth.name,
            "location": booth.location,
            "totalUsage": usage,
            "uniqueStudents": unique,
            "lastUsedAt": isoformat_utc(last_used),
        })

    recent_rows = usage_entries_query(db).limit(DASHBOARD_RECENT_LIMIT).all()

    count_col = func.count(BoothUsage.id)
    top_students = (
        db.query(Student.id, Student.name, Student.grade, Student.class_no, Student.student_no, count_col)
        .join(BoothUsage, BoothUsage.student_id == Student.id)
        .group_by(Student.id, Student.name, Student.grade, Student.class_no, Student.student_no)
        .order_by(count_col.desc(), Student.id)
        .limit(DASHBOARD_TOP_STUDENTS_LIMIT)
        .all()
    )

    return {
        "totalStudents": count_students(db),
        "totalUsage": total_usage,
        "uniqueStudents": unique_students,
        "booths": booths,
        "recent": serialize_usage_rows(recent_rows),
        "topStudents": [
            {
                "student_id": student_id,
                "name": name,
                "grade": grade,
                "class_no": class_no,
                "student_no": student_no,
                "count": count,
            }
            for student_id, name, grade, class_no, student_no, count in top_students
        ],
    }


def clear_usage_ledgers(db: Session) -> Dict[str, int]:
    """Delete void audit rows, then usages. Does not commit."""
    voids = db.query(BoothUsageVoid).delete(synchronize_session="fetch")
    usages = db.query(BoothUsage).delete(synchronize_session="fetch")
    return {"voids": voids, "usages": usages}


def reset_all_usage(db: Session) -> Dict[str, int]:
    """Irreversibly wipe both usage ledgers (super admin only)."""
    try:
        deleted = clear_usage_ledgers(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.warning("booth_usage_reset", **deleted)
    return deleted
