"""Student roster queries."""
from typing import List, Optional
from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Session

from boothops.db.models import Student
from boothops.core.sanitization import sanitize_search


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_students(
    db: Session,
    search: Optional[str] = None,
    grade: Optional[int] = None,
    class_no: Optional[int] = None,
) -> List[Student]:
    """
    List students ordered by grade, class and number.

    Args:
        db: Database session
        search: Case-insensitive substring of the name, or digits of student_no
        grade: Exact grade filter
        class_no: Exact class filter

    Returns:
        Matching Student rows
    """
    query = db.query(Student)

    term = escape_like(sanitize_search(search))
    if term:
        query = query.filter(or_(
            func.lower(Student.name).like(f"%{term.lower()}%", escape="\\"),
            cast(Student.student_no, String).like(f"%{term}%", escape="\\"),
        ))

    if grade is not None:
        query = query.filter(Student.grade == grade)
    if class_no is not None:
        query = query.filter(Student.class_no == class_no)

    return query.order_by(Student.grade, Student.class_no, Student.student_no).all()


def get_student(db: Session, student_id: int) -> Optional[Student]:
    """Get a student by primary key."""
    return db.query(Student).filter(Student.id == student_id).first()


def count_students(db: Session) -> int:
    return db.query(Student).count()
