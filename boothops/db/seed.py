"""
Initial festival data: booths, booth admins and the student roster.

Usage:
    python -m boothops.db.seed            # honours SEED_MODE
    python -m boothops.db.seed fresh      # drop, recreate and reseed
"""
import sys
from typing import Dict, List, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from boothops.core.config import Settings, settings as default_settings
from boothops.core.logging_config import get_logger
from boothops.db.base import Base
from boothops.db.models import Booth, BoothAdmin, Student

logger = get_logger(__name__)

# (class_name, name, description); location is "<class_name> 교실"
BOOTHS: List[Tuple[str, str, str]] = [
    ("1-1", "방탈출", "미스터리 스릴러 방탈출 게임"),
    ("1-2", "분식집", "맛있는 떡볶이와 어묵"),
    ("2-1", "찜질방", "뜨끈뜨끈한 찜질 체험"),
    ("2-2", "영광이네 5성급 포차", "논알콜 칵테일과 안주"),
    ("3-1", "카페", "향긋한 커피와 디저트"),
    ("3-2", "풍선 다트 게임", "풍선 다트 게임으로 스트레스 해소"),
    ("3-3", "귀신의 집", "공포체험 귀신의 집"),
]

# (grade, class_no) -> number of students; 143 in total
CLASS_SIZES: Dict[Tuple[int, int], int] = {
    (1, 1): 21,
    (1, 2): 21,
    (2, 1): 20,
    (2, 2): 20,
    (3, 1): 20,
    (3, 2): 21,
    (3, 3): 20,
}

SURNAMES = "김이박최정강조윤장임한오서신권황안송류홍"
GIVEN_NAMES = [
    "민준", "서연", "도윤", "지우", "하준", "서윤", "은우", "하은", "시우", "지민",
    "예준", "수아", "유준", "지아", "준서", "채원", "현우", "다은", "지호", "예린", "건우",
]


def _student_name(index: int) -> str:
    return SURNAMES[(index * 7) % len(SURNAMES)] + GIVEN_NAMES[index % len(GIVEN_NAMES)]


def check_superadmin_sentinel(db: Session, superadmin_class_name: str) -> None:
    """The super-admin class name must never be a booth's class name."""
    clash = db.query(Booth).filter(Booth.class_name == superadmin_class_name).first()
    if clash:
        raise ValueError(
            f"Super admin class name '{superadmin_class_name}' collides with booth {clash.id}"
        )


def seed_booths(db: Session) -> int:
    if db.query(Booth).count() > 0:
        return 0
    for class_name, name, description in BOOTHS:
        db.add(Booth(
            class_name=class_name,
            name=name,
            location=f"{class_name} 교실",
            description=description,
        ))
    db.flush()
    return len(BOOTHS)


def seed_booth_admins(db: Session, config: Settings) -> int:
    """One admin per booth with the default PIN plus the super admin."""
    if db.query(BoothAdmin).count() > 0:
        return 0
    check_superadmin_sentinel(db, config.SUPERADMIN_CLASS_NAME)
    created = 0
    for booth in db.query(Booth).order_by(Booth.id).all():
        db.add(BoothAdmin(class_name=booth.class_name, password=config.DEFAULT_BOOTH_PIN))
        created += 1
    db.add(BoothAdmin(class_name=config.SUPERADMIN_CLASS_NAME, password=config.SUPERADMIN_PASSWORD))
    db.flush()
    return created + 1


def seed_students(db: Session) -> int:
    if db.query(Student).count() > 0:
        return 0
    index = 0
    for (grade, class_no), size in CLASS_SIZES.items():
        for student_no in range(1, size + 1):
            db.add(Student(
                grade=grade,
                class_no=class_no,
                student_no=student_no,
                name=_student_name(index),
            ))
            index += 1
    db.flush()
    return index


def seed_all(db: Session, config: Settings = None) -> Dict[str, int]:
    """Seed every empty table in one transaction."""
    config = config or default_settings
    try:
        counts = {
            "booths": seed_booths(db),
            "booth_admins": seed_booth_admins(db, config),
            "students": seed_students(db),
        }
        db.commit()
    except Exception:
        db.rollback()
        raise
    if any(counts.values()):
        logger.info("seed_completed", **counts)
    return counts


def init_db(engine: Engine, session_factory, mode: str = None, config: Settings = None) -> None:
    """Create tables and seed according to mode (if-empty, fresh, none)."""
    config = config or default_settings
    mode = mode or config.SEED_MODE

    if mode == "fresh":
        logger.warning("dropping_all_tables", reason="SEED_MODE=fresh")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    if mode == "none":
        return

    db = session_factory()
    try:
        seed_all(db, config)
    finally:
        db.close()


if __name__ == "__main__":
    from boothops.core.logging_config import setup_logging
    from boothops.db.session import engine, SessionLocal

    setup_logging(default_settings.LOG_LEVEL)
    init_db(engine, SessionLocal, mode=sys.argv[1] if len(sys.argv) > 1 else None)
