"""Booth lookups."""
from typing import List, Optional
from sqlalchemy.orm import Session

from boothops.db.models import Booth


def list_booths(db: Session) -> List[Booth]:
    return db.query(Booth).order_by(Booth.id).all()


def get_booth(db: Session, booth_id: int) -> Optional[Booth]:
    return db.query(Booth).filter(Booth.id == booth_id).first()


def get_booth_by_class_name(db: Session, class_name: str) -> Optional[Booth]:
    """A booth's class_name is the join key to its admin login."""
    return db.query(Booth).filter(Booth.class_name == class_name).first()
