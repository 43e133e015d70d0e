"""BoothUsageVoid model.

Audit trail of reversed check-ins. The voided usage row is hard-deleted, so
it is referenced by value (no foreign key) and its identifying fields are
copied here.
"""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime, Index

from boothops.db.base import Base


class BoothUsageVoid(Base):
    __tablename__ = "booth_usages_void"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booth_usage_id = Column(Integer, nullable=False)
    booth_id = Column(Integer, nullable=True)
    student_id = Column(Integer, nullable=True)
    used_at = Column(DateTime(timezone=True), nullable=True)
    void_by_admin_id = Column(Integer, nullable=True)
    void_reason = Column(String(200), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    __table_args__ = (Index("idx_booth_usages_void_usage", "booth_usage_id"),)
