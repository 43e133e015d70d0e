"""BoothUsage model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from boothops.db.base import Base


class BoothUsage(Base):
    __tablename__ = "booth_usages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booth_id = Column(Integer, ForeignKey("booths.id"), nullable=False)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    admin_id = Column(Integer, ForeignKey("booth_admins.id"), nullable=True)
    used_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    booth = relationship("Booth", back_populates="usages")
    student = relationship("Student", back_populates="usages")
    admin = relationship("BoothAdmin")

    __table_args__ = (
        Index("idx_booth_usages_booth_student", "booth_id", "student_id"),
        Index("idx_booth_usages_used_at", "used_at"),
    )
