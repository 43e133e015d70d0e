"""Student model."""
from sqlalchemy import Column, Integer, String, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from boothops.db.base import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    grade = Column(Integer, nullable=False)
    class_no = Column(Integer, nullable=False)
    student_no = Column(Integer, nullable=False)
    name = Column(String(100), nullable=False)

    # Relationships
    usages = relationship("BoothUsage", back_populates="student")

    __table_args__ = (
        UniqueConstraint("grade", "class_no", "student_no", name="uq_student_identity"),
        Index("idx_students_class", "grade", "class_no"),
    )
