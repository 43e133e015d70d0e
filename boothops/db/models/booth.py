"""Booth model."""
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from boothops.db.base import Base


class Booth(Base):
    __tablename__ = "booths"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_name = Column(String(50), nullable=False, unique=True, index=True)  # Join key to booth_admins
    name = Column(String(100), nullable=False)
    location = Column(String(100))
    description = Column(Text)

    # Relationships
    usages = relationship("BoothUsage", back_populates="booth")
