"""BoothAdmin model."""
from sqlalchemy import Column, Integer, String

from boothops.db.base import Base


class BoothAdmin(Base):
    __tablename__ = "booth_admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_name = Column(String(50), nullable=False, unique=True, index=True)
    password = Column(String(100), nullable=False)  # Plain PIN, compared as-is
