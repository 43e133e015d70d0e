"""Database package."""
from boothops.db.session import engine, SessionLocal, get_db, create_db_engine
from boothops.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "create_db_engine", "Base"]
