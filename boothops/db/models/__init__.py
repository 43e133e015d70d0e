"""Database models."""
from boothops.db.models.student import Student
from boothops.db.models.booth import Booth
from boothops.db.models.booth_admin import BoothAdmin
from boothops.db.models.booth_usage import BoothUsage
from boothops.db.models.booth_usage_void import BoothUsageVoid

__all__ = ["Student", "Booth", "BoothAdmin", "BoothUsage", "BoothUsageVoid"]
