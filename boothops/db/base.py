"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here for Alembic to detect them
from boothops.db.models.student import Student  # noqa: F401, E402
from boothops.db.models.booth import Booth  # noqa: F401, E402
from boothops.db.models.booth_admin import BoothAdmin  # noqa: F401, E402
from boothops.db.models.booth_usage import BoothUsage  # noqa: F401, E402
from boothops.db.models.booth_usage_void import BoothUsageVoid  # noqa: F401, E402
