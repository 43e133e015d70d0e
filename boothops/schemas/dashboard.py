"""Super admin dashboard schemas."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from boothops.schemas.common import CamelModel
from boothops.schemas.usage import UsageEntry


class BoothStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    class_name: str
    name: str
    location: Optional[str] = None
    total_usage: int = Field(alias="totalUsage")
    unique_students: int = Field(alias="uniqueStudents")
    last_used_at: Optional[str] = Field(default=None, alias="lastUsedAt")


class TopStudent(BaseModel):
    student_id: int
    name: str
    grade: int
    class_no: int
    student_no: int
    count: int


class Dashboard(CamelModel):
    total_students: int
    total_usage: int
    unique_students: int
    booths: List[BoothStats]
    recent: List[UsageEntry]
    top_students: List[TopStudent]


class ResetResponse(BaseModel):
    success: bool = True
    deleted_usages: int = Field(alias="deletedUsages")
    deleted_voids: int = Field(alias="deletedVoids")
