"""Check-in, void and summary schemas."""
from typing import Dict, List, Optional
from pydantic import BaseModel, field_validator

from boothops.core.sanitization import sanitize_void_reason
from boothops.schemas.common import CamelModel, RequestModel


class CheckinRequest(RequestModel):
    student_id: Optional[int] = None


class UsageEntry(BaseModel):
    id: int
    booth_id: int
    student_id: int
    admin_id: Optional[int] = None
    used_at: Optional[str] = None
    student_name: str
    grade: int
    class_no: int
    student_no: int
    admin_class: Optional[str] = None


class CheckinResponse(CamelModel):
    success: bool = True
    total_used: int
    remaining: int
    recent_entry: UsageEntry


class VoidRequest(RequestModel):
    reason: Optional[str] = None

    @field_validator("reason")
    @classmethod
    def sanitize_reason_field(cls, v: Optional[str]) -> str:
        """Normalize the free-text reason."""
        return sanitize_void_reason(v)


class TopClass(BaseModel):
    grade: int
    class_no: int
    count: int


class BoothSummary(CamelModel):
    booth_id: int
    total_usage: int
    unique_students: int
    top_classes: List[TopClass]
    per_student_counts: Dict[int, int]
    remaining_buckets: Dict[int, int]
    recent: List[UsageEntry]
    total_students: int
    max_usage: int
