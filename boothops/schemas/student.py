"""Student roster and import schemas."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from boothops.schemas.common import CamelModel, RequestModel


class StudentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    grade: int
    class_no: int
    student_no: int
    name: str


class StudentImportRequest(RequestModel):
    csv_text: Optional[str] = None
    mode: Optional[str] = None
    reset_booth_usage: bool = False


class ImportRowError(BaseModel):
    line: int
    error: str
    message: str


class ParsedCounts(BaseModel):
    rows: int
    errors: int


class ImportReport(CamelModel):
    success: bool = True
    mode: str
    inserted: int
    updated: int
    deleted: int
    usage_reset: bool
    total_students: int
    parsed: ParsedCounts
    errors: List[ImportRowError]


class TemplateResponse(BaseModel):
    filename: str
    csv: str


class StudentStats(CamelModel):
    total_students: int
