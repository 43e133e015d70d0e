"""Pydantic schemas for request/response validation."""
from boothops.schemas.common import CamelModel, RequestModel, SuccessResponse, ErrorResponse
from boothops.schemas.auth import (
    BoothLoginRequest,
    BoothLoginResponse,
    SessionInfo,
    PasswordChangeRequest,
)
from boothops.schemas.booth import BoothResponse
from boothops.schemas.usage import (
    CheckinRequest,
    CheckinResponse,
    UsageEntry,
    VoidRequest,
    TopClass,
    BoothSummary,
)
from boothops.schemas.dashboard import BoothStats, TopStudent, Dashboard, ResetResponse
from boothops.schemas.student import (
    StudentResponse,
    StudentImportRequest,
    ImportRowError,
    ParsedCounts,
    ImportReport,
    TemplateResponse,
    StudentStats,
)

__all__ = [
    "CamelModel",
    "RequestModel",
    "SuccessResponse",
    "ErrorResponse",
    "BoothLoginRequest",
    "BoothLoginResponse",
    "SessionInfo",
    "PasswordChangeRequest",
    "BoothResponse",
    "CheckinRequest",
    "CheckinResponse",
    "UsageEntry",
    "VoidRequest",
    "TopClass",
    "BoothSummary",
    "BoothStats",
    "TopStudent",
    "Dashboard",
    "ResetResponse",
    "StudentResponse",
    "StudentImportRequest",
    "ImportRowError",
    "ParsedCounts",
    "ImportReport",
    "TemplateResponse",
    "StudentStats",
]
