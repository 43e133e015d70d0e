"""Booth admin authentication schemas."""
from typing import Optional

from boothops.schemas.common import CamelModel, RequestModel


class BoothLoginRequest(RequestModel):
    class_name: Optional[str] = None
    password: Optional[str] = None


class BoothLoginResponse(CamelModel):
    token: str
    admin_id: int
    class_name: str
    is_super_admin: bool
    booth_id: Optional[int] = None


class SessionInfo(CamelModel):
    admin_id: int
    class_name: str
    is_super_admin: bool
    booth_id: Optional[int] = None
    expires_at: str


class PasswordChangeRequest(RequestModel):
    password: Optional[str] = None
