"""API router, mounted once per configured prefix."""
from fastapi import APIRouter

from boothops.api.v1.endpoints import auth, booth_ops, booths, students


def build_api_router(prefix: str, include_in_schema: bool = True) -> APIRouter:
    """Assemble every endpoint router under one path prefix."""
    api_router = APIRouter(prefix=prefix, include_in_schema=include_in_schema)
    api_router.include_router(auth.router, tags=["Authentication"])
    api_router.include_router(booth_ops.router, prefix="/admin/booth-ops", tags=["Booth Ops"])
    api_router.include_router(students.router, tags=["Students"])
    api_router.include_router(booths.router, prefix="/booths", tags=["Booths"])
    return api_router
