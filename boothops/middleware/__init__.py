"""Middleware package."""
from boothops.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
