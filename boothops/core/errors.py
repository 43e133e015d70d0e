"""Domain errors.

Every error carries a machine-readable code and the HTTP status it maps to.
The API layer renders them as ``{"error": CODE, ...context}``.
"""
from typing import Any, Dict


class BoothOpsError(Exception):
    """Base class for all expected, operator-facing failures."""

    status_code = 400

    def __init__(self, code: str, status_code: int = None, **context: Any):
        super().__init__(code)
        self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.context = context

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, **self.context}


class AuthenticationError(BoothOpsError):
    """UNAUTHORIZED, EXPIRED, INVALID_CREDENTIALS."""

    status_code = 401


class ForbiddenError(BoothOpsError):
    status_code = 403

    def __init__(self, code: str = "FORBIDDEN", **context: Any):
        super().__init__(code, **context)


class InvalidRequestError(BoothOpsError):
    """MISSING_* and INVALID_* input problems."""

    status_code = 400


class BusinessRuleError(BoothOpsError):
    """OVER_LIMIT, VOID_WINDOW_EXPIRED, HAS_USAGE_DATA."""

    status_code = 400


class NotFoundError(BoothOpsError):
    status_code = 404

    def __init__(self, code: str = "NOT_FOUND", **context: Any):
        super().__init__(code, **context)
