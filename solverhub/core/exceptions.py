"""
Custom Exceptions for SolverHub
===============================

Raised by services when a business rule is broken; store failures are not
exceptions here, the data-access functions log them and return None / [].

Usage:
    from solverhub.core.exceptions import NotFoundError

    if not problem:
        raise NotFoundError("Problem", problem_id)
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class SolverHubError(Exception):
    """Base exception for all SolverHub errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.message,
            "code": self.code,
            "details": self.details
        }


# ============================================
# Configuration
# ============================================

class ConfigurationError(SolverHubError):
    """Backend endpoint or signing key missing"""

    status_code = 500

    def __init__(self, message: str = "Missing backend configuration. Please set DATABASE_URL and JWT_SECRET_KEY."):
        super().__init__(message, code="NOT_CONFIGURED")


# ============================================
# Identity & Authorization
# ============================================

class IdentityError(SolverHubError):
    """Bad credentials, duplicate registration, unconfirmed email"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed", code: str = "AUTH_FAILED"):
        super().__init__(message, code=code)


class AuthorizationError(SolverHubError):
    """Caller lacks the role or ownership for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Data
# ============================================

class NotFoundError(SolverHubError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} not found",
            code="NOT_FOUND",
            details={"entity": entity, "id": entity_id}
        )


class InvalidStatusTransition(SolverHubError):
    """Application status can only leave 'pending'"""

    status_code = 409

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change application status from '{current}' to '{requested}'",
            code="INVALID_TRANSITION",
            details={"current": current, "requested": requested}
        )


class DuplicateApplicationError(SolverHubError):
    status_code = 409

    def __init__(self, problem_id: str):
        super().__init__(
            "Already applied to this problem",
            code="DUPLICATE_APPLICATION",
            details={"problem_id": problem_id}
        )


class ValidationError(SolverHubError):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    """Map SolverHubError subclasses to JSON responses."""

    @app.exception_handler(SolverHubError)
    async def solverhub_error_handler(request: Request, exc: SolverHubError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
