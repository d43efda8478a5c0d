"""
core/errors.py
---------------

Error taxonomy for the service.  Every error a service can raise is an
``HTTPException`` subclass carrying the status code it maps to, so
routes never translate exceptions themselves.  The application
registers :func:`api_error_handler` to render them as
``{"success": false, "message": ...}`` envelopes.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import ORJSONResponse


class ApiError(HTTPException):
    status_code_default = 500
    message_default = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None) -> None:
        super().__init__(
            status_code=self.status_code_default,
            detail=message or self.message_default,
            headers=headers,
        )

    @property
    def message(self) -> str:
        return str(self.detail)


class ValidationError(ApiError):
    """A required field is missing or empty."""

    status_code_default = 400
    message_default = "Invalid request"


class UnauthorizedError(ApiError):
    """Credentials were rejected."""

    status_code_default = 401
    message_default = "Invalid credentials"


class ForbiddenError(ApiError):
    """The caller has no valid token or session."""

    status_code_default = 403
    message_default = "Access denied"


class ConflictError(ApiError):
    status_code_default = 400
    message_default = "Already exists"


class NotFoundError(ApiError):
    status_code_default = 404
    message_default = "Not found"


class StoreError(ApiError):
    """The document store failed.  Details go to the log, not the caller."""

    status_code_default = 500
    message_default = "Store error"


async def api_error_handler(request: Request, exc: ApiError) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
        headers=exc.headers,
    )
