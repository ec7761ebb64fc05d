"""
Domain error → HTTP response mapping.

Every DomainError subclass is handled in one place; routers never catch
domain exceptions themselves. Body: {"error": <reason>, "code": <class name>}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from marketplace.domain.exceptions import (
    AccessDeniedError,
    ContactInfoBlockedError,
    DomainError,
    DomainValidationError,
    EntityNotFoundError,
    InsufficientBalanceError,
    InvalidStateError,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses must come before their bases
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (InsufficientBalanceError, status.HTTP_400_BAD_REQUEST),
    (ContactInfoBlockedError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (DomainValidationError, status.HTTP_422_UNPROCESSABLE_CONTENT),
]


def status_for(exc: DomainError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def register_domain_error_handler(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        code = status_for(exc)
        logger.info(f"[{code}] {request.method} {request.url.path}: {type(exc).__name__}: {exc.message}")
        return JSONResponse(
            status_code=code,
            content={"error": exc.message, "code": type(exc).__name__},
        )
