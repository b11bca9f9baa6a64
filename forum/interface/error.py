"""Interface layer error handling.

Domain errors are turned into ``{"detail": {"code", "message"}}`` responses
so clients can branch on the numeric code. Both handlers roll back the
request's writes first: they run inside the DI request scope, which would
otherwise commit whatever the failed request left in its session.
"""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from forum.domain.error import (
    DomainError,
    ErrorCode,
    NotFoundError,
    ValidationError,
    VoteConflictError,
)
from forum.domain.repository import UnitOfWork

# Checked in order; the first matching class wins
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (VoteConflictError, status.HTTP_409_CONFLICT),
]


def error_detail(code: ErrorCode, message: str) -> dict[str, object]:
    """Build the error body shared by every error response."""
    return {"code": int(code), "message": message}


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def unauthorized(message: str) -> HTTPException:
    """401 for a missing or invalid auth token."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error_detail(ErrorCode.USER_TOKEN_FAILED, message),
    )


async def _rollback(request: Request) -> None:
    container = getattr(request.state, "dishka_container", None)
    if container is None:
        return
    unit_of_work = await container.get(UnitOfWork)
    await unit_of_work.rollback()


async def _handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    await _rollback(request)
    logfire.warn(
        "Request failed with domain error",
        path=request.url.path,
        error_type=type(exc).__name__,
        code=int(exc.code),
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": error_detail(exc.code, str(exc))},
    )


async def _handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    await _rollback(request)
    logfire.error(
        "Request failed with storage error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": error_detail(ErrorCode.SYSTEM_ERROR, "Internal error")},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain and storage error handlers on the app."""
    app.add_exception_handler(DomainError, _handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _handle_storage_error)  # type: ignore[arg-type]
