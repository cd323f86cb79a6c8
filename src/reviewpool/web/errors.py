"""Error envelope and exception handlers for the Reviewpool HTTP API.

Every error response has the shape::

    {"error": {"code": "PR_MERGED", "message": "pull request 'pr-1' already merged"}}

Domain errors keep their own code; the HTTP status comes from
``STATUS_BY_CODE``. Anything unexpected becomes a 500 with a generic
message, the details go to the log only.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi import status as http_status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from reviewpool.errors import ReviewpoolError
from reviewpool.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_CODE: dict[str, int] = {
    "BAD_REQUEST": http_status.HTTP_400_BAD_REQUEST,
    "TEAM_EXISTS": http_status.HTTP_400_BAD_REQUEST,
    "PR_EXISTS": http_status.HTTP_409_CONFLICT,
    "PR_MERGED": http_status.HTTP_409_CONFLICT,
    "NOT_ASSIGNED": http_status.HTTP_409_CONFLICT,
    "NO_CANDIDATE": http_status.HTTP_409_CONFLICT,
    "NOT_FOUND": http_status.HTTP_404_NOT_FOUND,
    "UNAUTHORIZED": http_status.HTTP_401_UNAUTHORIZED,
}


class ApiError(BaseModel):
    code: str
    message: str


class ErrorBody(BaseModel):
    """Standardized error response schema."""

    error: ApiError


class UnauthorizedError(Exception):
    """Raised by the auth dependencies when no accepted token is presented."""


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorBody(error=ApiError(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_domain_error(request: Request, exc: ReviewpoolError) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(exc.code, http_status.HTTP_500_INTERNAL_SERVER_ERROR)
    request.state.error_code = exc.code
    logger.warning(
        "domain_error",
        path=request.url.path,
        code=exc.code,
        message=exc.message,
    )
    return error_response(status_code, exc.code, exc.message)


async def handle_unauthorized(request: Request, exc: Exception) -> JSONResponse:
    request.state.error_code = "UNAUTHORIZED"
    logger.warning("request_unauthorized", path=request.url.path)
    return error_response(http_status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "unauthorized")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error",
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return error_response(
        http_status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL", "internal error"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on ``app``."""
    app.add_exception_handler(ReviewpoolError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(UnauthorizedError, handle_unauthorized)
    app.add_exception_handler(Exception, handle_unexpected_error)
