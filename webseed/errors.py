"""
Error taxonomy and its conversion into HTTP responses.

Classification (low-level failure -> AppError) and rendering
(AppError -> ErrorPage -> response) are kept as separate functions.
"""
from __future__ import annotations

import enum
import errno
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from webseed.utils import get_logger

logger = get_logger(__name__)


class AppErrorKind(str, enum.Enum):
    JSON_ERROR = "JSON_ERROR"
    UI_ERROR = "UI_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    UNKNOWN = "UNKNOWN"


# Every kind has exactly one status code and one user-facing message.
_STATUS_BY_KIND: dict[AppErrorKind, int] = {
    AppErrorKind.UI_ERROR: 500,
    AppErrorKind.JSON_ERROR: 400,
    AppErrorKind.FILE_NOT_FOUND: 404,
    AppErrorKind.UNKNOWN: 500,
}

_MESSAGE_BY_KIND: dict[AppErrorKind, str] = {
    AppErrorKind.UI_ERROR: "Failed to render page",
    AppErrorKind.JSON_ERROR: "Malformed JSON input",
    AppErrorKind.FILE_NOT_FOUND: "File not found",
    AppErrorKind.UNKNOWN: "Unknown application error",
}


class AppError(Exception):
    """Classified handler-level failure."""

    def __init__(self, kind: AppErrorKind, detail: Optional[str] = None):
        self.kind = AppErrorKind(kind)
        self.detail = detail
        super().__init__(detail or _MESSAGE_BY_KIND[self.kind])

    def __str__(self) -> str:
        return _MESSAGE_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value}, detail={self.detail!r})"


@dataclass(frozen=True)
class ErrorPage:
    status_code: int
    error: str


def classify_os_error(exc: OSError) -> AppError:
    """Map an I/O failure onto the taxonomy: not-found or unknown."""
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return AppError(AppErrorKind.FILE_NOT_FOUND, detail=str(exc))
    return AppError(AppErrorKind.UNKNOWN, detail=str(exc))


def to_error_page(err: AppError) -> ErrorPage:
    return ErrorPage(status_code=_STATUS_BY_KIND[err.kind], error=_MESSAGE_BY_KIND[err.kind])


def render_error_page(page: ErrorPage) -> PlainTextResponse:
    return PlainTextResponse(content=page.error, status_code=page.status_code)


def _request_context(request: Request) -> dict[str, str]:
    return {
        "request_id": getattr(request.state, "request_id", "unknown"),
        "url": str(request.url),
        "method": request.method,
    }


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers that turn handler failures into error pages."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        page = to_error_page(exc)
        log = logger.error if page.status_code >= 500 else logger.warning
        log(
            "Request failed",
            kind=exc.kind.value,
            detail=exc.detail,
            status_code=page.status_code,
            **_request_context(request),
        )
        return render_error_page(page)

    @app.exception_handler(OSError)
    async def os_error_handler(request: Request, exc: OSError):
        return await app_error_handler(request, classify_os_error(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return await app_error_handler(
            request, AppError(AppErrorKind.JSON_ERROR, detail=str(exc.errors()))
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=exc,
            **_request_context(request),
        )
        return render_error_page(to_error_page(AppError(AppErrorKind.UNKNOWN)))
