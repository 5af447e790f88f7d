from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

if TYPE_CHECKING:
    from fastapi import FastAPI, Request


class ErrorResponse(BaseModel):
    """JSON body of every error the API returns."""

    error: str
    detail: str | None = None
    status_code: int
    reason: str | None = None  # machine-readable rejection code for refused leave


class AppError(Exception):
    """Base application exception; carries the HTTP status to respond with."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def reason(self) -> str | None:
        return None


class InvalidRangeError(AppError):
    """A leave request whose end date precedes its start date."""

    def __init__(self, message: str = "end_date must not be before start_date") -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class LeaveRejectedError(AppError):
    """The evaluator refused a leave request.

    Overlaps with existing leave map to 409; every other reason is a 400.
    """

    def __init__(self, reason: str, message: str, *, conflict: bool = False) -> None:
        self.rejection_reason = reason
        super().__init__(
            message,
            status_code=status.HTTP_409_CONFLICT if conflict else status.HTTP_400_BAD_REQUEST,
        )

    @property
    def reason(self) -> str | None:
        return self.rejection_reason


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
            reason=exc.reason,
        ).model_dump(exclude_none=True),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=str(exc.errors()),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        ).model_dump(exclude_none=True),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the JSON error handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
