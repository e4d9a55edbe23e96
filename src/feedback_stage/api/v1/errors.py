"""Translation of service exceptions into HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from feedback_stage.services.errors import (
    ConstraintViolationError,
    FeedbackStageError,
    InvalidMergeError,
    InvalidStateError,
    NotFoundError,
)

_STATUS_BY_ERROR: tuple[tuple[type[FeedbackStageError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (InvalidMergeError, status.HTTP_400_BAD_REQUEST),
    (ConstraintViolationError, status.HTTP_409_CONFLICT),
)


def status_for(exc: FeedbackStageError) -> int:
    """Return the HTTP status code for a service exception."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def feedback_stage_error_handler(request: Request, exc: FeedbackStageError) -> JSONResponse:
    """Render a service exception as ``{"detail", "error"}``."""
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the service exception handler to ``app``."""
    app.add_exception_handler(FeedbackStageError, feedback_stage_error_handler)  # type: ignore[arg-type]
