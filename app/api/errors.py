"""
Traduction des exceptions métier en réponses HTTP, en un seul endroit.

    NotFoundError              → 404
    ConflictError              → 409
    InvalidUploadError         → 400
    UnsupportedMediaTypeError  → 415
    UploadFailedError          → 502
    PropagationFailedError     → 500 (+ step : rejouer la propagation)
    PartialCascadeFailureError → 500 (+ step, orphaned_objects : relancer la suppression)
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    ConflictError,
    GalleryError,
    InvalidUploadError,
    NotFoundError,
    PartialCascadeFailureError,
    PropagationFailedError,
    UnsupportedMediaTypeError,
    UploadFailedError,
)
from app.core.logging import get_logger

logger = get_logger(__name__)

_STATUS = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidUploadError, status.HTTP_400_BAD_REQUEST),
    (UnsupportedMediaTypeError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (UploadFailedError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(exc: GalleryError) -> int:
    for exc_type, code in _STATUS:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _body(exc: GalleryError) -> dict:
    body = {"detail": exc.message}
    if isinstance(exc, (PartialCascadeFailureError, PropagationFailedError, UploadFailedError)):
        body["step"] = getattr(exc, "step", None) or getattr(exc, "stage", None)
    if isinstance(exc, PartialCascadeFailureError):
        body["orphaned_objects"] = exc.orphaned_objects
    return body


def setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GalleryError)
    async def gallery_error_handler(request: Request, exc: GalleryError) -> JSONResponse:
        code = status_for(exc)
        log = logger.error if code >= 500 else logger.info
        log("api.error", error=type(exc).__name__, message=exc.message, status_code=code, path=request.url.path)
        return JSONResponse(status_code=code, content=_body(exc))
