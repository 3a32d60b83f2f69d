"""JSON error payloads and exception handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pdfmaster.exceptions import (
    ArchiveError,
    ConversionError,
    PackageError,
    PageSpecError,
    PipelineError,
    UploadError,
)
from pdfmaster.logging import get_logger
from pdfmaster.typing.enums import ErrorKind

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = get_logger(__name__)

ERROR_TITLES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_PDF: "Invalid PDF file",
    ErrorKind.EMPTY_INPUT: "Invalid page specification",
    ErrorKind.INVALID_NUMBER: "Invalid page specification",
    ErrorKind.INVALID_RANGE: "Invalid page specification",
    ErrorKind.OUT_OF_BOUNDS: "Invalid page specification",
    ErrorKind.ALL_PAGES_REMOVED: "Cannot remove all pages",
    ErrorKind.INSUFFICIENT_SOURCES: "Not enough files",
    ErrorKind.ASSEMBLY_FAILED: "Processing failed",
}

_SERVER_SIDE_KINDS = frozenset({ErrorKind.ASSEMBLY_FAILED})


def error_payload(error: str, message: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build the JSON body shared by every failure response.

    Args:
        error (str): Short error title.
        message (str | None): Detailed message.
        **extra (Any): Additional top-level fields.

    Returns:
        dict[str, Any]: Payload with `success` set to False.
    """
    payload: dict[str, Any] = {"success": False, "error": error}
    if message is not None:
        payload["message"] = message
    payload.update(extra)
    return payload


def status_for_pipeline_error(exc: PipelineError) -> int:
    """Return the HTTP status of a typed pipeline failure.

    Args:
        exc (PipelineError): Raised pipeline error.

    Returns:
        int: 500 for failures after validation, else 400.
    """
    if exc.kind in _SERVER_SIDE_KINDS:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


async def _handle_pipeline_error(request: Request, exc: PipelineError) -> JSONResponse:
    status_code = status_for_pipeline_error(exc)
    log = logger.error if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.info
    log("Pipeline request rejected", extra={"path": request.url.path, "kind": exc.kind.to_str(), "error": str(exc)})

    extra: dict[str, Any] = {"kind": exc.kind.to_str(), "detail": exc.detail()}
    if isinstance(exc, PageSpecError):
        extra["totalPages"] = exc.detail().get("maximum")
    return JSONResponse(
        status_code=status_code,
        content=error_payload(ERROR_TITLES[exc.kind], str(exc), **extra),
    )


async def _handle_upload_error(request: Request, exc: UploadError) -> JSONResponse:
    logger.info("Upload rejected", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc.message, str(exc)))


async def _handle_package_error(request: Request, exc: PackageError) -> JSONResponse:
    if isinstance(exc, ConversionError):
        title = "Conversion failed"
    elif isinstance(exc, ArchiveError):
        title = "Archive creation failed"
    else:
        title = "Processing failed"
    logger.error("Request failed", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload(title, str(exc)),
    )


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: ARG001
    fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_payload("Invalid request", "Missing or invalid form fields", fields=fields),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers to the application.

    Args:
        app (FastAPI): Application to configure.
    """
    app.add_exception_handler(PipelineError, _handle_pipeline_error)  # type: ignore[arg-type]
    app.add_exception_handler(UploadError, _handle_upload_error)  # type: ignore[arg-type]
    app.add_exception_handler(PackageError, _handle_package_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]
