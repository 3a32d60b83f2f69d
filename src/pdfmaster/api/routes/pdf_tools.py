"""Page-manipulation endpoints: merge, split family and remove-pages."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse, JSONResponse

from pdfmaster.api.downloads import download_response
from pdfmaster.api.errors import error_payload
from pdfmaster.api.state import JanitorDep, SettingsDep
from pdfmaster.api.uploads import save_upload, save_uploads
from pdfmaster.async_runner import run_in_worker
from pdfmaster.exceptions import MergeInputError, UploadError
from pdfmaster.logging import get_logger
from pdfmaster.operations import PDF_MEDIA_TYPE, ZIP_MEDIA_TYPE, arun_operation, validate_sources
from pdfmaster.typing.enums import OperationKind, SplitType, UploadKind
from pdfmaster.typing.models import (
    ExtractRangesRequest,
    MergeRequest,
    OperationResult,
    RemovePagesRequest,
    SplitAtPointsRequest,
    SplitIndividualRequest,
)

logger = get_logger(__name__)

router = APIRouter(tags=["pdf"])

_MIN_MERGE_FILES = 2
_SPLIT_OPERATION_LABELS: dict[OperationKind, str] = {
    OperationKind.SPLIT_AT_POINTS: "split",
    OperationKind.EXTRACT_RANGES: "extract",
    OperationKind.SPLIT_INDIVIDUAL: "individual",
}


def _outputs_payload(result: OperationResult) -> list[dict[str, Any]]:
    return [
        {"filename": output.filename, "pageCount": output.page_count, "pageRange": output.page_range}
        for output in result.outputs
    ]


def _original_file_info(result: OperationResult, original_name: str) -> dict[str, Any]:
    source = result.sources[0]
    return {
        "originalName": original_name,
        "originalSize": source.size_bytes,
        "originalPages": source.page_count,
    }


@router.post("/api/merge-pdf/merge-pdf", response_model=None)
async def merge_pdf(
    request: Request,
    settings: SettingsDep,
    janitor: JanitorDep,
    pdfs: Annotated[list[UploadFile] | None, File()] = None,
) -> dict[str, Any] | JSONResponse:
    """Merge uploaded PDFs in upload order."""
    uploads = pdfs or []
    if not uploads:
        raise UploadError(message="No PDF files uploaded")
    if len(uploads) < _MIN_MERGE_FILES:
        raise MergeInputError(file_count=len(uploads), minimum=_MIN_MERGE_FILES)

    inputs = await save_uploads(uploads, kind=UploadKind.PDF, settings=settings, minimum=_MIN_MERGE_FILES)
    names = [upload.filename or path.name for upload, path in zip(uploads, inputs, strict=True)]
    try:
        reports = await run_in_worker(validate_sources, inputs, names)
        invalid = [report for report in reports if not report.valid]
        if invalid:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=error_payload(
                    "Some PDF files are invalid or corrupted",
                    invalidFiles=[{"filename": report.filename, "error": report.error} for report in invalid],
                ),
            )
        result = await arun_operation(
            MergeRequest(source_paths=tuple(inputs), source_names=tuple(names)),
            output_dir=settings.temp_path,
            settings=settings,
        )
    finally:
        janitor.delete_now(inputs)

    janitor.schedule([result.output_path], settings.cleanup_delay_seconds)
    filename = result.output_path.name
    return {
        "success": True,
        "message": "PDFs merged successfully",
        "filename": filename,
        "downloadUrl": str(request.url_for("download_merged_pdf", filename=filename)),
        "fileInfo": [
            {"filename": source.filename, "pageCount": source.page_count, "fileSize": source.size_bytes}
            for source in result.sources
        ],
        "mergeInfo": {
            "totalFiles": len(result.sources),
            "totalPages": result.total_output_pages,
            "outputSize": result.output_size,
        },
    }


@router.get("/api/merge-pdf/download/{filename}", name="download_merged_pdf")
async def download_merged_pdf(filename: str, settings: SettingsDep) -> FileResponse:
    """Download a merged PDF."""
    return download_response(filename, settings=settings, media_type=PDF_MEDIA_TYPE)


@router.post("/api/split-pdf/split-pdf")
async def split_pdf(
    request: Request,
    settings: SettingsDep,
    janitor: JanitorDep,
    pdf: Annotated[UploadFile | None, File()] = None,
    split_type: Annotated[str | None, Form(alias="splitType")] = None,
    split_points: Annotated[str | None, Form(alias="splitPoints")] = None,
    page_ranges: Annotated[str | None, Form(alias="pageRanges")] = None,
) -> dict[str, Any]:
    """Split an uploaded PDF at pages, by ranges, or into single pages."""
    if pdf is None:
        raise UploadError(message="No PDF file uploaded")
    if not split_type or not split_type.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No split type specified")
    try:
        operation = SplitType.from_str(split_type).to_operation()
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    original_name = pdf.filename or "document.pdf"
    source = await save_upload(pdf, kind=UploadKind.PDF, settings=settings)
    try:
        match operation:
            case OperationKind.SPLIT_AT_POINTS:
                operation_request = SplitAtPointsRequest(source_path=source, split_points=split_points or "")
            case OperationKind.EXTRACT_RANGES:
                operation_request = ExtractRangesRequest(source_path=source, page_ranges=page_ranges or "")
            case _:
                operation_request = SplitIndividualRequest(source_path=source)
        result = await arun_operation(operation_request, output_dir=settings.temp_path, settings=settings)
    finally:
        janitor.delete_now([source])

    janitor.schedule([result.output_path], settings.cleanup_delay_seconds)
    filename = result.output_path.name
    return {
        "success": True,
        "message": "PDF split successfully",
        "filename": filename,
        "downloadUrl": str(request.url_for("download_split_pdf", filename=filename)),
        "fileInfo": _original_file_info(result, original_name),
        "splitResult": {
            "operationType": _SPLIT_OPERATION_LABELS[result.kind],
            "totalFiles": result.output_count,
            "outputSize": result.output_size,
            "files": _outputs_payload(result),
        },
    }


@router.get("/api/split-pdf/download/{filename}", name="download_split_pdf")
async def download_split_pdf(filename: str, settings: SettingsDep) -> FileResponse:
    """Download a split archive."""
    return download_response(filename, settings=settings, media_type=ZIP_MEDIA_TYPE)


@router.post("/api/remove-pages/remove-pages")
async def remove_pages(
    request: Request,
    settings: SettingsDep,
    janitor: JanitorDep,
    pdf: Annotated[UploadFile | None, File()] = None,
    pages: Annotated[str | None, Form()] = None,
) -> dict[str, Any]:
    """Remove the listed pages from an uploaded PDF."""
    if pdf is None:
        raise UploadError(message="No PDF file uploaded")

    original_name = pdf.filename or "document.pdf"
    source = await save_upload(pdf, kind=UploadKind.PDF, settings=settings)
    try:
        result = await arun_operation(
            RemovePagesRequest(source_path=source, pages=pages or ""),
            output_dir=settings.temp_path,
            settings=settings,
        )
    finally:
        janitor.delete_now([source])

    janitor.schedule([result.output_path], settings.cleanup_delay_seconds)
    filename = result.output_path.name
    (output,) = result.outputs
    return {
        "success": True,
        "message": "Pages removed successfully",
        "filename": filename,
        "downloadUrl": str(request.url_for("download_removed_pages", filename=filename)),
        "fileInfo": _original_file_info(result, original_name),
        "removalInfo": {
            "removedPages": list(result.removed_pages),
            "removedCount": len(result.removed_pages),
            "remainingCount": output.page_count,
            "remainingPages": output.page_range,
            "outputSize": result.output_size,
        },
    }


@router.get("/api/remove-pages/download/{filename}", name="download_removed_pages")
async def download_removed_pages(filename: str, settings: SettingsDep) -> FileResponse:
    """Download a PDF with pages removed."""
    return download_response(filename, settings=settings, media_type=PDF_MEDIA_TYPE)
