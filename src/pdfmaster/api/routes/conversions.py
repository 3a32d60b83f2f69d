"""Conversion endpoints: images, Word and PowerPoint to PDF."""

from __future__ import annotations

import asyncio
import uuid
from typing import TYPE_CHECKING, Annotated, Any

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse

from pdfmaster.api.downloads import download_response
from pdfmaster.api.state import JanitorDep, SettingsDep
from pdfmaster.api.uploads import save_upload, save_uploads
from pdfmaster.async_runner import run_in_worker
from pdfmaster.converters import images_to_pdf, office_to_pdf
from pdfmaster.exceptions import UploadError
from pdfmaster.logging import get_logger
from pdfmaster.operations import PDF_MEDIA_TYPE
from pdfmaster.typing.enums import UploadKind
from pdfmaster.typing.models import ConversionResult

if TYPE_CHECKING:
    from pathlib import Path

    from pdfmaster.janitor import TempFileJanitor
    from pdfmaster.settings import Settings

logger = get_logger(__name__)

router = APIRouter(tags=["convert"])

_MIN_QUALITY = 1
_MAX_QUALITY = 100


def _conversion_payload(result: ConversionResult, *, message: str, download_url: str) -> dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "filename": result.path.name,
        "downloadUrl": download_url,
        "fileSize": result.size_bytes,
        "pageCount": result.page_count,
        "conversionType": "placeholder" if result.placeholder else "converted",
    }


def _write_images_pdf(image_paths: list[Path], settings: Settings, quality: int) -> ConversionResult:
    data = images_to_pdf(image_paths, quality=quality)
    destination = settings.temp_path / f"converted-{uuid.uuid4()}.pdf"
    destination.write_bytes(data)
    return ConversionResult(path=destination, size_bytes=len(data), page_count=len(image_paths))


@router.post("/api/convert/images-to-pdf")
async def convert_images_to_pdf(
    request: Request,
    settings: SettingsDep,
    janitor: JanitorDep,
    images: Annotated[list[UploadFile] | None, File()] = None,
    quality: Annotated[int | None, Form()] = None,
) -> dict[str, Any]:
    """Build one PDF page per uploaded image, in upload order."""
    uploads = images or []
    if not uploads:
        raise UploadError(message="No images uploaded")

    jpeg_quality = settings.image_quality if quality is None else quality
    if not _MIN_QUALITY <= jpeg_quality <= _MAX_QUALITY:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Quality must be between {_MIN_QUALITY} and {_MAX_QUALITY}",
        )

    inputs = await save_uploads(uploads, kind=UploadKind.IMAGE, settings=settings)
    try:
        result = await run_in_worker(_write_images_pdf, inputs, settings, jpeg_quality)
    finally:
        janitor.delete_now(inputs)

    janitor.schedule([result.path], settings.cleanup_delay_seconds)
    logger.info("Images converted", extra={"images": len(inputs), "output": result.path.name})
    payload = _conversion_payload(
        result,
        message="PDF created successfully",
        download_url=str(request.url_for("download_converted_pdf", filename=result.path.name)),
    )
    payload["imageCount"] = len(inputs)
    return payload


@router.get("/api/convert/download/{filename}", name="download_converted_pdf")
async def download_converted_pdf(filename: str, settings: SettingsDep) -> FileResponse:
    """Download a PDF built from images."""
    return download_response(filename, settings=settings, media_type=PDF_MEDIA_TYPE)


async def _convert_office_upload(
    upload: UploadFile,
    *,
    kind: UploadKind,
    title: str,
    settings: Settings,
    janitor: TempFileJanitor,
) -> ConversionResult:
    original_name = upload.filename or "document"
    source = await save_upload(upload, kind=kind, settings=settings)
    try:
        result = await asyncio.to_thread(
            office_to_pdf,
            source,
            settings.temp_path,
            settings=settings,
            display_name=original_name,
            title=title,
        )
    finally:
        janitor.delete_now([source])

    janitor.schedule([result.path], settings.cleanup_delay_seconds)
    return result


@router.post("/api/powerpoint-to-pdf")
async def powerpoint_to_pdf(
    request: Request,
    settings: SettingsDep,
    janitor: JanitorDep,
    powerpoint: Annotated[UploadFile | None, File()] = None,
) -> dict[str, Any]:
    """Convert an uploaded presentation to PDF."""
    if powerpoint is None:
        raise UploadError(message="No PowerPoint file uploaded")

    original_name = powerpoint.filename or "presentation"
    result = await _convert_office_upload(
        powerpoint,
        kind=UploadKind.POWERPOINT,
        title="PRESENTATION CONVERTED TO PDF",
        settings=settings,
        janitor=janitor,
    )
    payload = _conversion_payload(
        result,
        message="Presentation converted to PDF successfully",
        download_url=str(request.url_for("download_powerpoint_pdf", filename=result.path.name)),
    )
    payload["originalName"] = original_name
    return payload


@router.get("/api/powerpoint-to-pdf/download/{filename}", name="download_powerpoint_pdf")
async def download_powerpoint_pdf(filename: str, settings: SettingsDep) -> FileResponse:
    """Download a converted presentation."""
    return download_response(filename, settings=settings, media_type=PDF_MEDIA_TYPE)


@router.post("/api/word-to-pdf/word-to-pdf")
async def word_to_pdf(
    request: Request,
    settings: SettingsDep,
    janitor: JanitorDep,
    word: Annotated[UploadFile | None, File()] = None,
) -> dict[str, Any]:
    """Convert an uploaded Word document to PDF."""
    if word is None:
        raise UploadError(message="No Word document uploaded")

    original_name = word.filename or "document"
    result = await _convert_office_upload(
        word,
        kind=UploadKind.WORD,
        title="DOCUMENT CONVERTED TO PDF",
        settings=settings,
        janitor=janitor,
    )
    payload = _conversion_payload(
        result,
        message="Word document converted to PDF successfully",
        download_url=str(request.url_for("download_word_pdf", filename=result.path.name)),
    )
    payload["originalName"] = original_name
    return payload


@router.get("/api/word-to-pdf/download/{filename}", name="download_word_pdf")
async def download_word_pdf(filename: str, settings: SettingsDep) -> FileResponse:
    """Download a converted Word document."""
    return download_response(filename, settings=settings, media_type=PDF_MEDIA_TYPE)
