"""Service banner and health endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter

from pdfmaster import __version__, converters
from pdfmaster.api.state import JanitorDep, SettingsDep

if TYPE_CHECKING:
    from pdfmaster.settings import Settings

router = APIRouter(tags=["health"])

ENDPOINTS: dict[str, str] = {
    "mergePdf": "/api/merge-pdf/merge-pdf",
    "splitPdf": "/api/split-pdf/split-pdf",
    "removePages": "/api/remove-pages/remove-pages",
    "imagesToPdf": "/api/convert/images-to-pdf",
    "powerpointToPdf": "/api/powerpoint-to-pdf",
    "wordToPdf": "/api/word-to-pdf/word-to-pdf",
    "health": "/health",
}


@router.get("/")
async def index(settings: SettingsDep) -> dict[str, Any]:
    """Return the service banner and the endpoint list."""
    return {
        "success": True,
        "message": f"{settings.project_name} API is running",
        "version": __version__,
        "endpoints": ENDPOINTS,
    }


@router.get("/health")
async def health(settings: SettingsDep, janitor: JanitorDep) -> dict[str, Any]:
    """Return liveness details and temp directory state."""
    temp_path = settings.temp_path
    return {
        "success": True,
        "status": "ok",
        "environment": settings.app_env,
        "version": __version__,
        "tempDir": str(temp_path),
        "tempDirExists": temp_path.is_dir(),
        "pendingCleanups": janitor.pending_count,
        "maxUploadMb": settings.max_upload_mb,
    }


def _tool_health(message: str, settings: Settings, **details: Any) -> dict[str, Any]:
    temp_path = settings.temp_path
    return {
        "success": True,
        "message": message,
        "timestamp": datetime.now(UTC).isoformat(),
        "tempDirExists": temp_path.is_dir(),
        "tempDirPath": str(temp_path),
        "maxFileSize": f"{settings.max_upload_mb}MB",
        **details,
    }


def _office_conversion_type(settings: Settings) -> str:
    return "converted" if converters.find_office_binary(settings) else "placeholder"


@router.get("/api/merge-pdf/health")
async def merge_health(settings: SettingsDep) -> dict[str, Any]:
    """Report that the merge tool is available."""
    return _tool_health("Merge PDF API is running", settings)


@router.get("/api/split-pdf/health")
async def split_health(settings: SettingsDep) -> dict[str, Any]:
    """Report that the split tool is available and which modes it supports."""
    return _tool_health(
        "Split PDF API is running",
        settings,
        features={"splitAtPages": True, "extractRanges": True, "splitIndividual": True},
    )


@router.get("/api/remove-pages/health")
async def remove_pages_health(settings: SettingsDep) -> dict[str, Any]:
    """Report that the remove-pages tool is available."""
    return _tool_health(
        "Remove Pages API is running",
        settings,
        features={"singlePageRemoval": True, "pageRangeRemoval": True, "multiplePagesRemoval": True},
    )


@router.get("/api/convert/health")
async def convert_health(settings: SettingsDep) -> dict[str, Any]:
    """Report that the image conversion tool is available."""
    return _tool_health("Convert to PDF API is running", settings)


@router.get("/api/word-to-pdf/health")
async def word_health(settings: SettingsDep) -> dict[str, Any]:
    """Report the Word conversion mode: real conversion or placeholder page."""
    conversion_type = _office_conversion_type(settings)
    return _tool_health(
        f"Word to PDF API is running ({conversion_type} mode)",
        settings,
        conversionType=conversion_type,
    )


@router.get("/api/powerpoint-to-pdf/health")
async def powerpoint_health(settings: SettingsDep) -> dict[str, Any]:
    """Report the PowerPoint conversion mode: real conversion or placeholder page."""
    conversion_type = _office_conversion_type(settings)
    return _tool_health(
        f"PowerPoint to PDF API is running ({conversion_type} mode)",
        settings,
        conversionType=conversion_type,
    )
