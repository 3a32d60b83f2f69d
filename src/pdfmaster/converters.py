"""Conversion of image and office uploads to PDF."""

from __future__ import annotations

import io
import shutil
import subprocess  # noqa: S404
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import fitz
from PIL import Image, ImageOps, UnidentifiedImageError

from pdfmaster.async_runner import PDF_ENGINE_LOCK
from pdfmaster.document import PdfDocumentHandle
from pdfmaster.exceptions import ConversionError, InvalidPdfError
from pdfmaster.logging import get_logger
from pdfmaster.settings import get_settings
from pdfmaster.typing.models import ConversionResult

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pdfmaster.settings import Settings

logger = get_logger(__name__)

A4_WIDTH = 595.28
A4_HEIGHT = 841.89
_HEADER_HEIGHT = 120
_HEADER_FILL = (0.2, 0.4, 0.8)
_TEXT_COLOR = (0.2, 0.2, 0.2)
_MUTED_COLOR = (0.5, 0.5, 0.5)
_SOFFICE_CANDIDATES = ("soffice", "libreoffice")


def _image_to_jpeg(path: Path, *, quality: int) -> tuple[bytes, int, int]:
    """Normalize one image to an RGB JPEG.

    Returns:
        tuple[bytes, int, int]: JPEG bytes, width and height in pixels.
    """
    with Image.open(path) as image:
        upright = ImageOps.exif_transpose(image)
        rgb = upright.convert("RGB")
        buffer = io.BytesIO()
        rgb.save(buffer, format="JPEG", quality=quality, optimize=True)
        return buffer.getvalue(), rgb.width, rgb.height


def images_to_pdf(image_paths: Sequence[Path], *, quality: int = 80) -> bytes:
    """Build a PDF with one page per image, each page sized to its image.

    Args:
        image_paths (Sequence[Path]): Images in page order.
        quality (int): JPEG quality, 1-100.

    Raises:
        ConversionError: If no image is given or an image cannot be decoded.

    Returns:
        bytes: Serialized PDF.
    """
    if not image_paths:
        raise ConversionError(message="No images to convert")

    document = fitz.open()
    try:
        for path in image_paths:
            try:
                data, width, height = _image_to_jpeg(path, quality=quality)
            except (UnidentifiedImageError, OSError) as exc:
                raise ConversionError(message=f"Cannot read image '{path.name}': {exc}") from exc
            page = document.new_page(width=width, height=height)
            page.insert_image(page.rect, stream=data)
        return document.tobytes(garbage=3, deflate=True)
    finally:
        document.close()


def placeholder_pdf(title: str, lines: Sequence[str]) -> bytes:
    """Render a single A4 page with a coloured header band and text lines.

    Args:
        title (str): Header text.
        lines (Sequence[str]): Body lines, top to bottom.

    Returns:
        bytes: Serialized PDF.
    """
    document = fitz.open()
    try:
        page = document.new_page(width=A4_WIDTH, height=A4_HEIGHT)
        page.draw_rect(fitz.Rect(0, 0, A4_WIDTH, _HEADER_HEIGHT), color=None, fill=_HEADER_FILL)
        page.insert_text((50, 70), title, fontsize=20, fontname="hebo", color=(1, 1, 1))

        y = _HEADER_HEIGHT + 60
        for line in lines:
            page.insert_text((50, y), line, fontsize=12, fontname="helv", color=_TEXT_COLOR)
            y += 25

        stamp = datetime.now(tz=UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
        page.insert_text((50, A4_HEIGHT - 30), f"Processed: {stamp}", fontsize=8, color=_MUTED_COLOR)
        return document.tobytes(garbage=3, deflate=True)
    finally:
        document.close()


def find_office_binary(settings: Settings | None = None) -> str | None:
    """Return the LibreOffice binary to use, if any.

    Args:
        settings (Settings | None): Runtime settings.

    Returns:
        str | None: Configured binary, else the first one found on `PATH`.
    """
    config = settings or get_settings()
    if config.soffice_path:
        return config.soffice_path
    for candidate in _SOFFICE_CANDIDATES:
        found = shutil.which(candidate)
        if found:
            return found
    return None


def _run_office_converter(binary: str, input_path: Path, output_dir: Path, *, timeout: float) -> Path:
    command = [
        binary,
        "--headless",
        "--nologo",
        "--nolockcheck",
        "--nodefault",
        "--nofirststartwizard",
        "--convert-to",
        "pdf",
        "--outdir",
        str(output_dir),
        str(input_path),
    ]
    try:
        completed = subprocess.run(  # noqa: S603
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise ConversionError(message=f"Office conversion timed out after {timeout:g}s") from exc
    except OSError as exc:
        raise ConversionError(message=f"Office converter could not be started: {exc}") from exc

    if completed.returncode != 0:
        detail = (completed.stderr or completed.stdout or "").strip() or f"exit code {completed.returncode}"
        raise ConversionError(message=f"Office conversion failed: {detail}")

    produced = output_dir / f"{input_path.stem}.pdf"
    if not produced.exists():
        raise ConversionError(message="Office converter produced no PDF")
    return produced


def office_to_pdf(
    input_path: Path,
    output_dir: Path,
    *,
    settings: Settings | None = None,
    display_name: str | None = None,
    title: str = "DOCUMENT CONVERTED TO PDF",
) -> ConversionResult:
    """Convert a Word or PowerPoint file to `output_dir/<input stem>.pdf`.

    Uses LibreOffice when available. Without it, a one-page summary of the
    uploaded file is produced instead and flagged as a placeholder.

    Args:
        input_path (Path): Uploaded office document.
        output_dir (Path): Directory receiving the PDF.
        settings (Settings | None): Runtime settings.
        display_name (str | None): Original upload name shown on the placeholder.
        title (str): Placeholder header text.

    Raises:
        ConversionError: If the converter fails or produces an unreadable PDF.

    Returns:
        ConversionResult: Produced PDF description.
    """
    config = settings or get_settings()
    output_dir.mkdir(parents=True, exist_ok=True)
    binary = find_office_binary(config)

    if binary is None:
        size_mb = input_path.stat().st_size / (1024 * 1024)
        destination = output_dir / f"{input_path.stem}.pdf"
        with PDF_ENGINE_LOCK:
            data = placeholder_pdf(
                title,
                [
                    f"Original file: {display_name or input_path.name}",
                    f"File size: {size_mb:.2f} MB",
                    "No office converter is installed on this server.",
                    "Install LibreOffice for full content conversion.",
                ],
            )
        destination.write_bytes(data)
        logger.warning(
            "Office converter unavailable, produced placeholder PDF",
            extra={"input": input_path.name, "output": destination.name},
        )
        return ConversionResult(
            path=destination,
            size_bytes=destination.stat().st_size,
            page_count=1,
            placeholder=True,
        )

    produced = _run_office_converter(binary, input_path, output_dir, timeout=config.conversion_timeout)
    try:
        with PDF_ENGINE_LOCK, PdfDocumentHandle.open_path(produced) as handle:
            page_count = handle.page_count
    except InvalidPdfError as exc:
        produced.unlink(missing_ok=True)
        raise ConversionError(message=f"Office converter produced an unreadable PDF: {exc.reason}") from exc

    logger.info(
        "Office document converted",
        extra={"input": input_path.name, "output": produced.name, "pages": page_count},
    )
    return ConversionResult(path=produced, size_bytes=produced.stat().st_size, page_count=page_count)
