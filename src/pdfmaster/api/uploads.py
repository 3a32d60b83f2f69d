"""Upload gating: type allow-lists, size limits and streaming to the temp dir."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from pdfmaster.exceptions import UploadError
from pdfmaster.logging import get_logger
from pdfmaster.typing.enums import UploadKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fastapi import UploadFile

    from pdfmaster.settings import Settings

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024
HTTP_CONTENT_TOO_LARGE = 413

ALLOWED_EXTENSIONS: dict[UploadKind, frozenset[str]] = {
    UploadKind.PDF: frozenset({".pdf"}),
    UploadKind.IMAGE: frozenset({".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".tif", ".tiff"}),
    UploadKind.WORD: frozenset({".doc", ".docx"}),
    UploadKind.POWERPOINT: frozenset({".ppt", ".pptx"}),
}

ALLOWED_CONTENT_TYPES: dict[UploadKind, frozenset[str]] = {
    UploadKind.PDF: frozenset({"application/pdf"}),
    UploadKind.IMAGE: frozenset(),
    UploadKind.WORD: frozenset(
        {
            "application/msword",
            "application/vnd.ms-word",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        },
    ),
    UploadKind.POWERPOINT: frozenset(
        {
            "application/vnd.ms-powerpoint",
            "application/vnd.openxmlformats-officedocument.presentationml.presentation",
            "application/vnd.openxmlformats-officedocument.presentationml.slideshow",
        },
    ),
}

DEFAULT_EXTENSIONS: dict[UploadKind, str] = {
    UploadKind.PDF: ".pdf",
    UploadKind.IMAGE: ".img",
    UploadKind.WORD: ".docx",
    UploadKind.POWERPOINT: ".pptx",
}

_KIND_LABELS: dict[UploadKind, str] = {
    UploadKind.PDF: "PDF files (.pdf)",
    UploadKind.IMAGE: "image files",
    UploadKind.WORD: "Word documents (.doc, .docx)",
    UploadKind.POWERPOINT: "PowerPoint documents (.ppt, .pptx)",
}


def _content_type_allowed(kind: UploadKind, content_type: str | None) -> bool:
    if not content_type:
        return False
    if kind is UploadKind.IMAGE:
        return content_type.startswith("image/")
    return content_type in ALLOWED_CONTENT_TYPES[kind]


def resolve_extension(kind: UploadKind, filename: str, content_type: str | None) -> str:
    """Return the stored extension of an accepted upload.

    An upload is accepted when either its extension or its content type is on
    the allow-list of its kind.

    Args:
        kind (UploadKind): Expected upload family.
        filename (str): Client-supplied file name.
        content_type (str | None): Client-supplied content type.

    Raises:
        UploadError: If neither the extension nor the content type is allowed.

    Returns:
        str: Lower-case extension including the dot.
    """
    extension = Path(filename).suffix.lower()
    if extension in ALLOWED_EXTENSIONS[kind]:
        return extension
    if _content_type_allowed(kind, content_type):
        return extension or DEFAULT_EXTENSIONS[kind]
    raise UploadError(message=f"Only {_KIND_LABELS[kind]} are allowed", filename=filename)


async def save_upload(upload: UploadFile, *, kind: UploadKind, settings: Settings) -> Path:
    """Stream one upload to `{temp_dir}/{uuid4}{ext}`, enforcing the size limit.

    Args:
        upload (UploadFile): Incoming file.
        kind (UploadKind): Expected upload family.
        settings (Settings): Runtime settings.

    Raises:
        UploadError: If the upload has no name, a disallowed type, or exceeds the size limit.

    Returns:
        Path: Saved file.
    """
    if not upload.filename:
        raise UploadError(message="No filename provided")

    extension = resolve_extension(kind, upload.filename, upload.content_type)
    destination = settings.temp_path / f"{uuid.uuid4()}{extension}"
    limit = settings.max_upload_bytes

    written = 0
    try:
        with destination.open("wb") as output:
            while chunk := await upload.read(CHUNK_SIZE):
                written += len(chunk)
                if written > limit:
                    raise UploadError(
                        message=f"File too large. Max allowed is {settings.max_upload_mb}MB",
                        status_code=HTTP_CONTENT_TOO_LARGE,
                        filename=upload.filename,
                    )
                output.write(chunk)
    except BaseException:
        destination.unlink(missing_ok=True)
        raise
    finally:
        await upload.close()

    logger.debug(
        "Upload saved",
        extra={"upload": upload.filename, "path": destination.name, "size_bytes": written},
    )
    return destination


async def save_uploads(
    uploads: Sequence[UploadFile],
    *,
    kind: UploadKind,
    settings: Settings,
    minimum: int = 1,
) -> list[Path]:
    """Save several uploads in order; nothing is kept if any of them is rejected.

    Args:
        uploads (Sequence[UploadFile]): Incoming files.
        kind (UploadKind): Expected upload family.
        settings (Settings): Runtime settings.
        minimum (int): Minimum number of files.

    Raises:
        UploadError: If the file count is outside `minimum..max_files` or a file is rejected.

    Returns:
        list[Path]: Saved files, aligned with `uploads`.
    """
    if len(uploads) < minimum:
        raise UploadError(message=f"Please upload at least {minimum} file(s), got {len(uploads)}")
    if len(uploads) > settings.max_files:
        raise UploadError(message=f"Too many files. Max allowed is {settings.max_files}")

    saved: list[Path] = []
    try:
        for upload in uploads:
            saved.append(await save_upload(upload, kind=kind, settings=settings))
    except BaseException:
        for path in saved:
            path.unlink(missing_ok=True)
        raise
    return saved
