"""Download of produced outputs from the temp directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, status
from fastapi.responses import FileResponse

from pdfmaster.operations import PDF_MEDIA_TYPE, ZIP_MEDIA_TYPE

if TYPE_CHECKING:
    from pdfmaster.settings import Settings

_FORBIDDEN_FRAGMENTS = ("..", "/", "\\")

# Each download route only serves the output kind it produces.
_SUFFIX_BY_MEDIA_TYPE: dict[str, str] = {
    PDF_MEDIA_TYPE: ".pdf",
    ZIP_MEDIA_TYPE: ".zip",
}


def is_safe_filename(filename: str, *, media_type: str | None = None) -> bool:
    """Return whether a requested file name may be served.

    Args:
        filename (str): Requested name.
        media_type (str | None): Content type of the route; when given, the
            name must carry the matching extension.

    Returns:
        bool: False for empty names, names containing `..`, `/` or `\\`, and
        names whose extension does not match `media_type`.
    """
    if not filename or any(fragment in filename for fragment in _FORBIDDEN_FRAGMENTS):
        return False
    if media_type is None:
        return True
    suffix = _SUFFIX_BY_MEDIA_TYPE.get(media_type)
    return suffix is not None and filename.lower().endswith(suffix)


def download_response(filename: str, *, settings: Settings, media_type: str) -> FileResponse:
    """Stream a produced output back to the client.

    Args:
        filename (str): Output file name inside the temp directory.
        settings (Settings): Runtime settings.
        media_type (str): Response content type.

    Raises:
        HTTPException: 400 for unsafe names or names of another output kind,
            404 for missing or expired files.

    Returns:
        FileResponse: Attachment response.
    """
    if not is_safe_filename(filename, media_type=media_type):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid filename")

    path = settings.temp_path / filename
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found or expired")

    return FileResponse(path=path, media_type=media_type, filename=filename)
