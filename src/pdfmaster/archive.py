"""ZIP packaging of multi-output operations."""

from __future__ import annotations

import zipfile
from typing import TYPE_CHECKING

from pdfmaster.exceptions import ArchiveError
from pdfmaster.logging import get_logger
from pdfmaster.typing.models import ArchiveInfo

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from pdfmaster.typing.models import OutputDocument

logger = get_logger(__name__)

PARTIAL_SUFFIX = ".part"


def partial_path(destination: Path) -> Path:
    """Return the temporary path used while `destination` is being written.

    Args:
        destination (Path): Final archive path.

    Returns:
        Path: Sibling path with a `.part` suffix appended.
    """
    return destination.with_name(destination.name + PARTIAL_SUFFIX)


def write_archive(
    documents: Iterable[OutputDocument],
    destination: Path,
    *,
    compress_level: int = 9,
) -> ArchiveInfo:
    """Stream documents into a deflated ZIP archive.

    Documents are consumed one at a time so a lazy iterable keeps at most one
    assembled document in memory. The archive only appears at `destination`
    once every member was written.

    Args:
        documents (Iterable[OutputDocument]): Outputs in archive order.
        destination (Path): Final archive path.
        compress_level (int): Deflate level, 0-9.

    Raises:
        ArchiveError: If a member name repeats, the archive would be empty, or writing fails.

    Returns:
        ArchiveInfo: Written archive path, member names and size.
    """
    temporary = partial_path(destination)
    member_names: list[str] = []
    try:
        with zipfile.ZipFile(
            temporary,
            "w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=compress_level,
        ) as archive:
            for document in documents:
                if document.filename in member_names:
                    raise ArchiveError(message="Duplicate archive member", path=document.filename)
                archive.writestr(document.filename, document.data)
                member_names.append(document.filename)
        if not member_names:
            raise ArchiveError(message="No documents to archive", path=str(destination))
        temporary.replace(destination)
    except ArchiveError:
        temporary.unlink(missing_ok=True)
        raise
    except (OSError, zipfile.BadZipFile) as exc:
        temporary.unlink(missing_ok=True)
        raise ArchiveError(message=f"Failed to write archive ({exc})", path=str(destination)) from exc
    except BaseException:
        temporary.unlink(missing_ok=True)
        raise

    size_bytes = destination.stat().st_size
    logger.info(
        "Archive written",
        extra={"path": str(destination), "members": len(member_names), "size_bytes": size_bytes},
    )
    return ArchiveInfo(path=destination, member_names=tuple(member_names), size_bytes=size_bytes)
