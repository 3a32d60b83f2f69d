"""PyMuPDF-backed PDF document handle."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Self

import fitz

from pdfmaster.exceptions import DocumentSealedError, InvalidPdfError, PageIndexOutOfRangeError
from pdfmaster.logging import get_logger
from pdfmaster.typing.models import SourceInfo

if TYPE_CHECKING:
    from types import TracebackType

logger = get_logger(__name__)

# PDF readers accept up to 1024 bytes of garbage before the header.
_HEADER_SEARCH_WINDOW = 1024
_PDF_MAGIC = b"%PDF-"


@dataclass(frozen=True)
class PageCopy:
    """Page selected from a source handle, ready to be appended elsewhere."""

    source: PdfDocumentHandle
    index: int


class PdfDocumentHandle:
    """Structured PDF document opened from bytes or created empty.

    Source handles expose their page count and hand out `PageCopy` objects;
    target handles receive them through `append_page` in call order and are
    sealed by `serialize`.
    """

    def __init__(self, document: fitz.Document, *, name: str) -> None:
        """Wrap an open PyMuPDF document.

        Args:
            document (fitz.Document): Open document.
            name (str): Originating file name, used in messages.
        """
        self._document = document
        self._name = name
        self._serialized: bytes | None = None

    @classmethod
    def open(cls, data: bytes, *, name: str = "document.pdf") -> Self:
        """Open a byte buffer as a PDF document.

        Args:
            data (bytes): Raw file content.
            name (str): Originating file name.

        Raises:
            InvalidPdfError: If the buffer is not a readable, non-empty PDF.

        Returns:
            PdfDocumentHandle: Open source handle.
        """
        if not data:
            raise InvalidPdfError(source=name, reason="file is empty")
        if _PDF_MAGIC not in data[: _HEADER_SEARCH_WINDOW + len(_PDF_MAGIC)]:
            raise InvalidPdfError(source=name, reason="missing PDF header")

        try:
            document = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            raise InvalidPdfError(source=name, reason=str(exc) or "unreadable PDF structure") from exc

        if not document.is_pdf:
            document.close()
            raise InvalidPdfError(source=name, reason="not a PDF document")
        # MuPDF rebuilds a broken xref silently; pages past the cut come back blank.
        if document.is_repaired:
            document.close()
            raise InvalidPdfError(source=name, reason="truncated or damaged PDF structure")
        if document.needs_pass:
            document.close()
            raise InvalidPdfError(source=name, reason="document is password protected")
        if document.page_count < 1:
            document.close()
            raise InvalidPdfError(source=name, reason="document has no pages")

        return cls(document, name=name)

    @classmethod
    def open_path(cls, path: Path, *, name: str | None = None) -> Self:
        """Read a file and open it as a PDF document.

        Args:
            path (Path): File to read.
            name (str | None): Display name, defaults to the file name.

        Returns:
            PdfDocumentHandle: Open source handle.
        """
        return cls.open(path.read_bytes(), name=name or path.name)

    @classmethod
    def create_empty(cls, *, name: str = "output.pdf") -> Self:
        """Create a zero-page document to append pages to.

        Args:
            name (str): Output file name.

        Returns:
            PdfDocumentHandle: Empty target handle.
        """
        return cls(fitz.open(), name=name)

    @property
    def name(self) -> str:
        """Return the originating file name."""
        return self._name

    @property
    def page_count(self) -> int:
        """Return the number of pages."""
        return self._document.page_count

    @property
    def is_sealed(self) -> bool:
        """Return whether `serialize` was called."""
        return self._serialized is not None

    def copy_page(self, index: int) -> PageCopy:
        """Select one page for copying.

        Args:
            index (int): Zero-based page index.

        Raises:
            PageIndexOutOfRangeError: If the index is not inside the document.

        Returns:
            PageCopy: Page reference accepted by `append_page`.
        """
        if not 0 <= index < self.page_count:
            raise PageIndexOutOfRangeError(index=index, page_count=self.page_count)
        return PageCopy(source=self, index=index)

    def append_page(self, page: PageCopy) -> None:
        """Append a copied page after the current last page.

        Args:
            page (PageCopy): Page returned by another handle's `copy_page`.

        Raises:
            DocumentSealedError: If the document was already serialized.
        """
        if self.is_sealed:
            raise DocumentSealedError(name=self._name)
        self._document.insert_pdf(page.source._document, from_page=page.index, to_page=page.index)  # noqa: SLF001

    def serialize(self) -> bytes:
        """Finalize the document and return its bytes.

        Returns:
            bytes: Serialized PDF.
        """
        if self._serialized is None:
            self._serialized = self._document.tobytes(garbage=3, deflate=True)
        return self._serialized

    def close(self) -> None:
        """Release the underlying document."""
        if not self._document.is_closed:
            self._document.close()

    def __enter__(self) -> Self:
        """Return self for `with` blocks."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the document when leaving a `with` block."""
        self.close()


def inspect_pdf(path: Path, *, name: str | None = None) -> SourceInfo:
    """Validate a PDF file and report its page count and size.

    Args:
        path (Path): PDF file.
        name (str | None): Display name, defaults to the file name.

    Returns:
        SourceInfo: Validation report; `valid` is False with `error` set on failure.
    """
    display_name = name or path.name
    try:
        size_bytes = path.stat().st_size
        with PdfDocumentHandle.open_path(path, name=display_name) as handle:
            page_count = handle.page_count
    except (InvalidPdfError, OSError) as exc:
        logger.warning("PDF validation failed", extra={"source": display_name, "error": str(exc)})
        return SourceInfo(filename=display_name, valid=False, error=str(exc))

    return SourceInfo(filename=display_name, valid=True, page_count=page_count, size_bytes=size_bytes)
