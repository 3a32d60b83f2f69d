"""Package exceptions."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import ClassVar

from pdfmaster.typing.enums import ErrorKind


class PackageError(Exception):
    """Root exception for the package."""


class PipelineError(PackageError):
    """Base for typed errors surfaced by the page-manipulation pipeline."""

    kind: ClassVar[ErrorKind]

    def detail(self) -> dict[str, object]:
        """Return structured error detail for user-facing payloads.

        Returns:
            dict[str, object]: Error fields keyed by name.
        """
        return asdict(self)  # type: ignore[call-overload]


class PageSpecError(PipelineError):
    """Raised when a user-supplied page specification cannot be resolved."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class AsyncExecutionError(PackageError):
    """Raised when an async operation fails in compatibility runner."""

    result: BaseException
    message: str = "Async operation failed"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.result}"


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


@dataclass(frozen=True)
class InvalidPdfError(PipelineError):
    """Raised when a buffer cannot be opened as a PDF document."""

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_PDF

    source: str
    reason: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Invalid PDF file '{self.source}': {self.reason}"


@dataclass(frozen=True)
class EmptyInputError(PageSpecError):
    """Raised when a page specification is empty."""

    kind: ClassVar[ErrorKind] = ErrorKind.EMPTY_INPUT

    minimum: int
    maximum: int

    def __str__(self) -> str:
        """Return error message payload."""
        return f"No pages specified: expected page numbers between {self.minimum} and {self.maximum}"


@dataclass(frozen=True)
class InvalidNumberError(PageSpecError):
    """Raised when a page specification token is not a number."""

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_NUMBER

    token: str
    minimum: int
    maximum: int

    def __str__(self) -> str:
        """Return error message payload."""
        return (
            f"Invalid page number '{self.token}': expected an integer between {self.minimum} and {self.maximum}"
        )


@dataclass(frozen=True)
class InvalidRangeError(PageSpecError):
    """Raised when a range token has its start after its end."""

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_RANGE

    token: str
    start: int
    end: int
    minimum: int
    maximum: int

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Invalid range '{self.token}': start {self.start} is greater than end {self.end}"


@dataclass(frozen=True)
class OutOfBoundsError(PageSpecError):
    """Raised when a resolved page lies outside the document."""

    kind: ClassVar[ErrorKind] = ErrorKind.OUT_OF_BOUNDS

    token: str
    value: int
    minimum: int
    maximum: int

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Page {self.value} in '{self.token}' is outside the valid range ({self.minimum}-{self.maximum})"


@dataclass(frozen=True)
class AllPagesRemovedError(PipelineError):
    """Raised when a removal would leave a document without pages."""

    kind: ClassVar[ErrorKind] = ErrorKind.ALL_PAGES_REMOVED

    removed_count: int
    total_pages: int

    def __str__(self) -> str:
        """Return error message payload."""
        return (
            f"Cannot remove all pages from PDF: {self.removed_count} of {self.total_pages} pages "
            "selected for removal"
        )


@dataclass(frozen=True)
class MergeInputError(PipelineError):
    """Raised when a merge is requested with too few source documents."""

    kind: ClassVar[ErrorKind] = ErrorKind.INSUFFICIENT_SOURCES

    file_count: int
    minimum: int = 2

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Please provide at least {self.minimum} PDF files to merge, got {self.file_count}"


@dataclass(frozen=True)
class AssemblyError(PipelineError):
    """Raised when building an output document fails after validation passed."""

    kind: ClassVar[ErrorKind] = ErrorKind.ASSEMBLY_FAILED

    filename: str
    reason: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Failed to assemble '{self.filename}': {self.reason}"


@dataclass(frozen=True)
class PageIndexOutOfRangeError(PackageError):
    """Raised when a zero-based page index is not inside a document."""

    index: int
    page_count: int

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Page index {self.index} out of range for document with {self.page_count} pages"


@dataclass(frozen=True)
class DocumentSealedError(PackageError):
    """Raised when a serialized document is mutated."""

    name: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Document '{self.name}' was already serialized and cannot be modified"


@dataclass(frozen=True)
class ArchiveError(PackageError):
    """Raised when the output archive cannot be written."""

    message: str
    path: str | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.path}" if self.path else self.message


@dataclass(frozen=True)
class ConversionError(PackageError):
    """Raised when converting an upload to PDF fails."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class UploadError(PackageError):
    """Raised when an upload is rejected before processing."""

    message: str
    status_code: int = 400
    filename: str | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.filename}" if self.filename else self.message
