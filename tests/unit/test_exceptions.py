from __future__ import annotations

import pytest

from pdfmaster.exceptions import (
    AllPagesRemovedError,
    ArchiveError,
    AssemblyError,
    AsyncExecutionError,
    ConversionError,
    DependencyError,
    EmptyInputError,
    InvalidNumberError,
    InvalidPdfError,
    InvalidRangeError,
    MergeInputError,
    OutOfBoundsError,
    PackageError,
    PageSpecError,
    PipelineError,
    SettingsError,
    UploadError,
)
from pdfmaster.typing.enums import ErrorKind


def test_root_exception_hierarchy() -> None:
    for error in (
        SettingsError,
        AsyncExecutionError,
        DependencyError,
        ArchiveError,
        ConversionError,
        UploadError,
        PipelineError,
    ):
        assert issubclass(error, PackageError)
    for error in (EmptyInputError, InvalidNumberError, InvalidRangeError, OutOfBoundsError):
        assert issubclass(error, PageSpecError)
        assert issubclass(error, PipelineError)


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (InvalidPdfError(source="a.pdf", reason="bad"), ErrorKind.INVALID_PDF),
        (EmptyInputError(minimum=1, maximum=3), ErrorKind.EMPTY_INPUT),
        (InvalidNumberError(token="x", minimum=1, maximum=3), ErrorKind.INVALID_NUMBER),
        (InvalidRangeError(token="3-1", start=3, end=1, minimum=1, maximum=3), ErrorKind.INVALID_RANGE),
        (OutOfBoundsError(token="9", value=9, minimum=1, maximum=3), ErrorKind.OUT_OF_BOUNDS),
        (AllPagesRemovedError(removed_count=3, total_pages=3), ErrorKind.ALL_PAGES_REMOVED),
        (MergeInputError(file_count=1), ErrorKind.INSUFFICIENT_SOURCES),
        (AssemblyError(filename="a.pdf", reason="boom"), ErrorKind.ASSEMBLY_FAILED),
    ],
)
def test_pipeline_errors_expose_kind(error: PipelineError, kind: ErrorKind) -> None:
    assert error.kind == kind
    assert str(error)


def test_page_spec_error_detail_carries_token_and_bounds() -> None:
    error = OutOfBoundsError(token="2-9", value=9, minimum=1, maximum=5)

    assert error.detail() == {"token": "2-9", "value": 9, "minimum": 1, "maximum": 5}
    assert str(error) == "Page 9 in '2-9' is outside the valid range (1-5)"


def test_dependency_error_message_lists_packages() -> None:
    error = DependencyError(missing_package=["fastapi", "uvicorn"], message="serve")

    assert str(error) == "Missing runtime dependencies for 'serve': fastapi, uvicorn"
