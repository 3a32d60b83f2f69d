"""Assembled outputs and operation results."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from pdfmaster.typing.enums import OperationKind


class OutputDocument(BaseModel):
    """Assembled PDF bytes for one plan entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filename: str
    page_count: int = Field(ge=1)
    page_range: str
    data: bytes = Field(repr=False)


class OutputSummary(BaseModel):
    """Reportable metadata of one produced output."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filename: str
    page_count: int
    page_range: str


class SourceInfo(BaseModel):
    """Validation report for one uploaded source."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filename: str
    valid: bool
    page_count: int = 0
    size_bytes: int = 0
    error: str | None = None


class ArchiveInfo(BaseModel):
    """Written archive description."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Path
    member_names: tuple[str, ...]
    size_bytes: int


class OperationResult(BaseModel):
    """Definite success result of one pipeline operation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: OperationKind
    original_page_count: int
    output_path: Path
    media_type: str
    output_size: int
    outputs: tuple[OutputSummary, ...]
    sources: tuple[SourceInfo, ...] = ()
    removed_pages: tuple[int, ...] = ()

    @property
    def output_count(self) -> int:
        """Return number of produced outputs."""
        return len(self.outputs)

    @property
    def total_output_pages(self) -> int:
        """Return the page total across outputs."""
        return sum(output.page_count for output in self.outputs)


class ConversionResult(BaseModel):
    """PDF produced from a non-PDF upload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Path
    size_bytes: int
    page_count: int
    placeholder: bool = Field(
        default=False,
        description="True when no converter binary was available and a summary page was produced instead.",
    )
