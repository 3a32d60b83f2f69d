"""Output plans computed before any PDF bytes are produced."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pdfmaster.typing.enums import OperationKind


class PageRef(BaseModel):
    """Reference to one page of one source document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_index: int = Field(ge=0)
    page_index: int = Field(ge=0, description="Zero-based page index inside the source.")


class OutputPlanEntry(BaseModel):
    """One output document: ordered page references and naming metadata."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filename: str = Field(min_length=1)
    pages: tuple[PageRef, ...] = Field(min_length=1)
    start_page: int = Field(ge=1)
    end_page: int = Field(ge=1)
    page_range: str

    @property
    def page_count(self) -> int:
        """Return number of pages in the output."""
        return len(self.pages)


class OutputPlan(BaseModel):
    """Resolved, ordered description of every output of one operation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: OperationKind
    original_page_count: int = Field(ge=0)
    entries: tuple[OutputPlanEntry, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def check_unique_filenames(self) -> Self:
        """Reject plans whose outputs would share a filename."""
        filenames = [entry.filename for entry in self.entries]
        duplicates = sorted({name for name in filenames if filenames.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate output filenames: {', '.join(duplicates)}")
        return self

    @property
    def is_multi_output(self) -> bool:
        """Return whether outputs must be packaged into an archive."""
        return self.kind in {
            OperationKind.SPLIT_AT_POINTS,
            OperationKind.EXTRACT_RANGES,
            OperationKind.SPLIT_INDIVIDUAL,
        }
