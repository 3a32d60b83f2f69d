"""Operation requests: one typed variant per operation kind."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from pdfmaster.typing.enums import OperationKind


class MergeRequest(BaseModel):
    """Concatenate every page of every source in the supplied order."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[OperationKind.MERGE] = OperationKind.MERGE
    source_paths: tuple[Path, ...] = Field(min_length=1)
    source_names: tuple[str, ...] | None = Field(
        default=None,
        description="Display names matching `source_paths`, e.g. original upload names.",
    )


class RemovePagesRequest(BaseModel):
    """Drop the pages named by a page spec such as `1,3,5-8`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[OperationKind.REMOVE_PAGES] = OperationKind.REMOVE_PAGES
    source_path: Path
    pages: str


class SplitAtPointsRequest(BaseModel):
    """Split after each boundary page of a spec such as `2,5`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[OperationKind.SPLIT_AT_POINTS] = OperationKind.SPLIT_AT_POINTS
    source_path: Path
    split_points: str


class ExtractRangesRequest(BaseModel):
    """Extract each range of a spec such as `1-3,5-8` into its own document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[OperationKind.EXTRACT_RANGES] = OperationKind.EXTRACT_RANGES
    source_path: Path
    page_ranges: str


class SplitIndividualRequest(BaseModel):
    """Split into one single-page document per page."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[OperationKind.SPLIT_INDIVIDUAL] = OperationKind.SPLIT_INDIVIDUAL
    source_path: Path


OperationRequest = Annotated[
    MergeRequest | RemovePagesRequest | SplitAtPointsRequest | ExtractRangesRequest | SplitIndividualRequest,
    Field(discriminator="kind"),
]

operation_request_adapter: TypeAdapter[OperationRequest] = TypeAdapter(OperationRequest)
