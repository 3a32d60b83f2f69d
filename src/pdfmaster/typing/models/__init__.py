"""Core domain model exports."""

from pdfmaster.typing.models.pages import PageIndexSet, PageRange, format_page_list
from pdfmaster.typing.models.plan import OutputPlan, OutputPlanEntry, PageRef
from pdfmaster.typing.models.requests import (
    ExtractRangesRequest,
    MergeRequest,
    OperationRequest,
    RemovePagesRequest,
    SplitAtPointsRequest,
    SplitIndividualRequest,
    operation_request_adapter,
)
from pdfmaster.typing.models.results import (
    ArchiveInfo,
    ConversionResult,
    OperationResult,
    OutputDocument,
    OutputSummary,
    SourceInfo,
)

__all__ = [
    "ArchiveInfo",
    "ConversionResult",
    "ExtractRangesRequest",
    "MergeRequest",
    "OperationRequest",
    "OperationResult",
    "OutputDocument",
    "OutputPlan",
    "OutputPlanEntry",
    "OutputSummary",
    "PageIndexSet",
    "PageRange",
    "PageRef",
    "RemovePagesRequest",
    "SourceInfo",
    "SplitAtPointsRequest",
    "SplitIndividualRequest",
    "format_page_list",
    "operation_request_adapter",
]
