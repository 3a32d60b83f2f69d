"""Typing-centric domain modules."""

from pdfmaster.typing.enums import ErrorKind, OperationKind, SplitType, UploadKind
from pdfmaster.typing.models import (
    ArchiveInfo,
    ConversionResult,
    ExtractRangesRequest,
    MergeRequest,
    OperationRequest,
    OperationResult,
    OutputDocument,
    OutputPlan,
    OutputPlanEntry,
    OutputSummary,
    PageIndexSet,
    PageRange,
    PageRef,
    RemovePagesRequest,
    SourceInfo,
    SplitAtPointsRequest,
    SplitIndividualRequest,
)
from pdfmaster.typing.protocol import PageSink, PageSource

__all__ = [
    "ArchiveInfo",
    "ConversionResult",
    "ErrorKind",
    "ExtractRangesRequest",
    "MergeRequest",
    "OperationKind",
    "OperationRequest",
    "OperationResult",
    "OutputDocument",
    "OutputPlan",
    "OutputPlanEntry",
    "OutputSummary",
    "PageIndexSet",
    "PageRange",
    "PageRef",
    "PageSink",
    "PageSource",
    "RemovePagesRequest",
    "SourceInfo",
    "SplitAtPointsRequest",
    "SplitIndividualRequest",
    "SplitType",
    "UploadKind",
]
