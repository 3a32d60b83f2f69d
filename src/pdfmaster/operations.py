"""Operation pipeline: open sources, resolve page specs, plan, assemble, write."""

from __future__ import annotations

import time
import uuid
from contextlib import ExitStack
from typing import TYPE_CHECKING

from pdfmaster.archive import write_archive
from pdfmaster.async_runner import run_in_worker
from pdfmaster.document import PdfDocumentHandle, inspect_pdf
from pdfmaster.logging import get_logger
from pdfmaster.processing import (
    assemble_plan,
    iter_assembled,
    parse_boundaries,
    parse_page_list,
    parse_range_list,
    plan_extract_ranges,
    plan_merge,
    plan_remove_pages,
    plan_split_at_points,
    plan_split_individual,
)
from pdfmaster.settings import get_settings
from pdfmaster.typing.enums import OperationKind
from pdfmaster.typing.models import (
    ExtractRangesRequest,
    MergeRequest,
    OperationResult,
    OutputSummary,
    RemovePagesRequest,
    SourceInfo,
    SplitAtPointsRequest,
    SplitIndividualRequest,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pdfmaster.settings import Settings
    from pdfmaster.typing.models import OperationRequest, OutputPlan

logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
ZIP_MEDIA_TYPE = "application/zip"

OUTPUT_PREFIXES: dict[OperationKind, str] = {
    OperationKind.MERGE: "merged",
    OperationKind.REMOVE_PAGES: "removed-pages",
    OperationKind.SPLIT_AT_POINTS: "split-pdf",
    OperationKind.EXTRACT_RANGES: "extracted-pages",
    OperationKind.SPLIT_INDIVIDUAL: "individual-pages",
}


def output_filename(kind: OperationKind, *, archive: bool) -> str:
    """Return a unique output file name for an operation.

    Args:
        kind (OperationKind): Operation producing the file.
        archive (bool): Whether the output is a ZIP archive.

    Returns:
        str: Name such as `split-pdf-<uuid4>.zip`.
    """
    extension = "zip" if archive else "pdf"
    return f"{OUTPUT_PREFIXES[kind]}-{uuid.uuid4()}.{extension}"


def validate_sources(paths: Sequence[Path], names: Sequence[str] | None = None) -> list[SourceInfo]:
    """Report page count, size and validity of each source file.

    Args:
        paths (Sequence[Path]): Source files.
        names (Sequence[str] | None): Display names aligned with `paths`.

    Returns:
        list[SourceInfo]: One report per file, in input order.
    """
    display_names = list(names) if names is not None else [path.name for path in paths]
    return [inspect_pdf(path, name=name) for path, name in zip(paths, display_names, strict=True)]


def _source_names(request: OperationRequest) -> list[str]:
    if isinstance(request, MergeRequest):
        if request.source_names is not None:
            return list(request.source_names)
        return [path.name for path in request.source_paths]
    return [request.source_path.name]


def _source_paths(request: OperationRequest) -> list[Path]:
    if isinstance(request, MergeRequest):
        return list(request.source_paths)
    return [request.source_path]


def _build_plan(request: OperationRequest, sources: Sequence[PdfDocumentHandle]) -> tuple[OutputPlan, tuple[int, ...]]:
    """Resolve the request's page spec against its sources and plan outputs.

    Returns:
        tuple[OutputPlan, tuple[int, ...]]: Plan and the removed pages, if any.
    """
    if isinstance(request, MergeRequest):
        return plan_merge([source.page_count for source in sources]), ()

    total_pages = sources[0].page_count
    match request:
        case RemovePagesRequest():
            removed = parse_page_list(request.pages, total_pages)
            return plan_remove_pages(total_pages, removed), removed.pages
        case SplitAtPointsRequest():
            return plan_split_at_points(total_pages, parse_boundaries(request.split_points, total_pages)), ()
        case ExtractRangesRequest():
            return plan_extract_ranges(total_pages, parse_range_list(request.page_ranges, total_pages)), ()
        case SplitIndividualRequest():
            return plan_split_individual(total_pages), ()

    message = f"Unsupported operation request: {type(request).__name__}"
    raise TypeError(message)


def _write_single(plan: OutputPlan, sources: Sequence[PdfDocumentHandle], destination: Path) -> None:
    (document,) = assemble_plan(plan, sources)
    try:
        destination.write_bytes(document.data)
    except BaseException:
        destination.unlink(missing_ok=True)
        raise


def run_operation(
    request: OperationRequest,
    *,
    output_dir: Path,
    settings: Settings | None = None,
) -> OperationResult:
    """Run one page-manipulation operation end to end.

    Every source is opened and every page spec is resolved before any output
    is built. A single output is written as a PDF, several outputs are
    streamed into one ZIP archive. Sources are closed whatever the outcome.

    Args:
        request (OperationRequest): Typed operation request.
        output_dir (Path): Directory receiving the output file.
        settings (Settings | None): Runtime settings, defaults to `get_settings()`.

    Raises:
        TypeError: If the request type is unknown.

    Returns:
        OperationResult: Output location and per-output metadata.
    """
    config = settings or get_settings()
    output_dir.mkdir(parents=True, exist_ok=True)
    started = time.perf_counter()

    paths = _source_paths(request)
    names = _source_names(request)

    with ExitStack() as stack:
        sources = [
            stack.enter_context(PdfDocumentHandle.open_path(path, name=name))
            for path, name in zip(paths, names, strict=True)
        ]
        source_infos = tuple(
            SourceInfo(filename=source.name, valid=True, page_count=source.page_count, size_bytes=path.stat().st_size)
            for source, path in zip(sources, paths, strict=True)
        )

        plan, removed_pages = _build_plan(request, sources)
        archive = plan.is_multi_output
        destination = output_dir / output_filename(plan.kind, archive=archive)

        if archive:
            write_archive(iter_assembled(plan, sources), destination, compress_level=config.zip_compress_level)
        else:
            _write_single(plan, sources, destination)

    result = OperationResult(
        kind=plan.kind,
        original_page_count=plan.original_page_count,
        output_path=destination,
        media_type=ZIP_MEDIA_TYPE if archive else PDF_MEDIA_TYPE,
        output_size=destination.stat().st_size,
        outputs=tuple(
            OutputSummary(filename=entry.filename, page_count=entry.page_count, page_range=entry.page_range)
            for entry in plan.entries
        ),
        sources=source_infos,
        removed_pages=removed_pages,
    )
    logger.info(
        "Operation completed",
        extra={
            "operation": plan.kind.to_str(),
            "sources": len(sources),
            "original_pages": result.original_page_count,
            "outputs": result.output_count,
            "output": destination.name,
            "output_size": result.output_size,
            "duration_seconds": round(time.perf_counter() - started, 3),
        },
    )
    return result


async def arun_operation(
    request: OperationRequest,
    *,
    output_dir: Path,
    settings: Settings | None = None,
) -> OperationResult:
    """Run `run_operation` in a worker thread.

    Args:
        request (OperationRequest): Typed operation request.
        output_dir (Path): Directory receiving the output file.
        settings (Settings | None): Runtime settings.

    Returns:
        OperationResult: Output location and per-output metadata.
    """
    return await run_in_worker(run_operation, request, output_dir=output_dir, settings=settings)
