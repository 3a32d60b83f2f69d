"""Build output documents from an `OutputPlan`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfmaster.document import PdfDocumentHandle
from pdfmaster.exceptions import AssemblyError
from pdfmaster.logging import get_logger
from pdfmaster.typing.models import OutputDocument

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from pdfmaster.typing.models import OutputPlan, OutputPlanEntry
    from pdfmaster.typing.protocol import PageSink, PageSource

logger = get_logger(__name__)


def _create_target(filename: str) -> PageSink:
    return PdfDocumentHandle.create_empty(name=filename)


def assemble(
    entry: OutputPlanEntry,
    sources: Sequence[PageSource],
    *,
    target_factory: Callable[[str], PageSink] = _create_target,
) -> OutputDocument:
    """Build one output document by copying its pages in plan order.

    Args:
        entry (OutputPlanEntry): Planned output.
        sources (Sequence[PageSource]): Opened sources indexed by `PageRef.source_index`.
        target_factory (Callable[[str], PageSink]): Creates the empty target document.

    Raises:
        AssemblyError: If any page copy, append or the serialization fails.

    Returns:
        OutputDocument: Serialized output.
    """
    target = target_factory(entry.filename)
    try:
        for ref in entry.pages:
            target.append_page(sources[ref.source_index].copy_page(ref.page_index))
        data = target.serialize()
    except Exception as exc:
        logger.exception("Output assembly failed", extra={"output": entry.filename})
        raise AssemblyError(filename=entry.filename, reason=str(exc) or type(exc).__name__) from exc
    finally:
        target.close()

    logger.debug(
        "Assembled output",
        extra={"output": entry.filename, "pages": entry.page_count, "size_bytes": len(data)},
    )
    return OutputDocument(
        filename=entry.filename,
        page_count=entry.page_count,
        page_range=entry.page_range,
        data=data,
    )


def iter_assembled(
    plan: OutputPlan,
    sources: Sequence[PageSource],
    *,
    target_factory: Callable[[str], PageSink] = _create_target,
) -> Iterator[OutputDocument]:
    """Yield assembled outputs one at a time, in plan order.

    Args:
        plan (OutputPlan): Plan to assemble.
        sources (Sequence[PageSource]): Opened sources.
        target_factory (Callable[[str], PageSink]): Creates empty target documents.

    Yields:
        OutputDocument: Next output of the plan.
    """
    for entry in plan.entries:
        yield assemble(entry, sources, target_factory=target_factory)


def assemble_plan(
    plan: OutputPlan,
    sources: Sequence[PageSource],
    *,
    target_factory: Callable[[str], PageSink] = _create_target,
) -> list[OutputDocument]:
    """Assemble every output of a plan.

    Args:
        plan (OutputPlan): Plan to assemble.
        sources (Sequence[PageSource]): Opened sources.
        target_factory (Callable[[str], PageSink]): Creates empty target documents.

    Returns:
        list[OutputDocument]: Outputs in plan order.
    """
    return list(iter_assembled(plan, sources, target_factory=target_factory))
