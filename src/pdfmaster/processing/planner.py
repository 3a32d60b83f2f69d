"""Output planning: which source pages go into which output document.

Planning works on page counts only. The resulting `OutputPlan` is immutable and
carries its page references in final output order, so assembly is a single
pass that never reorders.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfmaster.exceptions import AllPagesRemovedError, MergeInputError
from pdfmaster.typing.enums import OperationKind
from pdfmaster.typing.models import OutputPlan, OutputPlanEntry, PageRef, format_page_list

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pdfmaster.typing.models import PageIndexSet, PageRange

MERGED_FILENAME = "merged.pdf"
REMOVED_PAGES_FILENAME = "removed-pages.pdf"
_MIN_MERGE_SOURCES = 2


def _page_refs(first_page: int, last_page: int, *, source_index: int = 0) -> tuple[PageRef, ...]:
    """Build references for 1-based pages `first_page..last_page`."""
    return tuple(
        PageRef(source_index=source_index, page_index=page - 1) for page in range(first_page, last_page + 1)
    )


def plan_merge(page_counts: Sequence[int]) -> OutputPlan:
    """Plan the concatenation of every page of every source.

    Args:
        page_counts (Sequence[int]): Page count per source, in merge order.

    Raises:
        MergeInputError: If fewer than two sources are supplied.

    Returns:
        OutputPlan: Single-entry plan.
    """
    if len(page_counts) < _MIN_MERGE_SOURCES:
        raise MergeInputError(file_count=len(page_counts), minimum=_MIN_MERGE_SOURCES)

    pages = tuple(
        ref
        for source_index, page_count in enumerate(page_counts)
        for ref in _page_refs(1, page_count, source_index=source_index)
    )
    total = len(pages)
    entry = OutputPlanEntry(
        filename=MERGED_FILENAME,
        pages=pages,
        start_page=1,
        end_page=total,
        page_range=f"1-{total}",
    )
    return OutputPlan(kind=OperationKind.MERGE, original_page_count=total, entries=(entry,))


def plan_remove_pages(total_pages: int, removed: PageIndexSet) -> OutputPlan:
    """Plan a copy of the document without the removed pages.

    Args:
        total_pages (int): Source page count.
        removed (PageIndexSet): Pages to drop.

    Raises:
        AllPagesRemovedError: If no page would remain.

    Returns:
        OutputPlan: Single-entry plan keeping the original relative order.
    """
    if len(removed) >= total_pages:
        raise AllPagesRemovedError(removed_count=len(removed), total_pages=total_pages)

    kept = removed.complement()
    entry = OutputPlanEntry(
        filename=REMOVED_PAGES_FILENAME,
        pages=tuple(PageRef(source_index=0, page_index=page - 1) for page in kept),
        start_page=kept[0],
        end_page=kept[-1],
        page_range=format_page_list(kept),
    )
    return OutputPlan(kind=OperationKind.REMOVE_PAGES, original_page_count=total_pages, entries=(entry,))


def plan_split_at_points(total_pages: int, boundaries: Sequence[int]) -> OutputPlan:
    """Plan contiguous segments ending at each boundary and at the last page.

    Args:
        total_pages (int): Source page count.
        boundaries (Sequence[int]): Pages after which to split, each `< total_pages`.

    Returns:
        OutputPlan: One entry per segment, named `part-{n}-pages-{start}-{end}.pdf`.
    """
    breakpoints = sorted({*boundaries, total_pages})

    entries: list[OutputPlanEntry] = []
    start = 1
    for number, end in enumerate(breakpoints, start=1):
        entries.append(
            OutputPlanEntry(
                filename=f"part-{number}-pages-{start}-{end}.pdf",
                pages=_page_refs(start, end),
                start_page=start,
                end_page=end,
                page_range=f"{start}-{end}",
            ),
        )
        start = end + 1

    return OutputPlan(
        kind=OperationKind.SPLIT_AT_POINTS,
        original_page_count=total_pages,
        entries=tuple(entries),
    )


def plan_extract_ranges(total_pages: int, ranges: Sequence[PageRange]) -> OutputPlan:
    """Plan one independent output per requested range.

    Ranges keep the caller's order and may overlap. A range requested more
    than once gets a `-{k}` suffix from its second copy on.

    Args:
        total_pages (int): Source page count.
        ranges (Sequence[PageRange]): Validated ranges.

    Returns:
        OutputPlan: One entry per range, named `pages-{start}-{end}.pdf`.
    """
    seen: dict[str, int] = {}
    entries: list[OutputPlanEntry] = []
    for page_range in ranges:
        stem = f"pages-{page_range.start}-{page_range.end}"
        seen[stem] = seen.get(stem, 0) + 1
        filename = f"{stem}.pdf" if seen[stem] == 1 else f"{stem}-{seen[stem]}.pdf"
        entries.append(
            OutputPlanEntry(
                filename=filename,
                pages=_page_refs(page_range.start, page_range.end),
                start_page=page_range.start,
                end_page=page_range.end,
                page_range=page_range.label,
            ),
        )

    return OutputPlan(
        kind=OperationKind.EXTRACT_RANGES,
        original_page_count=total_pages,
        entries=tuple(entries),
    )


def plan_split_individual(total_pages: int) -> OutputPlan:
    """Plan one single-page output per page.

    Args:
        total_pages (int): Source page count.

    Returns:
        OutputPlan: Entries named `page-{n}.pdf`, in page order.
    """
    entries = tuple(
        OutputPlanEntry(
            filename=f"page-{page}.pdf",
            pages=_page_refs(page, page),
            start_page=page,
            end_page=page,
            page_range=f"Page {page}",
        )
        for page in range(1, total_pages + 1)
    )
    return OutputPlan(kind=OperationKind.SPLIT_INDIVIDUAL, original_page_count=total_pages, entries=entries)
