from __future__ import annotations

import pytest

from pdfmaster.exceptions import AllPagesRemovedError, MergeInputError
from pdfmaster.processing.planner import (
    MERGED_FILENAME,
    REMOVED_PAGES_FILENAME,
    plan_extract_ranges,
    plan_merge,
    plan_remove_pages,
    plan_split_at_points,
    plan_split_individual,
)
from pdfmaster.typing.enums import OperationKind
from pdfmaster.typing.models import OutputPlanEntry, PageIndexSet, PageRange


def _refs(entry: OutputPlanEntry) -> list[tuple[int, int]]:
    return [(ref.source_index, ref.page_index) for ref in entry.pages]


def test_plan_merge_concatenates_sources_in_order() -> None:
    plan = plan_merge([2, 1, 3])

    (entry,) = plan.entries
    assert plan.kind == OperationKind.MERGE
    assert plan.original_page_count == 6
    assert entry.filename == MERGED_FILENAME
    assert entry.page_range == "1-6"
    assert _refs(entry) == [(0, 0), (0, 1), (1, 0), (2, 0), (2, 1), (2, 2)]


@pytest.mark.parametrize("page_counts", [[], [4]])
def test_plan_merge_requires_two_sources(page_counts: list[int]) -> None:
    with pytest.raises(MergeInputError, match="at least 2"):
        plan_merge(page_counts)


def test_plan_remove_pages_keeps_complement_in_order() -> None:
    plan = plan_remove_pages(6, PageIndexSet(total_pages=6, pages=(2, 5)))

    (entry,) = plan.entries
    assert entry.filename == REMOVED_PAGES_FILENAME
    assert [ref.page_index + 1 for ref in entry.pages] == [1, 3, 4, 6]
    assert entry.page_range == "1,3-4,6"
    assert plan.original_page_count == 6


def test_plan_remove_pages_rejects_removing_every_page() -> None:
    with pytest.raises(AllPagesRemovedError) as exc_info:
        plan_remove_pages(3, PageIndexSet(total_pages=3, pages=(1, 2, 3)))

    assert exc_info.value.total_pages == 3


def test_plan_split_at_points_covers_document_exactly_once() -> None:
    plan = plan_split_at_points(10, [3, 7])

    assert [entry.filename for entry in plan.entries] == [
        "part-1-pages-1-3.pdf",
        "part-2-pages-4-7.pdf",
        "part-3-pages-8-10.pdf",
    ]
    covered = [ref.page_index for entry in plan.entries for ref in entry.pages]
    assert covered == list(range(10))
    assert sum(entry.page_count for entry in plan.entries) == 10


def test_plan_split_at_points_deduplicates_unsorted_boundaries() -> None:
    plan = plan_split_at_points(5, [4, 2, 2])

    assert [(entry.start_page, entry.end_page) for entry in plan.entries] == [(1, 2), (3, 4), (5, 5)]


def test_plan_extract_ranges_builds_independent_outputs() -> None:
    plan = plan_extract_ranges(8, [PageRange(start=5, end=6), PageRange(start=1, end=3), PageRange(start=2, end=4)])

    assert [entry.filename for entry in plan.entries] == ["pages-5-6.pdf", "pages-1-3.pdf", "pages-2-4.pdf"]
    assert [entry.page_range for entry in plan.entries] == ["5-6", "1-3", "2-4"]
    assert [ref.page_index for ref in plan.entries[2].pages] == [1, 2, 3]


def test_plan_extract_ranges_suffixes_repeated_ranges() -> None:
    same = PageRange(start=1, end=2)
    plan = plan_extract_ranges(4, [same, same, same])

    assert [entry.filename for entry in plan.entries] == ["pages-1-2.pdf", "pages-1-2-2.pdf", "pages-1-2-3.pdf"]


def test_plan_split_individual_emits_one_page_per_output() -> None:
    plan = plan_split_individual(3)

    assert [entry.filename for entry in plan.entries] == ["page-1.pdf", "page-2.pdf", "page-3.pdf"]
    assert [entry.page_range for entry in plan.entries] == ["Page 1", "Page 2", "Page 3"]
    assert all(entry.page_count == 1 for entry in plan.entries)
    assert plan.is_multi_output
