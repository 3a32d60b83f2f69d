"""Page-manipulation processing: spec parsing, planning and assembly."""

from pdfmaster.processing.assembler import assemble, assemble_plan, iter_assembled
from pdfmaster.processing.page_ranges import parse_boundaries, parse_page_list, parse_range_list
from pdfmaster.processing.planner import (
    plan_extract_ranges,
    plan_merge,
    plan_remove_pages,
    plan_split_at_points,
    plan_split_individual,
)

__all__ = [
    "assemble",
    "assemble_plan",
    "iter_assembled",
    "parse_boundaries",
    "parse_page_list",
    "parse_range_list",
    "plan_extract_ranges",
    "plan_merge",
    "plan_remove_pages",
    "plan_split_at_points",
    "plan_split_individual",
]
