"""Resolved page selections."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PageRange(BaseModel):
    """Inclusive 1-based page range."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: int = Field(ge=1)
    end: int = Field(ge=1)

    @model_validator(mode="after")
    def check_order(self) -> Self:
        """Reject ranges whose start is after the end."""
        if self.start > self.end:
            raise ValueError(f"range start {self.start} is greater than end {self.end}")
        return self

    @property
    def page_count(self) -> int:
        """Return number of pages covered by the range."""
        return self.end - self.start + 1

    @property
    def label(self) -> str:
        """Return `start-end` label."""
        return f"{self.start}-{self.end}"


class PageIndexSet(BaseModel):
    """Ascending, duplicate-free 1-based page numbers within a document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_pages: int = Field(ge=1)
    pages: tuple[int, ...]

    @model_validator(mode="after")
    def check_members(self) -> Self:
        """Validate bounds and ascending order of members."""
        if any(page < 1 or page > self.total_pages for page in self.pages):
            raise ValueError(f"pages must lie within 1-{self.total_pages}")
        if any(left >= right for left, right in zip(self.pages, self.pages[1:], strict=False)):
            raise ValueError("pages must be strictly ascending")
        return self

    def __len__(self) -> int:
        """Return number of selected pages."""
        return len(self.pages)

    def __contains__(self, page: object) -> bool:
        """Return whether the 1-based page is selected."""
        return page in self.pages

    def complement(self) -> tuple[int, ...]:
        """Return the unselected pages in ascending order.

        Returns:
            tuple[int, ...]: Pages of `1..total_pages` not in this set.
        """
        selected = set(self.pages)
        return tuple(page for page in range(1, self.total_pages + 1) if page not in selected)


def format_page_list(pages: tuple[int, ...] | list[int]) -> str:
    """Collapse ascending page numbers into a compact label.

    Args:
        pages (tuple[int, ...] | list[int]): Ascending page numbers.

    Returns:
        str: Label such as `1-3,5,7-8`.
    """
    if not pages:
        return ""

    parts: list[str] = []
    run_start = previous = pages[0]
    for page in pages[1:]:
        if page == previous + 1:
            previous = page
            continue
        parts.append(str(run_start) if run_start == previous else f"{run_start}-{previous}")
        run_start = previous = page
    parts.append(str(run_start) if run_start == previous else f"{run_start}-{previous}")
    return ",".join(parts)
