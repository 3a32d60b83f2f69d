"""Document interfaces used by the assembler."""

from __future__ import annotations

from typing import Protocol


class PageSource(Protocol):
    """Opened document whose pages can be copied."""

    @property
    def name(self) -> str:
        """Return the originating file name."""

    @property
    def page_count(self) -> int:
        """Return the number of pages."""

    def copy_page(self, index: int) -> object:
        """Copy one page.

        Args:
            index: Zero-based page index.

        Returns:
            object: Page object accepted by `PageSink.append_page`.
        """


class PageSink(Protocol):
    """Buildable document receiving copied pages in call order."""

    def append_page(self, page: object) -> None:
        """Append a copied page.

        Args:
            page: Page object returned by `PageSource.copy_page`.
        """

    def serialize(self) -> bytes:
        """Finalize the document.

        Returns:
            bytes: Serialized PDF.
        """

    def close(self) -> None:
        """Release document resources."""
