"""Pytest marker auto-assignment by folder and shared PDF fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import fitz
import pytest

from pdfmaster import logger
from pdfmaster.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Callable


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


def build_pdf(page_count: int, *, label: str = "doc") -> bytes:
    """Return a PDF whose page `i` (1-based) carries the text `{label}-p{i}`."""
    document = fitz.open()
    try:
        for number in range(1, page_count + 1):
            page = document.new_page(width=200, height=200)
            page.insert_text((20, 100), f"{label}-p{number}", fontsize=12)
        return document.tobytes()
    finally:
        document.close()


def page_labels(data: bytes) -> list[str]:
    """Return the text marker of each page of a PDF, in page order."""
    with fitz.open(stream=data, filetype="pdf") as document:
        return [page.get_text().strip() for page in document]


@pytest.fixture
def pdf_bytes() -> Callable[..., bytes]:
    """Build labelled in-memory PDFs."""
    return build_pdf


@pytest.fixture
def pdf_file(tmp_path: Path) -> Callable[..., Path]:
    """Write labelled PDFs under the test's temp directory."""

    def _write(page_count: int, *, label: str = "doc", name: str | None = None) -> Path:
        path = tmp_path / (name or f"{label}.pdf")
        path.write_bytes(build_pdf(page_count, label=label))
        return path

    return _write


@pytest.fixture
def read_labels() -> Callable[[bytes], list[str]]:
    """Extract per-page text markers from PDF bytes."""
    return page_labels


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Return settings isolated to the test's temp directory."""
    return Settings(
        temp_dir=str(tmp_path / "temp"),
        log_json=False,
        cleanup_delay_seconds=3600.0,
        soffice_path=None,
    )
