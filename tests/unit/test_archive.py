from __future__ import annotations

import zipfile
from typing import TYPE_CHECKING

import pytest

from pdfmaster.archive import partial_path, write_archive
from pdfmaster.exceptions import ArchiveError
from pdfmaster.typing.models import OutputDocument

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


def _document(filename: str, data: bytes = b"%PDF-1.7 fake") -> OutputDocument:
    return OutputDocument(filename=filename, page_count=1, page_range="1-1", data=data)


def test_write_archive_stores_members_in_order(tmp_path: Path) -> None:
    destination = tmp_path / "out.zip"

    info = write_archive([_document("b.pdf", b"B"), _document("a.pdf", b"A")], destination)

    assert info.member_names == ("b.pdf", "a.pdf")
    assert info.size_bytes == destination.stat().st_size
    with zipfile.ZipFile(destination) as archive:
        assert archive.namelist() == ["b.pdf", "a.pdf"]
        assert archive.read("a.pdf") == b"A"
        assert archive.getinfo("b.pdf").compress_type == zipfile.ZIP_DEFLATED
    assert not partial_path(destination).exists()


def test_write_archive_rejects_duplicate_names(tmp_path: Path) -> None:
    destination = tmp_path / "dup.zip"

    with pytest.raises(ArchiveError, match="Duplicate"):
        write_archive([_document("a.pdf"), _document("a.pdf")], destination)

    assert not destination.exists()
    assert not partial_path(destination).exists()


def test_write_archive_rejects_empty_input(tmp_path: Path) -> None:
    with pytest.raises(ArchiveError, match="No documents"):
        write_archive([], tmp_path / "empty.zip")


def test_write_archive_removes_partial_file_when_source_fails(tmp_path: Path) -> None:
    destination = tmp_path / "broken.zip"

    def _documents() -> Iterator[OutputDocument]:
        yield _document("a.pdf")
        raise RuntimeError("assembly exploded")

    with pytest.raises(RuntimeError, match="assembly exploded"):
        write_archive(_documents(), destination)

    assert not destination.exists()
    assert not partial_path(destination).exists()


def test_write_archive_wraps_io_errors(tmp_path: Path) -> None:
    destination = tmp_path / "missing-dir" / "out.zip"

    with pytest.raises(ArchiveError, match="Failed to write archive"):
        write_archive([_document("a.pdf")], destination)
