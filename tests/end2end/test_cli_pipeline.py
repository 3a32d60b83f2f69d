from __future__ import annotations

import sys
import zipfile
from pathlib import Path
from subprocess import run as subprocess_run  # noqa: S404


def _run_cli(*args: str, cwd: Path):
    return subprocess_run(  # noqa: S603
        [sys.executable, "-m", "pdfmaster.cli", *args],
        capture_output=True,
        text=True,
        check=False,
        cwd=cwd,
    )


def test_cli_merge_writes_merged_pdf(tmp_path: Path, pdf_bytes, read_labels) -> None:
    (tmp_path / "a.pdf").write_bytes(pdf_bytes(1, label="a"))
    (tmp_path / "b.pdf").write_bytes(pdf_bytes(2, label="b"))

    result = _run_cli("merge", "b.pdf", "a.pdf", "-o", "out", cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    output_path = Path(result.stdout.strip().splitlines()[-1])
    if not output_path.is_absolute():
        output_path = tmp_path / output_path
    assert read_labels(output_path.read_bytes()) == ["b-p1", "b-p2", "a-p1"]


def test_cli_split_writes_archive(tmp_path: Path, pdf_bytes) -> None:
    (tmp_path / "doc.pdf").write_bytes(pdf_bytes(3))

    result = _run_cli("split", "doc.pdf", "--points", "2", "-o", "out", cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    archives = list((tmp_path / "out").glob("split-pdf-*.zip"))
    assert len(archives) == 1
    with zipfile.ZipFile(archives[0]) as archive:
        assert archive.namelist() == ["part-1-pages-1-2.pdf", "part-2-pages-3-3.pdf"]


def test_cli_reports_invalid_page_spec(tmp_path: Path, pdf_bytes) -> None:
    (tmp_path / "doc.pdf").write_bytes(pdf_bytes(2))

    result = _run_cli("remove-pages", "doc.pdf", "--pages", "7", "-o", "out", cwd=tmp_path)

    assert result.returncode == 1
    assert not list((tmp_path / "out").glob("*.pdf"))
