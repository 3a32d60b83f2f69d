from __future__ import annotations

import subprocess  # noqa: S404
from typing import TYPE_CHECKING

import fitz
import pytest
from PIL import Image

from pdfmaster.converters import find_office_binary, images_to_pdf, office_to_pdf, placeholder_pdf
from pdfmaster.exceptions import ConversionError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pdfmaster.settings import Settings


def _image(path: Path, size: tuple[int, int], mode: str = "RGB") -> Path:
    Image.new(mode, size, color=0).save(path)
    return path


def test_images_to_pdf_sizes_each_page_to_its_image(tmp_path: Path) -> None:
    wide = _image(tmp_path / "wide.png", (300, 100), mode="RGBA")
    tall = _image(tmp_path / "tall.jpg", (50, 120))

    data = images_to_pdf([wide, tall], quality=70)

    with fitz.open(stream=data, filetype="pdf") as document:
        assert document.page_count == 2
        assert (document[0].rect.width, document[0].rect.height) == (300, 100)
        assert (document[1].rect.width, document[1].rect.height) == (50, 120)


def test_images_to_pdf_rejects_empty_and_unreadable_input(tmp_path: Path) -> None:
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"not an image")

    with pytest.raises(ConversionError, match="No images"):
        images_to_pdf([])
    with pytest.raises(ConversionError, match="broken.png"):
        images_to_pdf([broken])


def test_placeholder_pdf_renders_title_and_lines() -> None:
    data = placeholder_pdf("HELLO TITLE", ["first line", "second line"])

    with fitz.open(stream=data, filetype="pdf") as document:
        assert document.page_count == 1
        text = document[0].get_text()
    assert "HELLO TITLE" in text
    assert "second line" in text


def test_find_office_binary_prefers_configured_path(settings: Settings, mocker) -> None:
    mocker.patch("pdfmaster.converters.shutil.which", return_value="/usr/bin/soffice")

    assert find_office_binary(settings.model_copy(update={"soffice_path": "/opt/lo/soffice"})) == "/opt/lo/soffice"
    assert find_office_binary(settings) == "/usr/bin/soffice"


def test_office_to_pdf_falls_back_to_placeholder(settings: Settings, tmp_path: Path, mocker) -> None:
    mocker.patch("pdfmaster.converters.find_office_binary", return_value=None)
    source = tmp_path / "abc.docx"
    source.write_bytes(b"PK fake docx")

    result = office_to_pdf(source, tmp_path / "out", settings=settings, display_name="Report.docx")

    assert result.placeholder
    assert result.page_count == 1
    assert result.path == tmp_path / "out" / "abc.pdf"
    with fitz.open(str(result.path)) as document:
        assert "Report.docx" in document[0].get_text()


def test_office_to_pdf_runs_converter_binary(
    settings: Settings,
    tmp_path: Path,
    mocker,
    pdf_bytes: Callable[..., bytes],
) -> None:
    source = tmp_path / "deck.pptx"
    source.write_bytes(b"PK fake pptx")
    output_dir = tmp_path / "out"
    mocker.patch("pdfmaster.converters.find_office_binary", return_value="soffice")

    def _fake_run(command: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        _ = kwargs
        (output_dir / "deck.pdf").write_bytes(pdf_bytes(2))
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    run = mocker.patch("pdfmaster.converters.subprocess.run", side_effect=_fake_run)

    result = office_to_pdf(source, output_dir, settings=settings)

    assert not result.placeholder
    assert result.page_count == 2
    command = run.call_args.args[0]
    assert command[:2] == ["soffice", "--headless"]
    assert run.call_args.kwargs["timeout"] == settings.conversion_timeout


def test_office_to_pdf_reports_converter_failure(settings: Settings, tmp_path: Path, mocker) -> None:
    source = tmp_path / "doc.doc"
    source.write_bytes(b"fake")
    mocker.patch("pdfmaster.converters.find_office_binary", return_value="soffice")
    mocker.patch(
        "pdfmaster.converters.subprocess.run",
        return_value=subprocess.CompletedProcess(["soffice"], 1, stdout="", stderr="source file could not be loaded"),
    )

    with pytest.raises(ConversionError, match="could not be loaded"):
        office_to_pdf(source, tmp_path, settings=settings)


def test_office_to_pdf_reports_timeout(settings: Settings, tmp_path: Path, mocker) -> None:
    source = tmp_path / "doc.docx"
    source.write_bytes(b"fake")
    mocker.patch("pdfmaster.converters.find_office_binary", return_value="soffice")
    mocker.patch(
        "pdfmaster.converters.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="soffice", timeout=1),
    )

    with pytest.raises(ConversionError, match="timed out"):
        office_to_pdf(source, tmp_path, settings=settings)
