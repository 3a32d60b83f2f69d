from __future__ import annotations

from argparse import Namespace
from pathlib import Path

import pytest

from pdfmaster import cli
from pdfmaster.exceptions import OutOfBoundsError
from pdfmaster.settings import Settings
from pdfmaster.typing.enums import OperationKind
from pdfmaster.typing.models import (
    ExtractRangesRequest,
    MergeRequest,
    OperationResult,
    OutputSummary,
    RemovePagesRequest,
    SplitAtPointsRequest,
    SplitIndividualRequest,
)


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "1.0.0" in captured.out


@pytest.mark.parametrize(
    ("argv", "expected_type"),
    [
        (["merge", "a.pdf", "b.pdf"], MergeRequest),
        (["remove-pages", "a.pdf", "--pages", "1,3"], RemovePagesRequest),
        (["split", "a.pdf", "--points", "2"], SplitAtPointsRequest),
        (["extract", "a.pdf", "--ranges", "1-2"], ExtractRangesRequest),
        (["split-individual", "a.pdf"], SplitIndividualRequest),
    ],
)
def test_build_operation_request_per_command(argv: list[str], expected_type: type) -> None:
    args = cli.build_parser().parse_args(argv)

    request = cli._build_operation_request(args)

    assert isinstance(request, expected_type)
    assert args.output_dir == cli.DEFAULT_OUTPUT_DIR


def test_build_operation_request_keeps_merge_order_and_spec() -> None:
    merge_args = cli.build_parser().parse_args(["merge", "b.pdf", "a.pdf"])
    extract_args = cli.build_parser().parse_args(["extract", "a.pdf", "--ranges", "5-8,1-3"])

    merge_request = cli._build_operation_request(merge_args)
    extract_request = cli._build_operation_request(extract_args)

    assert merge_request.source_paths == (Path("b.pdf"), Path("a.pdf"))
    assert extract_request.page_ranges == "5-8,1-3"


def test_build_operation_request_rejects_unknown_command() -> None:
    with pytest.raises(ValueError, match="Unsupported command"):
        cli._build_operation_request(Namespace(command="rotate"))


def test_main_without_command_prints_help(mocker, capsys) -> None:
    mocker.patch("pdfmaster.cli.get_settings", return_value=Settings(log_json=False))

    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_main_runs_pipeline_and_prints_output(mocker, tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "merged.pdf"
    result = OperationResult(
        kind=OperationKind.MERGE,
        original_page_count=3,
        output_path=output_path,
        media_type="application/pdf",
        output_size=10,
        outputs=(OutputSummary(filename="merged.pdf", page_count=3, page_range="1-3"),),
    )
    mocker.patch("pdfmaster.cli.get_settings", return_value=Settings(log_json=False))
    mocker.patch("pdfmaster.cli.ensure_package_dependencies")
    mock_operation = mocker.patch("pdfmaster.cli.arun_operation")
    mocker.patch("pdfmaster.cli.run_async", return_value=result)

    exit_code = cli.main(["merge", "a.pdf", "b.pdf", "-o", str(tmp_path)])

    assert exit_code == 0
    request = mock_operation.call_args.args[0]
    assert isinstance(request, MergeRequest)
    assert mock_operation.call_args.kwargs["output_dir"] == tmp_path
    assert str(output_path) in capsys.readouterr().out


def test_main_returns_one_on_package_error(mocker) -> None:
    mocker.patch("pdfmaster.cli.get_settings", return_value=Settings(log_json=False))
    mocker.patch("pdfmaster.cli.ensure_package_dependencies")
    mocker.patch("pdfmaster.cli.arun_operation")
    mocker.patch(
        "pdfmaster.cli.run_async",
        side_effect=OutOfBoundsError(token="9", value=9, minimum=1, maximum=3),
    )

    assert cli.main(["remove-pages", "a.pdf", "--pages", "9"]) == 1


def test_main_returns_130_when_interrupted(mocker) -> None:
    mocker.patch("pdfmaster.cli.get_settings", return_value=Settings(log_json=False))
    mocker.patch("pdfmaster.cli.ensure_package_dependencies")
    mocker.patch("pdfmaster.cli.arun_operation")
    mocker.patch("pdfmaster.cli.run_async", side_effect=KeyboardInterrupt)

    assert cli.main(["split-individual", "a.pdf"]) == 130


def test_main_serve_reports_missing_dependencies(mocker) -> None:
    mocker.patch("pdfmaster.cli.get_settings", return_value=Settings(log_json=False))
    mocker.patch("pdfmaster.dependencies._is_module_available", return_value=False)

    assert cli.main(["serve"]) == 1
