"""CLI entry point for pdfmaster."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from pdfmaster import __version__, logger
from pdfmaster.async_runner import run_async
from pdfmaster.dependencies import ensure_package_dependencies, ensure_server_dependencies
from pdfmaster.exceptions import PackageError
from pdfmaster.logging import configure_logging
from pdfmaster.operations import arun_operation
from pdfmaster.settings import Settings, get_settings
from pdfmaster.typing.enums import OperationKind
from pdfmaster.typing.models import operation_request_adapter

if TYPE_CHECKING:
    from pdfmaster.typing.models import OperationRequest

DEFAULT_OUTPUT_DIR = Path("results")
_PIPELINE_COMMANDS = frozenset({"merge", "remove-pages", "split", "extract", "split-individual"})


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-o", "--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR, dest="output_dir")


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="pdfmaster")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    merge_parser = subparsers.add_parser("merge", help="Merge PDFs in the given order")
    merge_parser.add_argument("input_paths", nargs="+", type=Path, metavar="INPUT")
    _add_output_argument(merge_parser)

    remove_parser = subparsers.add_parser("remove-pages", help="Remove pages such as '1,3,5-8'")
    remove_parser.add_argument("input_path", type=Path, metavar="INPUT")
    remove_parser.add_argument("--pages", required=True)
    _add_output_argument(remove_parser)

    split_parser = subparsers.add_parser("split", help="Split after each page such as '2,5'")
    split_parser.add_argument("input_path", type=Path, metavar="INPUT")
    split_parser.add_argument("--points", required=True, dest="split_points")
    _add_output_argument(split_parser)

    extract_parser = subparsers.add_parser("extract", help="Extract ranges such as '1-3,5-8' to separate PDFs")
    extract_parser.add_argument("input_path", type=Path, metavar="INPUT")
    extract_parser.add_argument("--ranges", required=True, dest="page_ranges")
    _add_output_argument(extract_parser)

    individual_parser = subparsers.add_parser("split-individual", help="Split into one PDF per page")
    individual_parser.add_argument("input_path", type=Path, metavar="INPUT")
    _add_output_argument(individual_parser)

    return parser


def _build_operation_request(args: argparse.Namespace) -> OperationRequest:
    """Build the typed operation request for a pipeline command.

    Args:
        args (argparse.Namespace): Parsed CLI args.

    Raises:
        ValueError: If the command is not a pipeline command.

    Returns:
        OperationRequest: Request variant selected by its `kind`.
    """
    match args.command:
        case "merge":
            payload = {"kind": OperationKind.MERGE, "source_paths": args.input_paths}
        case "remove-pages":
            payload = {"kind": OperationKind.REMOVE_PAGES, "source_path": args.input_path, "pages": args.pages}
        case "split":
            payload = {
                "kind": OperationKind.SPLIT_AT_POINTS,
                "source_path": args.input_path,
                "split_points": args.split_points,
            }
        case "extract":
            payload = {
                "kind": OperationKind.EXTRACT_RANGES,
                "source_path": args.input_path,
                "page_ranges": args.page_ranges,
            }
        case "split-individual":
            payload = {"kind": OperationKind.SPLIT_INDIVIDUAL, "source_path": args.input_path}
        case _:
            message = f"Unsupported command: {args.command}"
            raise ValueError(message)
    return operation_request_adapter.validate_python(payload)


def _serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the HTTP API with uvicorn.

    Returns:
        int: Exit code.
    """
    ensure_server_dependencies()

    import uvicorn  # noqa: PLC0415

    from pdfmaster.api import create_application  # noqa: PLC0415

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Starting HTTP server", extra={"host": host, "port": port})
    uvicorn.run(create_application(settings), host=host, port=port, log_config=None)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 1 for error, 130 when interrupted).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        try:
            return _serve(args, settings)
        except PackageError:
            logger.exception("Server failed")
            return 1

    if args.command not in _PIPELINE_COMMANDS:
        parser.print_help()
        return 0

    try:
        ensure_package_dependencies()
        request = _build_operation_request(args)
        result = run_async(arun_operation(request, output_dir=args.output_dir, settings=settings))
    except PackageError:
        logger.exception("Operation failed")
        return 1
    except KeyboardInterrupt:
        logger.info("Operation aborted by user")
        return 130
    except Exception:
        logger.exception("Unexpected error during operation")
        return 1

    logger.info(
        "Output written",
        extra={
            "output_path": str(result.output_path),
            "outputs": [output.filename for output in result.outputs],
        },
    )
    print(result.output_path)  # noqa: T201
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
