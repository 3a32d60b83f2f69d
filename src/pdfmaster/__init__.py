"""pdfmaster package."""

from pdfmaster.async_runner import run_async
from pdfmaster.exceptions import (
    AllPagesRemovedError,
    ArchiveError,
    AssemblyError,
    AsyncExecutionError,
    ConversionError,
    DependencyError,
    EmptyInputError,
    InvalidNumberError,
    InvalidPdfError,
    InvalidRangeError,
    OutOfBoundsError,
    PackageError,
    PageSpecError,
    PipelineError,
    SettingsError,
    UploadError,
)
from pdfmaster.logging import configure_logging, get_logger
from pdfmaster.settings import Settings, get_settings

__version__ = "1.0.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("pdfmaster")

__all__ = [
    "AllPagesRemovedError",
    "ArchiveError",
    "AssemblyError",
    "AsyncExecutionError",
    "ConversionError",
    "DependencyError",
    "EmptyInputError",
    "InvalidNumberError",
    "InvalidPdfError",
    "InvalidRangeError",
    "OutOfBoundsError",
    "PackageError",
    "PageSpecError",
    "PipelineError",
    "Settings",
    "SettingsError",
    "UploadError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "run_async",
]
