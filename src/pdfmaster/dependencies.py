"""Runtime dependency checks for CLI commands and the HTTP server."""

from __future__ import annotations

import importlib.util

from pdfmaster.exceptions import DependencyError

PACKAGE_MODULES: dict[str, str] = {
    "pymupdf": "fitz",
    "pydantic": "pydantic",
    "structlog": "structlog",
}

SERVER_MODULES: dict[str, str] = {
    "fastapi": "fastapi",
    "uvicorn": "uvicorn",
    "python-multipart": "multipart",
    "pillow": "PIL",
}


def _is_module_available(module_name: str) -> bool:
    """Check whether a module can be imported.

    Args:
        module_name (str): Python module name.

    Returns:
        bool: True if import spec exists.
    """
    return importlib.util.find_spec(module_name) is not None


def _collect_missing_dependencies(modules_by_package: dict[str, str]) -> list[str]:
    """Collect missing packages for a module mapping.

    Args:
        modules_by_package (Mapping[str, str]): Mapping of package name -> import module.

    Returns:
        list[str]: Missing package names.
    """
    return [package for package, module in modules_by_package.items() if not _is_module_available(module)]


def ensure_package_dependencies() -> None:
    """Validate dependencies needed by the page-manipulation commands.

    Raises:
        DependencyError: If required runtime dependencies are missing.
    """
    missing = _collect_missing_dependencies(PACKAGE_MODULES)
    if missing:
        raise DependencyError(missing_package=missing, message="pdf operations")


def ensure_server_dependencies() -> None:
    """Validate dependencies needed by `pdfmaster serve`.

    Raises:
        DependencyError: If one or more required modules are missing.
    """
    missing = _collect_missing_dependencies({**PACKAGE_MODULES, **SERVER_MODULES})
    if missing:
        raise DependencyError(missing_package=missing, message="serve")
