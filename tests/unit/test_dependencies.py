from __future__ import annotations

import pytest

from pdfmaster.dependencies import ensure_package_dependencies, ensure_server_dependencies
from pdfmaster.exceptions import DependencyError


def test_ensure_server_dependencies_succeeds(monkeypatch) -> None:
    monkeypatch.setattr("pdfmaster.dependencies._is_module_available", lambda module_name: True)
    ensure_server_dependencies()


def test_ensure_server_dependencies_raises(monkeypatch) -> None:
    monkeypatch.setattr("pdfmaster.dependencies._is_module_available", lambda module_name: False)
    with pytest.raises(DependencyError, match="serve"):
        ensure_server_dependencies()


def test_ensure_server_dependencies_names_import_packages(monkeypatch) -> None:
    monkeypatch.setattr("pdfmaster.dependencies._is_module_available", lambda module_name: module_name != "multipart")
    with pytest.raises(DependencyError) as exc_info:
        ensure_server_dependencies()
    assert exc_info.value.missing_package == ["python-multipart"]


def test_ensure_package_dependencies_succeeds(monkeypatch) -> None:
    monkeypatch.setattr("pdfmaster.dependencies._is_module_available", lambda module_name: True)
    ensure_package_dependencies()


def test_ensure_package_dependencies_raises(monkeypatch) -> None:
    monkeypatch.setattr("pdfmaster.dependencies._is_module_available", lambda module_name: False)
    with pytest.raises(DependencyError, match="pdf operations"):
        ensure_package_dependencies()
