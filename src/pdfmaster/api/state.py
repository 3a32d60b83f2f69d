"""Request-scoped accessors for application state."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from pdfmaster.janitor import TempFileJanitor
from pdfmaster.settings import Settings


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_janitor(request: Request) -> TempFileJanitor:
    """Return the application's temp file janitor."""
    return request.app.state.janitor


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
JanitorDep = Annotated[TempFileJanitor, Depends(get_janitor)]
