"""HTTP layer."""

from pdfmaster.api.app import create_application

__all__ = ["create_application"]
