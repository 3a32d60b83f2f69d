"""HTTP routers."""

from pdfmaster.api.routes.conversions import router as conversions_router
from pdfmaster.api.routes.pdf_tools import router as pdf_tools_router
from pdfmaster.api.routes.system import router as system_router

__all__ = ["conversions_router", "pdf_tools_router", "system_router"]
