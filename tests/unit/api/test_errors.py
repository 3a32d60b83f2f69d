from __future__ import annotations

from pdfmaster.api.errors import error_payload, status_for_pipeline_error
from pdfmaster.exceptions import AssemblyError, InvalidRangeError


def test_error_payload_merges_extra_fields() -> None:
    payload = error_payload("Invalid PDF file", "bad", invalidFiles=[])

    assert payload == {"success": False, "error": "Invalid PDF file", "message": "bad", "invalidFiles": []}


def test_status_for_pipeline_error_separates_client_and_server_failures() -> None:
    assert status_for_pipeline_error(InvalidRangeError(token="3-1", start=3, end=1, minimum=1, maximum=3)) == 400
    assert status_for_pipeline_error(AssemblyError(filename="out.pdf", reason="boom")) == 500
