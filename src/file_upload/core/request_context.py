from __future__ import annotations

from uuid import uuid4

from fastapi import Request

REQUEST_ID_HEADERS = ("x-request-id", "x-correlation-id")


def get_request_id(request: Request | None) -> str:
    if request is None:
        return str(uuid4())
    header_values = (request.headers.get(header) for header in REQUEST_ID_HEADERS)
    return next((value for value in header_values if value), None) or str(uuid4())
