"""The envelope every order-engine endpoint answers with.

Success (confirm shown):
{
    "code": 0,
    "message": "success",
    "kind": null,
    "data": {"order": {...}, "new_balance": "500.0000"},
    "timestamp": "2026-10-12T14:30:00+00:00",
    "request_id": "req_3f9a1c0b7d2e"
}

Failure (confirming an executed order):
{
    "code": 4006,
    "message": "Order 5 in state Executed/confirmed cannot be confirmed",
    "kind": "InvalidState",
    "data": null,
    ...
}

request_id is the one RequestLogMiddleware put on request.state, so the body
matches the X-Request-ID header and the access log line.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    kind: str | None = None
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=new_request_id)


def _request_id(request: Request | None) -> str:
    rid = getattr(request.state, "request_id", None) if request is not None else None
    return rid or new_request_id()


def success_response(data: Any = None, request: Request | None = None) -> ApiResponse:
    return ApiResponse(data=data, request_id=_request_id(request))


def error_response(
    code: int, message: str, kind: str | None = None, request: Request | None = None
) -> ApiResponse:
    return ApiResponse(
        code=code, message=message, kind=kind, data=None, request_id=_request_id(request)
    )
