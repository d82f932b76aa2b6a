"""
Boards API Utilities.

Response builders shared by the Boards API handlers.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from aws_lambda_powertools.event_handler import Response, content_types

API_VERSION = "v1"


def current_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _meta(request_id: Optional[str]) -> Dict[str, Any]:
    return {
        "timestamp": current_timestamp(),
        "version": API_VERSION,
        "request_id": request_id,
    }


def create_success_response(
    data: Dict[str, Any], request_id: Optional[str] = None, status_code: int = 200
) -> Response:
    """Build a JSON response from a success payload."""
    body = dict(data)
    body["meta"] = _meta(request_id)
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body, default=str),
    )


def create_error_response(
    error_code: str,
    error_message: str,
    status_code: int,
    request_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Response:
    """
    Build a JSON error response.

    The body carries the machine-readable ``error`` code, a human message and
    any structured detail fields.
    """
    body: Dict[str, Any] = {"error": error_code, "message": error_message}
    if details:
        body.update(details)
    body["meta"] = _meta(request_id)
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body, default=str),
    )
