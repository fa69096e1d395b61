"""Response builders shared by the handlers."""

import json
from typing import Any

from fastapi import Response

from core.exceptions import ProxyError

JSON_MEDIA_TYPE = "application/json"


def json_response(content: dict[str, Any], status_code: int, headers: dict[str, str]) -> Response:
    """Serialize content as compact JSON."""
    return Response(
        content=json.dumps(content, separators=(",", ":")),
        status_code=status_code,
        headers=headers,
        media_type=JSON_MEDIA_TYPE,
    )


def error_response(error: ProxyError, headers: dict[str, str]) -> Response:
    """Render a proxy error as an error envelope."""
    return json_response(error.to_envelope(), error.status_code, headers)


def passthrough_response(raw_body: str, headers: dict[str, str]) -> Response:
    """Relay an upstream body byte-for-byte."""
    return Response(
        content=raw_body.encode("utf-8"),
        status_code=200,
        headers=headers,
        media_type=JSON_MEDIA_TYPE,
    )
