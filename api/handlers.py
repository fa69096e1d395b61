"""FastAPI route handlers."""

from collections.abc import Callable
from typing import Any

from fastapi import Request, Response

from core.config import Config
from core.cors import CorsPolicy
from core.exceptions import (
    ClientRequestError,
    ConfigurationError,
    ForbiddenOriginError,
    InternalError,
    ProxyError,
)
from core.parsing import JsonFailure, parse_json
from core.protocols import RequestLogger
from core.responses import error_response, json_response, passthrough_response
from services.upstream import UpstreamClient

ALLOWED_METHODS = "POST, OPTIONS"


def _safe_log(log_call: Callable[..., None], *args: Any) -> None:
    """Run a logger call; a failing log write never replaces the response."""
    try:
        log_call(*args)
    except OSError:
        pass


async def dispatch(
    request: Request,
    config: Config,
    policy: CorsPolicy,
    logger: RequestLogger,
) -> Response:
    """Route by method after the origin pre-check."""
    origin = request.headers.get("origin")
    _safe_log(logger.log_request, request.method, request.url.path, origin, dict(request.headers))

    if request.method == "OPTIONS":
        response = handle_preflight(request, policy)
    elif policy.rejects(origin):
        error = ForbiddenOriginError(f"origin {origin} not allowed")
        _safe_log(logger.log_error, request.method, error.status_code, error.message)
        response = error_response(error, policy.headers(origin))
    elif request.method == "POST":
        response = await handle_chat(request, config, policy, logger)
    else:
        response = handle_method_not_allowed(request, policy)

    _safe_log(logger.log_response, request.method, origin, response.status_code)
    return response


def handle_preflight(request: Request, policy: CorsPolicy) -> Response:
    """Answer a browser preflight request."""
    origin = request.headers.get("origin")
    if policy.rejects(origin):
        return Response(status_code=403)

    headers = policy.preflight_headers(origin, request.headers.get("access-control-request-headers"))
    return Response(status_code=204, headers=headers)


async def handle_chat(
    request: Request,
    config: Config,
    policy: CorsPolicy,
    logger: RequestLogger,
) -> Response:
    """Forward a chat request upstream and normalize the outcome."""
    headers = policy.headers(request.headers.get("origin"))
    try:
        return await _forward(request, config, headers)
    except ProxyError as e:
        _safe_log(logger.log_error, request.method, e.status_code, e.message)
        return error_response(e, headers)
    except Exception as e:
        error = InternalError("internal server error", details=str(e))
        _safe_log(logger.log_error, request.method, error.status_code, f"{type(e).__name__}: {e}")
        return error_response(error, headers)


async def _forward(request: Request, config: Config, headers: dict[str, str]) -> Response:
    if not config.upstream.is_configured:
        raise ConfigurationError("credentials not configured")

    raw_body = await request.body()
    parsed = parse_json(raw_body.decode("utf-8", errors="replace"))
    if isinstance(parsed, JsonFailure):
        raise ClientRequestError("invalid JSON in request", details=parsed.message)

    upstream: UpstreamClient = request.app.state.upstream_client
    text = await upstream.chat(parsed.value)
    return passthrough_response(text, headers)


def handle_method_not_allowed(request: Request, policy: CorsPolicy) -> Response:
    """Reject any method other than POST and OPTIONS."""
    headers = policy.headers(request.headers.get("origin"))
    headers["Allow"] = ALLOWED_METHODS
    return json_response({"error": f"method {request.method} not allowed"}, 405, headers)
