"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.handlers import dispatch
from core.config import Config
from core.cors import CorsPolicy
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.upstream import UpstreamClient

ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    policy = CorsPolicy(config.cors)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.limits.max_connections,
            max_keepalive_connections=config.limits.max_keepalive_connections,
        )
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            limits=limits,
            transport=transport,
        )
        app.state.upstream_client = UpstreamClient(client, config.upstream, HeaderBuilder())
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="RunPod Chat Proxy",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.api_route("/{path:path}", methods=ROUTED_METHODS)
    async def proxy(request: Request):
        return await dispatch(request, config, policy, logger)

    @app.exception_handler(StarletteHTTPException)
    async def unrouted_method(request: Request, exc: StarletteHTTPException):
        # Methods outside ROUTED_METHODS never reach the catch-all route
        if exc.status_code == 405:
            return await dispatch(request, config, policy, logger)
        return await http_exception_handler(request, exc)

    return app
