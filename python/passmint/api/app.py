"""
FastAPI application for the Passmint HTTP JSON API.

Routes:
    GET  /api/password           generate one password
    POST /api/passwords          generate several passwords
    POST /api/password/validate  check password strength
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from .. import __version__
from ..exceptions import InvalidRequestError, PassmintException
from .routes import router

logger = logging.getLogger(__name__)


def error_response(message: str, status: int = 400) -> JSONResponse:
    """Build the error envelope returned for every failed request."""
    return JSONResponse(
        status_code=status,
        content={"error": True, "message": message, "status": status},
    )


async def passmint_exception_handler(request: Request, exc: PassmintException) -> JSONResponse:
    """Map engine and request errors to a 4xx error envelope."""
    status = exc.status_code if isinstance(exc, InvalidRequestError) else 400
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return error_response(str(exc), status)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Report unknown routes and unsupported methods as 404."""
    if exc.status_code in (404, 405):
        path = request.url.path.rstrip("/") or "/"
        return error_response(f"Endpoint not found: {request.method} {path}", 404)
    return error_response(str(exc.detail), exc.status_code)


class TrailingSlashMiddleware(BaseHTTPMiddleware):
    """Route "/api/password/" the same as "/api/password"."""

    async def dispatch(self, request: Request, call_next):
        path = request.scope["path"]
        if len(path) > 1 and path.endswith("/"):
            request.scope["path"] = path.rstrip("/") or "/"
        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Passmint API starting...")
    yield
    logger.info("Passmint API stopped")


def create_app() -> FastAPI:
    """Create the API application."""
    app = FastAPI(
        title="Passmint",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.add_middleware(TrailingSlashMiddleware)
    app.add_exception_handler(PassmintException, passmint_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.include_router(router)
    return app


app = create_app()
