"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from emailpage import __version__
from emailpage.api.health import router as health_router
from emailpage.api.pages import router as pages_router
from emailpage.api.site import router as site_router
from emailpage.config import Settings
from emailpage.exceptions import InternalServerError
from emailpage.filesystem.page_store import PageStore, ensure_data_dir
from emailpage.services.preview_service import NullPreviewRenderer
from emailpage.services.template_service import load_template

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable
    from pathlib import Path

    from starlette.responses import Response

    from emailpage.services.preview_service import PreviewRenderer

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("aiosmtplib").setLevel(logging.INFO if debug else logging.WARNING)


def _load_static_page(path: Path) -> str | None:
    """Read an optional static HTML page, logging instead of failing."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Static page %s unavailable: %s", path, exc)
        return None


def initialize_storage(app: FastAPI, settings: Settings) -> None:
    """Best-effort setup: the data directory may be fixed while the server runs.

    Only in the test environment is a failure fatal.
    """
    data_dir = settings.resolved_data_dir
    ensure_data_dir(data_dir, strict=settings.is_test)
    app.state.page_store = PageStore(data_dir=data_dir)
    app.state.not_found_page = _load_static_page(settings.static_dir / "404.html")


def initialize_templates(app: FastAPI, settings: Settings) -> None:
    """Required setup: pages cannot be rendered without the template."""
    try:
        app.state.page_template = load_template(settings.template_path)
    except Exception as exc:
        logger.critical("Template setup error: %s", exc)
        raise
    logger.info("Using template file: %s", settings.template_path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: startup and shutdown."""
    settings: Settings = app.state.settings
    _configure_logging(settings.debug)
    logger.info("Starting Email Page (env=%s, debug=%s)", settings.app_env, settings.debug)

    initialize_storage(app, settings)
    initialize_templates(app, settings)

    logger.info("Data directory: %s", settings.resolved_data_dir)
    logger.info("Hash length for page IDs: %d characters", settings.hash_length)
    if not settings.email_enabled:
        logger.info("Email notifications disabled: SMTP host, sender or recipient not set")

    yield

    logger.info("Email Page stopped")


def create_app(
    settings: Settings | None = None,
    preview_renderer: PreviewRenderer | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Email Page",
        description="Turn JSON requests into HTML pages and send email links to them",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.preview_renderer = preview_renderer or NullPreviewRenderer()

    app.add_middleware(GZipMiddleware, minimum_size=500)

    @app.middleware("http")
    async def security_headers(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        if settings.security_headers_enabled:
            response.headers.setdefault("X-Content-Type-Options", "nosniff")
            response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        return response

    static_dir = settings.static_dir
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.include_router(health_router)
    app.include_router(site_router)
    app.include_router(pages_router)

    # Global exception handlers: safety net for unhandled exceptions

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        if exc.status_code == 404:
            page = getattr(request.app.state, "not_found_page", None)
            if page is not None:
                return HTMLResponse(page, status_code=404)
            return PlainTextResponse("Not found", status_code=404)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = []
        for err in exc.errors():
            loc = err.get("loc", ())
            field = str(loc[-1]) if loc else "unknown"
            errors.append({"field": field, "message": err.get("msg", "Invalid value")})
        logger.warning(
            "RequestValidationError in %s %s: %s",
            request.method,
            request.url.path,
            errors,
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(OSError)
    async def os_error_handler(request: Request, exc: OSError) -> JSONResponse:
        if isinstance(exc, (ConnectionError, TimeoutError)):
            raise exc
        logger.error("OSError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Storage operation failed"},
        )

    @app.exception_handler(InternalServerError)
    async def internal_server_error_handler(
        request: Request, exc: InternalServerError
    ) -> JSONResponse:
        logger.error(
            "InternalServerError in %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    return app


app = create_app()


def cli_entry() -> None:
    """CLI entry point for running the server."""
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(
        "emailpage.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
