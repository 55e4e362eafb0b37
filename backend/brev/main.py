import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .api import links, metrics
from .api.links import redirect_to_url
from .config import Settings, settings as default_settings
from .errors import ExportError, StoreError
from .middleware import LoggingMiddleware
from .schemas.link import HealthResponse
from .services.export import ExportTarget, build_export_target
from .services.links import LinkService
from .store import LinkStore
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Default location: frontend/ next to backend/ at the repository root
DEFAULT_FRONTEND_PATH = Path(__file__).resolve().parent.parent.parent / "frontend"

BACKEND_URL_PLACEHOLDER = "__BACKEND_URL__"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the link store at startup and close it at shutdown"""
    config: Settings = app.state.settings
    setup_logging(level=config.LOG_LEVEL, log_file=config.LOG_FILE)

    store = LinkStore(config.DATABASE_URL)
    store.init()
    if config.CREATE_SCHEMA_ON_STARTUP:
        store.create_schema()

    export_target = app.state.export_target or build_export_target(config)
    app.state.service = LinkService(
        store=store,
        export_target=export_target,
        code_length=config.SHORT_CODE_LENGTH,
    )
    logger.info("Brev started (export target: %s)", type(export_target).__name__)

    try:
        yield
    finally:
        store.close()
        logger.info("Brev stopped")


def frontend_dir(config: Settings) -> Path:
    if config.FRONTEND_DIR:
        return Path(config.FRONTEND_DIR)
    return DEFAULT_FRONTEND_PATH


def render_page(name: str, config: Settings) -> Optional[str]:
    """Load a frontend page with the backend base URL filled in"""
    page = frontend_dir(config) / name
    if not page.exists():
        return None
    return page.read_text(encoding="utf-8").replace(
        BACKEND_URL_PLACEHOLDER, json.dumps(config.FRONTEND_BACKEND_URL)
    )


def create_app(config: Optional[Settings] = None, export_target: Optional[ExportTarget] = None) -> FastAPI:
    config = config or default_settings

    app = FastAPI(
        title="Brev Short Links",
        description="URL shortening service with click metrics",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.export_target = export_target

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(StoreError)
    @app.exception_handler(ExportError)
    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    static_path = frontend_dir(config) / "static"
    if static_path.exists():
        app.mount("/static", StaticFiles(directory=str(static_path)), name="static")

    app.include_router(links.router, tags=["links"])
    app.include_router(metrics.router, tags=["metrics"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health_check(request: Request):
        """Health check endpoint"""
        healthy = request.app.state.service.health_check()
        return HealthResponse(
            status="healthy" if healthy else "unhealthy",
            database="healthy" if healthy else "unhealthy",
        )

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index():
        """Serve the link management page"""
        content = render_page("index.html", config)
        if content is None:
            return HTMLResponse(content="<h1>Brev</h1><p>Service is running.</p>")
        return HTMLResponse(content=content)

    @app.get("/r/{short_code}", response_class=HTMLResponse, include_in_schema=False)
    def redirect_page(short_code: str):
        """Serve the page that forwards the browser to the short link"""
        content = render_page("redirect.html", config)
        if content is None:
            return HTMLResponse(content="<p>Redirecting...</p>", status_code=404)
        return HTMLResponse(content=content)

    # Redirect endpoint (must be last to not conflict with other routes)
    app.get("/{short_code}", tags=["links"], status_code=302)(redirect_to_url)

    return app


app = create_app()


def main():
    import uvicorn

    setup_logging(level=default_settings.LOG_LEVEL, log_file=default_settings.LOG_FILE)
    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
