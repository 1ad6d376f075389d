import logging
import time
import traceback
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, settings as default_settings
from database import DocumentStore, StoreUnavailableError
from routes import catalog, index, users
from templating import PUBLIC_DIR, render

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("local_library.access")


def _error_status(exc: Exception) -> int:
    """HTTP status carried by an error, defaulting to 500."""
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and 400 <= value <= 599:
            return value
    return 500


def _error_context(exc: Exception, status: int, message: str, development: bool) -> Dict[str, Any]:
    if development:
        error = {
            "status": status,
            "type": type(exc).__name__,
            "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        }
    else:
        error = {}
        if status >= 500:
            try:
                message = HTTPStatus(status).phrase
            except ValueError:
                message = "Server Error"
    return {"title": "Error", "message": message, "error": error}


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """Build the web application around one document store client."""
    settings = settings or default_settings
    store = store or DocumentStore(settings.database_url)
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.connect()
        try:
            yield
        finally:
            store.close()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    # --- Request logging ---
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed = (time.perf_counter() - started) * 1000
            access_logger.info(f"{request.method} {request.url.path} 500 {elapsed:.3f} ms - -")
            raise
        elapsed = (time.perf_counter() - started) * 1000
        length = response.headers.get("content-length", "-")
        access_logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed:.3f} ms - {length}")
        return response

    # --- Static files ---
    # Each directory under public/ is served at /<name>/...
    for child in sorted(PUBLIC_DIR.iterdir()):
        if child.is_dir():
            app.mount(f"/{child.name}", StaticFiles(directory=str(child)), name=child.name)

    # --- Routes ---
    app.include_router(index.router)
    app.include_router(users.router, prefix="/users")
    app.include_router(catalog.router, prefix="/catalog")

    # --- Error handlers ---
    def render_error(request: Request, exc: Exception, status: int, message: str):
        context = _error_context(exc, status, message, settings.is_development)
        return render(request, "error", context, status_code=status)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # A path served under another method is still an unmatched route
        if exc.status_code == 405:
            return render_error(request, exc, 404, "Not Found")
        return render_error(request, exc, exc.status_code, str(exc.detail))

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable(request: Request, exc: StoreUnavailableError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return render_error(request, exc, exc.status_code, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
        return render_error(request, exc, _error_status(exc), str(exc))

    return app


app = create_app()
