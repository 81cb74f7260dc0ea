"""
FastAPI application factory.

Usage:
    python -m api.app                    # Dev server on port 8000
    MONGODB_URI=mongodb://db:27017 DB_NAME=rcm python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

Logging is configured once at import: text lines by default, newline-delimited
JSON when APP_LOG_FORMAT=json.  Every request is logged with a short request
id that is also returned in the X-Request-ID header.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.database import Database
from api.routes import calendar, capacity, initiatives, profile, summary
from utils.config import AppConfig

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ───────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("rcm_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=_cfg.log_level, force=True)


_ERROR_NAMES = {
    400: "Bad request",
    404: "Not found",
    500: "Internal server error",
    503: "Service unavailable",
}


def _error_body(status_code: int, detail) -> dict:
    error = _ERROR_NAMES.get(status_code)
    if error is None:
        try:
            error = HTTPStatus(status_code).phrase
        except ValueError:
            error = "Error"
    return {"error": error, "detail": detail, "status_code": status_code}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the MongoDB client on startup unless one was injected; close it on shutdown."""
    owned = None
    if getattr(app.state, "database", None) is None:
        owned = Database.from_config(app.state.config)
        app.state.database = owned
    try:
        yield
    finally:
        if owned is not None:
            owned.close()
            app.state.database = None


def create_app(database: Database | None = None, config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        database: Use this database instead of connecting from config
            (tests pass one wrapping a mongomock database).  The caller
            keeps ownership and closes it.
        config: Override the environment-derived configuration.

    Returns:
        Configured FastAPI application instance.
    """
    cfg = config or _cfg

    app = FastAPI(
        title="Resource & Capacity Management API",
        summary="Capacity planning, calendar activities and initiative tracking.",
        description=(
            "## Resource & Capacity Management API\n\n"
            "Reads monthly allocation and capacity records from MongoDB.\n\n"
            "### Key concepts\n"
            "- **Months** are integers in `YYYYMM` form (e.g. `202501`) and are "
            "labelled `Mon-YY` (`Jan-25`).\n"
            "- **Allocation buckets**: Vacation, Baseline, Strategic and "
            "Discretionary Project.  A record belongs to the last bucket whose "
            "name appears in its category.\n"
            "- **Remaining capacity** is people capacity minus allocation and "
            "goes negative when a month is over-allocated."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "calendar", "description": "Activities grouped by month and category."},
            {"name": "capacity", "description": "Allocation vs. capacity over a month window."},
            {"name": "initiatives", "description": "Create, edit and list initiatives."},
            {"name": "summary", "description": "Initiative counts by status."},
            {"name": "profile", "description": "Signed-in user profile."},
            {"name": "meta", "description": "Health check."},
        ],
    )
    app.state.config = cfg
    app.state.database = database

    # ── CORS middleware ───────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request and tag the response with a request id."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, path, response.status_code, duration_ms, request_id,
            )
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status_code, exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content=_error_body(400, str(exc)))

    @app.exception_handler(PyMongoError)
    async def datastore_error_handler(request: Request, exc: PyMongoError):
        """Log datastore failures with traceback; clients get a generic message."""
        _logger.error(
            "Datastore error on %s %s", request.method, request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(500, "Database operation failed"),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(500, "Internal server error"),
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health(request: Request):
        """Return 200 OK if the API is running and MongoDB answers a ping."""
        db = getattr(request.app.state, "database", None)
        if db is None:
            return JSONResponse(
                status_code=503,
                content={"status": "no_database"},
            )
        if not db.ping():
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "database": db.name},
            )
        return {"status": "ok", "database": db.name}

    # ── Register routers ──────────────────────────────────────────────────────

    prefix = "/api/v1"
    app.include_router(calendar.router,    prefix=prefix)
    app.include_router(capacity.router,    prefix=prefix)
    app.include_router(initiatives.router, prefix=prefix)
    app.include_router(summary.router,     prefix=prefix)
    app.include_router(profile.router,     prefix=prefix)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
