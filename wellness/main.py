"""
Backend API for the wellness portal.

Patients track daily goals and reminders; providers review the compliance of
the patients linked to them.  The application is assembled by
:func:`create_app`, which wires settings, an explicit :class:`RecordStore`,
logging, metrics, error handlers and the resource routers together.
"""

from __future__ import annotations

import logging
import os
import re
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, Histogram, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException
from structlog.contextvars import bind_contextvars, clear_contextvars

from wellness.auth import configure_password_hashing
from wellness.config import Settings, get_settings
from wellness.errors import WellnessError
from wellness.routes import ROUTERS
from wellness.seed import seed_demo_data
from wellness.store import RecordStore

logger = structlog.get_logger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging through structlog's JSON renderer."""

    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format="%(message)s")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


def _get_or_create_metric(metric_cls, name: str, documentation: str, labelnames):
    existing = REGISTRY._names_to_collectors.get(name)
    if existing is not None:
        return existing
    return metric_cls(name, documentation, labelnames=labelnames)


REQUEST_COUNTER = _get_or_create_metric(
    Counter,
    "wellness_requests_total",
    "Total HTTP requests processed by the backend",
    ("method", "endpoint", "status"),
)
REQUEST_LATENCY = _get_or_create_metric(
    Histogram,
    "wellness_request_latency_seconds",
    "Latency of HTTP requests",
    ("method", "endpoint"),
)

# Numeric ids and UUIDs collapse into one label value.
_PATH_PARAM_RE = re.compile(r"/(?:[0-9]+|[0-9a-fA-F]{8}-[0-9a-fA-F-]{27,}|[0-9a-fA-F]{8,})(?=/|$)")


def _normalise_path_for_metrics(path: str) -> str:
    """Reduce high-cardinality segments in request paths for metrics labels."""

    if not path:
        return "/"
    return _PATH_PARAM_RE.sub("/:param", path)


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


async def inject_trace_id(request: Request, call_next):
    """Attach or propagate a trace identifier and log the request outcome."""

    trace_id = request.headers.get("x-trace-id") or uuid.uuid4().hex
    clear_contextvars()
    bind_contextvars(trace_id=trace_id, path=request.url.path, method=request.method)
    request.state.trace_id = trace_id
    start = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers["X-Trace-Id"] = trace_id
        logger.info(
            "request_completed",
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response
    finally:
        clear_contextvars()


async def track_http_metrics(request: Request, call_next):
    """Emit Prometheus counters and histograms for each request."""

    start = time.perf_counter()
    normalised = _normalise_path_for_metrics(request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        REQUEST_COUNTER.labels(request.method, normalised, "500").inc()
        REQUEST_LATENCY.labels(request.method, normalised).observe(time.perf_counter() - start)
        raise
    REQUEST_COUNTER.labels(request.method, normalised, str(response.status_code)).inc()
    REQUEST_LATENCY.labels(request.method, normalised).observe(time.perf_counter() - start)
    return response


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

_PYDANTIC_VALUE_ERROR_PREFIX = "Value error, "
_LOCATION_ROOTS = {"body", "query", "path", "header"}


def _first_validation_message(exc: RequestValidationError) -> str:
    """Return the first schema violation as a client-facing sentence."""

    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    parts = [str(part) for part in first.get("loc", ()) if part not in _LOCATION_ROOTS]
    field = ".".join(parts)
    message = str(first.get("msg") or "Invalid request")
    if message.startswith(_PYDANTIC_VALUE_ERROR_PREFIX):
        return message[len(_PYDANTIC_VALUE_ERROR_PREFIX):]
    if first.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    return f"{field}: {message}" if field else message


async def wellness_error_handler(request: Request, exc: WellnessError) -> JSONResponse:
    logger.info("request_rejected", status=exc.status_code, reason=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _first_validation_message(exc)
    logger.info("request_rejected", status=400, reason=message)
    return JSONResponse(status_code=400, content={"message": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework-raised HTTP errors (unknown route, bad method)."""

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("lifespan_startup", environment=app.state.settings.environment)
    try:
        yield
    finally:
        logger.info("lifespan_shutdown_complete", uptime=round(time.time() - app.state.started_at, 2))


def create_app(
    settings: Optional[Settings] = None, store: Optional[RecordStore] = None
) -> FastAPI:
    """Build the FastAPI application.

    When ``store`` is omitted a fresh one is created and, if enabled in
    ``settings``, filled with demo data.
    """

    settings = settings or get_settings()
    configure_logging(settings.log_level)
    configure_password_hashing(settings.bcrypt_rounds)

    if store is None:
        store = RecordStore()
        if settings.seed_demo_data:
            seed_demo_data(store)

    app = FastAPI(title="Wellness Portal API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.started_at = time.time()

    # Credentials are only allowed for an explicit origin list.
    wildcard_origin = "*" in settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=not wildcard_origin,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(track_http_metrics)
    app.middleware("http")(inject_trace_id)

    app.add_exception_handler(WellnessError, wellness_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health", tags=["system"])
    async def health():
        """Lightweight liveness check."""

        return {"status": "ok", "uptime": round(time.time() - app.state.started_at, 2)}

    @app.get("/metrics", tags=["system"], response_class=Response)
    async def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual launch
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
