from contextlib import asynccontextmanager

import structlog
import structlog.contextvars
from config import settings
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from plugins import init_plugins
from prometheus_fastapi_instrumentator import Instrumentator
from utils.exceptions import ServiceError
from utils.middleware import api_key_middleware, structured_logging_middleware

from elastic_agent_core.logging_config import setup_structlog
from elastic_agent_core.tracing import setup_tracing

EXCLUDED_PLUGINS: list[str] = []

setup_structlog(json_logs=settings.json_logs, log_level=settings.log_level)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_tracing(service_name=settings.service_name, enabled=settings.tracing_enabled)
    logger.info(
        "Application starting up...",
        service=settings.service_name,
        tracing_enabled=settings.tracing_enabled,
    )

    instrumentator.expose(app)
    logger.info("Prometheus metrics endpoint exposed at /metrics.")

    yield

    logger.info("Application shutting down...")


app = FastAPI(
    version="1.0.0",
    title="Elastic Agent Plugin API",
    description="Validates elastic agent plugin settings before the Go server saves them.",
    lifespan=lifespan,
)

FastAPIInstrumentor.instrument_app(app)

instrumentator = Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    excluded_handlers=["/metrics", "/health"],
)

instrumentator.instrument(app, metric_namespace="elastic_agent", metric_subsystem="backend")


@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    logger.warning(
        "Service error occurred, returning HTTP response",
        detail=exc.detail,
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "An unhandled exception occurred",
        error=str(exc),
    )
    correlation_id = structlog.contextvars.get_contextvars().get(
        "correlation_id", "not-available"
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An internal server error occurred.",
            "error_id": correlation_id,
        },
    )


app.middleware("http")(api_key_middleware)
app.middleware("http")(structured_logging_middleware)

init_plugins(app, excluded_plugins=EXCLUDED_PLUGINS)


@app.get("/health", tags=["Health Check"], include_in_schema=False)
def health_check():
    return {"status": "ok"}
