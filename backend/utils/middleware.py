import secrets
import time
import uuid

import structlog
import structlog.contextvars
from config import settings
from fastapi import Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

PUBLIC_PATHS = frozenset(
    {"/health", "/metrics", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}
)
UNAUTHORIZED_DETAIL = "Invalid or missing API key"


def elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


async def structured_logging_middleware(request: Request, call_next):
    """
    Binds request context (correlation id, Go server id, path, method) for
    every log line emitted while handling the request and logs its outcome.
    """
    started = time.perf_counter()
    correlation_id = request.headers.get("x-correlation-id") or str(uuid.uuid4())

    with structlog.contextvars.bound_contextvars(
        correlation_id=correlation_id,
        go_server_id=request.headers.get("x-go-server-id"),
        remote_addr=request.client.host if request.client else None,
        request_path=request.url.path,
        request_method=request.method,
    ):
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request failed", processing_time_ms=elapsed_ms(started))
            raise

        if response.status_code < 400:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                processing_time_ms=elapsed_ms(started),
            )
        else:
            logger.warning(
                "Request rejected",
                status_code=response.status_code,
                processing_time_ms=elapsed_ms(started),
            )

    response.headers["X-Correlation-ID"] = correlation_id
    return response


async def api_key_middleware(request: Request, call_next):
    """Rejects requests that do not carry the configured key in X-API-Key."""
    if request.url.path in PUBLIC_PATHS:
        return await call_next(request)

    api_key = request.headers.get("x-api-key", "")
    if not api_key or not secrets.compare_digest(
        api_key.encode(), settings.api_key.encode()
    ):
        return JSONResponse(status_code=401, content={"detail": UNAUTHORIZED_DETAIL})

    return await call_next(request)
