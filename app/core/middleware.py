# app/core/middleware.py
"""HTTP middleware: correlation ids and access logging"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Tag every request with a correlation id, reusing the caller's when supplied"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log each request once it has been answered"""
    started = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    extra = {
        "correlation_id": correlation_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": response.status_code,
        "duration_ms": duration_ms,
    }
    message = f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms} ms)"

    # Conflicts are an expected outcome of racing bookings
    if response.status_code >= 500:
        logger.error(message, extra=extra)
    elif response.status_code >= 400 and response.status_code != 409:
        logger.warning(message, extra=extra)
    else:
        logger.info(message, extra=extra)

    return response
