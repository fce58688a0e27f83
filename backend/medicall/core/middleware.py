from fastapi import Request
import logging
import time

from medicall.core.websocket_manager import ConnectionManager
from medicall.db.session import get_db  # noqa: F401  re-exported for routers

logger = logging.getLogger(__name__)

# Paths not worth a log line on every hit
QUIET_PATHS = [
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc"
]

async def request_logging_middleware(request: Request, call_next):
    """
    Middleware that logs method, path, status and duration of each HTTP request.
    Failures are logged and re-raised untouched.
    """
    if any(request.url.path.startswith(path) for path in QUIET_PATHS):
        return await call_next(request)

    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"{request.method} {request.url.path} failed")
        raise

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response

def get_broadcaster(request: Request) -> ConnectionManager:
    """Dependency returning the app-wide connection manager."""
    return request.app.state.broadcaster
