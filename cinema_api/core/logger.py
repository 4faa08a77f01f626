import contextvars
import logging
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


class RequestIdFilter(logging.Filter):
    """Stamp every record with the id of the request being served ("-" outside one)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Install a single stream handler on the root logger.
    Safe to call more than once (uvicorn --reload, tests).
    """
    root = logging.getLogger()
    if any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    root.setLevel(level)
    root.addHandler(handler)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request id and logs one line when a request starts and one when it ends.
    The id is echoed back in the X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        token = request_id_ctx.set(req_id)
        logger = logging.getLogger("cinema_api.http")
        start = time.perf_counter()
        try:
            logger.info(f"{request.method} {request.url.path} started")
            response = await call_next(request)
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(f"{request.method} {request.url.path} -> {response.status_code} in {duration_ms}ms")
            response.headers["X-Request-ID"] = req_id
            return response
        except Exception:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.exception(f"{request.method} {request.url.path} failed after {duration_ms}ms")
            raise
        finally:
            request_id_ctx.reset(token)
