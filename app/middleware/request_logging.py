"""
Request logging middleware with request ID tracking and context propagation.
"""
import logging
import time
import uuid
from contextvars import ContextVar

from app.core.logging_config import LogCategory, log_api_request

logger = logging.getLogger(LogCategory.REQUEST)

# Context variable for request ID propagation
request_id_ctx: ContextVar[str] = ContextVar('request_id', default='unknown')

# Default status code when response is not captured
DEFAULT_STATUS_CODE = 500

# Requests slower than this are logged as warnings
SLOW_REQUEST_MS = 10000


class RequestLoggingMiddleware:
    """
    ASGI middleware that tags every HTTP request with an ID.

    - Generates a unique request ID and stores it in ``request_id_ctx``
    - Adds an ``x-request-id`` response header
    - Logs method, path, status and duration once the response is sent
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            # Non-HTTP scope (e.g., lifespan)
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        token = request_id_ctx.set(request_id)
        start_time = time.time()

        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "/")
        status_code = DEFAULT_STATUS_CODE

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", DEFAULT_STATUS_CODE)
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.error(
                "Request failed with exception (request_id=%s, method=%s, path=%s)",
                request_id, method, path,
                exc_info=True,
            )
            raise
        finally:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            if duration_ms >= SLOW_REQUEST_MS:
                logger.warning(
                    "Slow request (request_id=%s, path=%s, duration_ms=%s)",
                    request_id, path, duration_ms,
                )
            log_api_request(method, path, status_code, duration_ms, request_id=request_id)
            request_id_ctx.reset(token)
