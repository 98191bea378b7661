"""
Custom middleware for the FastAPI application.
"""
import time
import logging
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

# Set up logging
logger = logging.getLogger(__name__)

# Polled by load balancers; logged at DEBUG only
QUIET_PATHS = {"/health"}

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with an id, its status and its duration.

    A caller-supplied ``X-Request-ID`` is reused so log lines can be joined
    with the frontend's. Event streams are logged when they open; their
    duration is the time to the first byte, not the life of the stream.
    """
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO

        client_host = request.client.host if request.client else "unknown"
        logger.log(level, f"Request {request_id} started: {request.method} {request.url.path} from {client_host}")

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request {request_id} failed: {request.method} {request.url.path} "
                f"- Error: {str(e)} - Duration: {time.time() - start_time:.4f}s"
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id

        if response.headers.get("content-type", "").startswith("text/event-stream"):
            logger.info(f"Request {request_id} streaming: {request.method} {request.url.path}")
        else:
            logger.log(
                level,
                f"Request {request_id} completed: {request.method} {request.url.path} "
                f"- Status: {response.status_code} - Duration: {process_time:.4f}s"
            )
        return response


def setup_middlewares(app):
    """
    Set up all custom middlewares for the application.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(RequestLoggingMiddleware)
