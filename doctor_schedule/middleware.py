import time
import uuid
import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .exceptions import create_error_response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


class SecurityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs the calendar query it asked for."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        request.state.request_id = request_id
        start_time = time.time()

        query = f"?{request.url.query}" if request.url.query else ""
        client_host = request.client.host if request.client else "unknown"
        logger.info(f"[{request_id}] {request.method} {request.url.path}{query} from {client_host}")

        response = await call_next(request)

        duration = time.time() - start_time
        doctor_id = request.path_params.get("doctor_id")
        doctor = f" doctor={doctor_id}" if doctor_id else ""
        logger.info(f"[{request_id}] {response.status_code}{doctor} in {duration:.3f}s")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"[{_request_id(request)}] Unhandled error on {request.url.path}: {str(e)}", exc_info=True)
            detail = f"Internal server error: {str(e)}" if self.debug else "Internal server error"
            return JSONResponse(status_code=500, content=create_error_response(detail))
