import time
import uuid
from typing import List, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from locallibrary.logging.setup import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its status code and duration, and tags it with a
    correlation id that is echoed back in the response headers.
    """

    def __init__(
        self,
        app: FastAPI,
        skip_paths: Optional[List[str]] = None,
        correlation_id_header: str = "X-Correlation-ID",
    ):
        """
        Args:
            app: FastAPI application
            skip_paths: Path prefixes that are not logged
            correlation_id_header: Header name for the correlation id
        """
        super().__init__(app)
        self.skip_paths = skip_paths if skip_paths is not None else ["/health", "/favicon.ico"]
        self.correlation_id_header = correlation_id_header

    async def dispatch(self, request: Request, call_next):
        if any(request.url.path.startswith(path) for path in self.skip_paths):
            return await call_next(request)

        correlation_id = request.headers.get(
            self.correlation_id_header, f"correlation-{uuid.uuid4()}"
        )
        request.state.correlation_id = correlation_id

        start_time = time.perf_counter()
        log_data = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }

        try:
            response = await call_next(request)
        except Exception as e:
            log_data["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            log_data["error_type"] = type(e).__name__
            logger.error(f"{request.method} {request.url.path} raised {type(e).__name__}", extra=log_data)
            raise

        log_data["status_code"] = response.status_code
        log_data["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
        message = f"{request.method} {request.url.path} {response.status_code}"

        if response.status_code >= 500:
            logger.error(message, extra=log_data)
        elif response.status_code >= 400:
            logger.warning(message, extra=log_data)
        else:
            logger.info(message, extra=log_data)

        response.headers[self.correlation_id_header] = correlation_id
        return response
