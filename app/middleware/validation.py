"""
Request middleware: request ids, body size and content-type checks, and
request/response logging with timings.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from app.services.error_handler import ErrorHandlerService
from app.utils.exceptions import BadRequestError

logger = logging.getLogger(__name__)


class ValidationMiddleware(BaseHTTPMiddleware):
    """
    Assigns every request an X-Request-ID, rejects oversized or non-JSON
    write requests and logs each request with its processing time.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 1024 * 1024,
        api_prefix: str = "/api",
        enable_request_logging: bool = True
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.api_prefix = api_prefix
        self.enable_request_logging = enable_request_logging

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through validation middleware.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object
        """
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        try:
            self._validate_request_size(request)
            self._validate_content_type(request)

            if self.enable_request_logging:
                self._log_request(request, request_id)

            response = await call_next(request)

            if self.enable_request_logging:
                self._log_response(request, response, request_id, time.time() - start_time)

        except BadRequestError as exc:
            response = ErrorHandlerService.handle_api_exception(exc, request)
        except Exception as exc:
            logger.error(
                f"Middleware error [{request_id}]: {type(exc).__name__} - {exc}",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "processing_time": time.time() - start_time
                }
            )
            response = ErrorHandlerService.handle_unexpected_error(exc, request)

        response.headers["X-Request-ID"] = request_id
        return response

    def _validate_request_size(self, request: Request) -> None:
        """
        Validate request content length.

        Raises:
            BadRequestError: If request size exceeds limit
        """
        content_length = request.headers.get("content-length")
        if not content_length:
            return
        try:
            size = int(content_length)
        except ValueError:
            raise BadRequestError("Invalid content-length header", error_code="INVALID_CONTENT_LENGTH")
        if size > self.max_request_size:
            raise BadRequestError(
                f"Request size {size} bytes exceeds maximum allowed size {self.max_request_size} bytes",
                error_code="REQUEST_TOO_LARGE"
            )

    def _validate_content_type(self, request: Request) -> None:
        """
        Write requests to the API must carry JSON when they carry a body.

        Raises:
            BadRequestError: If the content type is not JSON
        """
        if request.method not in ("POST", "PUT", "PATCH"):
            return
        if not request.url.path.startswith(self.api_prefix):
            return

        content_type = request.headers.get("content-type", "")
        if content_type and not content_type.startswith("application/json"):
            raise BadRequestError(
                f"Unsupported content type '{content_type}'. Expected 'application/json'",
                error_code="UNSUPPORTED_CONTENT_TYPE"
            )

    def _log_request(self, request: Request, request_id: str) -> None:
        logger.info(
            f"Request [{request_id}]: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "query_params": str(request.query_params),
                "client_ip": request.client.host if request.client else "unknown"
            }
        )

    def _log_response(
        self,
        request: Request,
        response: Response,
        request_id: str,
        processing_time: float
    ) -> None:
        logger.info(
            f"Response [{request_id}]: {response.status_code} - {processing_time:.3f}s",
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "processing_time": processing_time,
                "path": request.url.path,
                "method": request.method
            }
        )
