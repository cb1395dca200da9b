"""
Error handling service for consistent error response formatting and logging.
Every failure leaves the API as {"error": <message>, "code": <CODE>}.
"""

from typing import Dict, Any, Optional
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from app.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    Provides the flat error body with appropriate logging and error codes.
    """

    @staticmethod
    def format_error_response(error_code: str, message: str) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            error_code: Machine-readable error code, e.g. MISSING_TITLE
            message: Human-readable error message

        Returns:
            Formatted error response dictionary
        """
        return {"error": message, "code": error_code}

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with formatted error
        """
        request_id = ErrorHandlerService._request_id(request)
        error_code = exception.error_code or "API_ERROR"

        if exception.status_code >= 500:
            logger.error(
                f"API Exception [{request_id}]: {error_code} - {exception.detail}",
                extra={"error_code": error_code, "request_id": request_id, "path": _path(request)}
            )
        else:
            logger.warning(
                f"API Exception [{request_id}]: {error_code} - {exception.detail}",
                extra={"error_code": error_code, "request_id": request_id, "path": _path(request)}
            )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(error_code, exception.detail),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: RequestValidationError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request validation errors raised by FastAPI before a handler runs.

        Malformed JSON bodies become INVALID_JSON; any other failure is
        reported against the first offending location.

        Args:
            exception: FastAPI request validation error
            request: Optional FastAPI request object

        Returns:
            JSON response with status 400
        """
        request_id = ErrorHandlerService._request_id(request)
        errors = exception.errors()

        if any(error.get("type") == "json_invalid" for error in errors):
            error_code = "INVALID_JSON"
            message = "Request body is not valid JSON"
        elif errors:
            first = errors[0]
            location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
            field = location[-1] if location else "body"
            error_code = "INVALID_BODY" if field == "body" else f"INVALID_{field.upper()}"
            message = f"Invalid {field}: {first.get('msg', 'validation failed')}"
        else:
            error_code = "INVALID_REQUEST"
            message = "Request validation failed"

        logger.warning(
            f"Validation Error [{request_id}]: {error_code} - {len(errors)} error(s)",
            extra={"request_id": request_id, "path": _path(request)}
        )

        return JSONResponse(
            status_code=400,
            content=ErrorHandlerService.format_error_response(error_code, message)
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle database errors that escaped the service layer.

        An IntegrityError here means a uniqueness rule lost a race against a
        concurrent write, so it is reported as a conflict.

        Args:
            exception: SQLAlchemy error
            request: Optional FastAPI request object

        Returns:
            JSON response with database error information
        """
        request_id = ErrorHandlerService._request_id(request)

        if isinstance(exception, IntegrityError):
            error_code = "DUPLICATE"
            message = "Record conflicts with an existing record"
            status_code = 409

            constraint_info = ErrorHandlerService._extract_constraint_info(exception)
            if constraint_info:
                message = f"Constraint violation: {constraint_info}"
        else:
            error_code = "INTERNAL_ERROR"
            message = f"Internal server error: {exception}"
            status_code = 500

        logger.error(
            f"Database Error [{request_id}]: {error_code} - {exception}",
            extra={
                "error_code": error_code,
                "request_id": request_id,
                "path": _path(request),
                "exception_type": type(exception).__name__
            },
            exc_info=status_code >= 500
        )

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(error_code, message)
        )

    @staticmethod
    def handle_http_exception(
        exception: HTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle plain HTTP exceptions such as routing 404s and 405s.

        Args:
            exception: HTTP exception
            request: Optional FastAPI request object

        Returns:
            JSON response with HTTP error information
        """
        request_id = ErrorHandlerService._request_id(request)

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={"status_code": exception.status_code, "request_id": request_id, "path": _path(request)}
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                f"HTTP_{exception.status_code}", str(exception.detail)
            ),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle unexpected errors.

        Args:
            exception: Unexpected exception
            request: Optional FastAPI request object

        Returns:
            JSON response with status 500
        """
        request_id = ErrorHandlerService._request_id(request)

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={"request_id": request_id, "path": _path(request)},
            exc_info=True
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(
                "INTERNAL_ERROR", f"Internal server error: {exception}"
            )
        )

    @staticmethod
    def _request_id(request: Optional[Request]) -> str:
        """Reuse the id assigned by the request middleware, or generate one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return ErrorHandlerService._generate_request_id()

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        """
        Extract constraint information from integrity error.

        Args:
            exception: SQLAlchemy integrity error

        Returns:
            Constraint information string or None
        """
        error_msg = str(exception.orig).lower()

        if "unique" in error_msg:
            return "Duplicate value for unique field"
        if "foreign key" in error_msg:
            return "Referenced record does not exist"
        if "not null" in error_msg:
            return "Required field cannot be empty"
        return None


def _path(request: Optional[Request]) -> Optional[str]:
    return request.url.path if request else None
