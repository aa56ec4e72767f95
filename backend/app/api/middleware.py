"""
FastAPI middleware for logging, error handling, and request processing.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.constants import APIConstants, HTTPStatus
from app.core.exceptions import ErrorCode, RAGChatError
from app.core.logging import get_logger

logger = get_logger(__name__)

_CODE_TYPE_BY_STATUS = {
    HTTPStatus.BAD_REQUEST: "bad_request",
    HTTPStatus.UNAUTHORIZED: "unauthorized",
    HTTPStatus.FORBIDDEN: "forbidden",
    HTTPStatus.NOT_FOUND: "not_found",
    HTTPStatus.TOO_MANY_REQUESTS: "rate_limit",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging.

    Logs:
    - Request method, path, and ID
    - Response status and timing
    - Errors with stack traces
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(
            APIConstants.REQUEST_ID_HEADER, str(uuid.uuid4())
        )
        request.state.request_id = request_id

        start_time = time.time()

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path
        )

        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None
        )

        try:
            response = await call_next(request)

            duration_ms = (time.time() - start_time) * 1000

            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2)
            )

            response.headers[APIConstants.REQUEST_ID_HEADER] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

            return response

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000

            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2)
            )
            raise

        finally:
            structlog.contextvars.unbind_contextvars(
                "request_id", "method", "path"
            )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(RAGChatError)
    async def ragchat_error_handler(
        request: Request,
        exc: RAGChatError
    ) -> JSONResponse:
        """Handle application errors, including `<type>:<surface>` codes."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.warning(
            "Application error",
            error_type=type(exc).__name__,
            code=getattr(exc, "code", None),
            message=exc.message,
            request_id=request_id
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                **exc.to_dict(),
                "request_id": request_id
            }
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(
        request: Request,
        exc: HTTPException
    ) -> JSONResponse:
        """Render route-level rejections in the same envelope."""
        request_id = getattr(request.state, "request_id", "unknown")
        code_type = _CODE_TYPE_BY_STATUS.get(exc.status_code, "bad_request")

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTPException",
                "message": exc.detail,
                "code": f"{code_type}:api",
                "request_id": request_id
            },
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Render malformed request bodies and parameters in the same envelope."""
        request_id = getattr(request.state, "request_id", "unknown")

        return JSONResponse(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            content={
                "error": "RequestValidationError",
                "message": "Request failed validation",
                "code": ErrorCode.BAD_REQUEST_API,
                "details": {"errors": jsonable_encoder(exc.errors())},
                "request_id": request_id
            }
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.exception(
            "Unexpected error",
            error_type=type(exc).__name__,
            message=str(exc),
            request_id=request_id
        )

        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={
                "error": "InternalServerError",
                "message": "An unexpected error occurred",
                "code": RAGChatError.code,
                "request_id": request_id
            }
        )


def setup_middleware(app: FastAPI) -> None:
    """Setup all middleware for the application."""
    app.add_middleware(RequestLoggingMiddleware)
