"""
app/core/errors.py

Purpose: JSON error responses for the API routes

- TodoBoardError subclasses keep their own code and status
- Unknown routes and wrong methods get distinct codes
- Request validation failures list the offending fields
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Optional

from app.core.config import settings
from app.core.exceptions import TodoBoardError
from app.core.logging import get_logger
from app.schemas.response import ErrorResponse

logger = get_logger(__name__)

HTTP_ERROR_CODES = {
    404: "ROUTE_NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def error_response(status_code: int, message: str, code: str, details: Optional[Any] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, code=code, details=details).model_dump()
    )


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    """
    @app.exception_handler(TodoBoardError)
    async def todoboard_exception_handler(request: Request, exc: TodoBoardError):
        logger.info(f"{request.method} {request.url.path} -> {exc.code}: {exc.message}")
        return error_response(exc.status_code, exc.message, exc.code, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        if exc.status_code == 404:
            message = f"Nothing is served at {request.url.path}"
        elif exc.status_code == 405:
            message = f"{request.method} is not supported on {request.url.path}"
        else:
            message = str(exc.detail)
        return error_response(exc.status_code, message, code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = jsonable_errors(exc)
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in details)
        logger.info(f"Rejected {request.method} {request.url.path}: invalid {fields}")
        return error_response(422, f"Invalid request data: {fields}", "VALIDATION_ERROR", details)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else "unknown"
            },
            exc_info=True
        )

        message = "The todo board hit an unexpected error." if settings.is_production else str(exc)
        return error_response(500, message, "INTERNAL_ERROR")


def jsonable_errors(exc: RequestValidationError) -> list:
    # "ctx" may carry the raw exception object, which JSONResponse cannot encode
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]
