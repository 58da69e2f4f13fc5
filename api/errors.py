"""Exception handlers translating errors into HTTP responses.

- ApiError subclasses render their own status and body
- Request validation failures become a 400 listing every failing field
- Anything else is reported as a 500; RequestContextMiddleware logs it
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import ApiError, ValidationError

logger = logging.getLogger(__name__)

_LOCATIONS = {"body", "path", "query", "header", "cookie"}


def format_validation_errors(errors: list[dict]) -> list[str]:
    """Turn pydantic error entries into ``"<field>: <reason>"`` strings."""
    messages = []
    for error in errors:
        parts = [str(p) for p in error.get("loc", ()) if p not in _LOCATIONS]
        field = ".".join(parts) or "body"
        messages.append(f"{field}: {error.get('msg', 'is invalid')}")
    return messages


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=int(exc.status_code), content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError(format_validation_errors(exc.errors()))
    return JSONResponse(status_code=int(error.status_code), content=error.to_dict())


def internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "statusCode": 500,
            "message": "Internal server error",
            "error": "Internal Server Error",
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Fallback for errors raised outside RequestContextMiddleware
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={
            "exception_type": type(exc).__name__,
            "method": request.method,
            "path": request.url.path,
        },
    )
    return internal_error_response()


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
