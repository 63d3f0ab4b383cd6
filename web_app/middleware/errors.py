"""
Exception handlers for consistent error responses.

Service errors carry their own status code; anything unexpected is logged
with its traceback and answered with a 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlinks.errors import ShortLinkError

logger = logging.getLogger("shortlinks.web.errors")


def error_body(message: str, detail=None) -> dict:
    return {"error": message, "detail": detail}


async def shortlink_error_handler(request: Request, exc: ShortLinkError) -> JSONResponse:
    """Convert a service error to its HTTP response."""
    if exc.status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc.message}")
    else:
        logger.warning(f"Service error in {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.details or None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are invalid input (400), like a bad alias."""
    logger.warning(f"Validation error in {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content=error_body("Invalid request data", jsonable_errors(exc)),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep framework errors (unknown route, wrong method) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and hide their details from the client."""
    logger.error(f"Unhandled error in {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=error_body("Internal server error"),
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the non-serializable context objects."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """Install all handlers on the app."""
    app.add_exception_handler(ShortLinkError, shortlink_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
