"""
Exception handlers. Every error body has the shape {"error": "<message>"}.

Unexpected exceptions are turned into a 500 by middleware.catch_unhandled_errors.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Internal server error"
INVALID_JSON = "request body: invalid JSON"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe(error: dict) -> str:
    if error["type"] == "json_invalid":
        return INVALID_JSON
    field = ".".join(str(part) for part in error["loc"] if part != "body") or "request body"
    if error["type"] == "missing":
        return f"{field} is required"
    return f"{field}: {error['msg']}"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(_describe(e) for e in exc.errors())
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing misses surface as 404/405 from Starlette; handlers never raise those
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(status.HTTP_404_NOT_FOUND, ROUTE_NOT_FOUND)
    return error_response(exc.status_code, str(exc.detail))


def setup_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
