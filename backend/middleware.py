"""
HTTP middleware registered inside the CORS layer, so that the 413 and 500
responses built here still carry Access-Control-Allow-Origin.
"""

import logging

from fastapi import FastAPI, Request, status

from errors import INTERNAL_ERROR, error_response

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 2 * 1024 * 1024
BODY_TOO_LARGE = "Request body too large"


async def catch_unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


async def limit_body_size(request: Request, call_next):
    """Reject bodies whose declared Content-Length exceeds MAX_BODY_BYTES."""
    length = request.headers.get("content-length")
    if length is not None:
        try:
            too_large = int(length) > MAX_BODY_BYTES
        except ValueError:
            return error_response(status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header")
        if too_large:
            logger.warning(
                "Rejected %s %s: body of %s bytes exceeds %s",
                request.method, request.url.path, length, MAX_BODY_BYTES,
            )
            return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, BODY_TOO_LARGE)
    return await call_next(request)


def setup_middleware(app: FastAPI) -> None:
    # Added first, so it runs innermost and sees exceptions from the routes
    app.middleware("http")(catch_unhandled_errors)
    app.middleware("http")(limit_body_size)
