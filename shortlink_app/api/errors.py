"""
Translate service exceptions into HTTP responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shortlink_app.exceptions import ShortlinkError

logger = logging.getLogger(__name__)


async def shortlink_error_handler(request: Request, exc: ShortlinkError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)

    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "detail": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShortlinkError, shortlink_error_handler)
