"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cors import apply_cors_headers

logger = logging.getLogger(__name__)


class ForexNewsError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class EventGenerationError(ForexNewsError):
    def __init__(self, count: int):
        super().__init__(f"Cannot generate {count} events: count must be >= 0")
        self.count = count


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app.

    The news feed never reaches these (the cache degrades to stale or mock
    data instead); they cover faults anywhere else in the app.
    """

    @app.exception_handler(ForexNewsError)
    async def handle_forex_news_error(_request: Request, exc: ForexNewsError):
        logger.error("Request failed: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        # Runs outside the app middleware stack, so CORS headers are added here
        logger.exception("Unhandled error: %s", exc)
        response = JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
        return apply_cors_headers(request, response)
