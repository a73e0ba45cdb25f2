"""Cross-origin headers, shared by the app middleware and the 500 handler."""

from fastapi import Request, Response

from config import settings

CORS_ALLOW_METHODS = "GET, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization"


def apply_cors_headers(request: Request, response: Response) -> Response:
    """Echo allow-listed origins only; the other headers go on every response."""
    origin = request.headers.get("origin")
    if origin and origin in settings.cors_origins:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Vary"] = "Origin"
    response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
    response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
    response.headers["Access-Control-Allow-Credentials"] = "true"
    return response
