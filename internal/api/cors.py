"""
CORS headers for the relay endpoints.

CORS is open to all origins. Headers are attached to every response, not
only to browser preflights, and OPTIONS answers 200 with an empty body.
"""

from typing import Dict

from fastapi import Request, Response

API_PREFIX = "/api"

POST_METHODS = "POST, OPTIONS"
GET_METHODS = "GET, OPTIONS"

ENDPOINT_METHODS = {
    f"{API_PREFIX}/analyze": POST_METHODS,
    f"{API_PREFIX}/transcribe": POST_METHODS,
    f"{API_PREFIX}/health": GET_METHODS,
    f"{API_PREFIX}/test": GET_METHODS,
}


def cors_headers(methods: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": methods,
        "Access-Control-Allow-Headers": "Content-Type",
    }


def cors_headers_for_path(path: str) -> Dict[str, str]:
    return cors_headers(ENDPOINT_METHODS.get(path.rstrip("/"), "GET, POST, OPTIONS"))


def preflight_response(methods: str) -> Response:
    """No-op 200 answer for OPTIONS."""
    return Response(status_code=200, headers=cors_headers(methods))


async def add_cors_headers(request: Request, call_next):
    """HTTP middleware: attach CORS headers the route did not set itself."""
    response = await call_next(request)
    for name, value in cors_headers_for_path(request.url.path).items():
        if name not in response.headers:
            response.headers[name] = value
    return response
