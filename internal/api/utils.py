"""
API utility functions for response formatting.

Error responses follow the format:
{
    "error": str,       # machine-readable code (4xx) or fallback message (5xx)
    "message": str,     # human-readable detail
    "service": str      # upstream service implicated (5xx only, when known)
}

Success responses are the endpoint payload itself.
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from core.errors import ClientRequestError


def error_body(
    error: str,
    message: Optional[str] = None,
    service: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """
    Create an error response dictionary.

    Example:
        >>> error_body("prompt_too_long", "Please provide a shorter prompt")
        {"error": "prompt_too_long", "message": "Please provide a shorter prompt"}
    """
    body: Dict[str, Any] = {"error": error}
    if message is not None:
        body["message"] = message
    if service is not None:
        body["service"] = service
    body.update(extra)
    return body


def json_error_response(
    error: str,
    message: Optional[str] = None,
    status_code: int = 500,
    service: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    **extra: Any,
) -> JSONResponse:
    """Create a JSONResponse with the error format."""
    return JSONResponse(
        status_code=status_code,
        content=error_body(error, message, service, **extra),
        headers=headers,
    )


def client_error_response(exc: ClientRequestError) -> JSONResponse:
    """Map a ClientRequestError to its 4xx response."""
    return json_error_response(exc.error, exc.message, status_code=exc.status_code)


def json_success_response(data: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=data)
