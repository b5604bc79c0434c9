"""
FastAPI application factory for the relay.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status as http_status  # type: ignore
from fastapi.exceptions import RequestValidationError  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.logger import logger
from core.messages import ErrorMessages
from internal.api.cors import add_cors_headers, cors_headers_for_path
from internal.api.routes.analyze_routes import router as analyze_router
from internal.api.routes.diagnostic_routes import router as diagnostic_router
from internal.api.routes.health_routes import router as health_router
from internal.api.routes.transcribe_routes import router as transcribe_router
from internal.api.utils import error_body


HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.

    A missing provider credential does not stop startup; it is reported per
    request as a configuration error.
    """
    from core.container import Container, bootstrap_container, get_ai_provider

    settings = get_settings()
    logger.info(
        f"========== Starting {settings.app_name} v{settings.app_version} =========="
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"API: {settings.api_host}:{settings.api_port}")

    bootstrap_container()
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; provider calls will fail")

    yield

    logger.info("========== Shutting down API service ==========")
    if Container.is_initialized():
        provider = get_ai_provider()
        aclose = getattr(provider, "aclose", None)
        if aclose is not None:
            await aclose()
    logger.info("========== API service stopped successfully ==========")


def create_app() -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    description = """
## Reflect AI Relay

A thin relay in front of OpenAI's speech-to-text and chat-completion APIs.

* **POST /api/analyze** - Conversation analysis with a chat model
* **POST /api/transcribe** - Audio transcription with AI speaker labeling
* **GET /api/health** - Static capability report
* **GET /api/test** - Provider connectivity canary
    """

    tags_metadata = [
        {"name": "Analysis", "description": "Text analysis relay."},
        {"name": "Transcription", "description": "Audio upload transcription."},
        {"name": "Health", "description": "Liveness endpoint."},
        {"name": "Diagnostics", "description": "Provider connectivity check."},
    ]

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=description,
        lifespan=lifespan,
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.middleware("http")(add_cors_headers)

    app.include_router(analyze_router)
    app.include_router(transcribe_router)
    app.include_router(health_router)
    app.include_router(diagnostic_router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Malformed bodies are client errors (400), not 422."""
        details = "; ".join(
            f"{e['loc'][-1] if e['loc'] else 'body'}: {e['msg']}" for e in exc.errors()
        )
        logger.warning(f"Validation error: {details}")
        return JSONResponse(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            content=error_body(
                "invalid_request", ErrorMessages.INVALID_REQUEST.format(detail=details)
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Routing errors (404/405) in the relay's error format."""
        logger.warning(f"HTTP error {exc.status_code} on {request.method} {request.url.path}")
        if exc.status_code == http_status.HTTP_405_METHOD_NOT_ALLOWED:
            message = ErrorMessages.METHOD_NOT_ALLOWED
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(HTTP_ERROR_CODES.get(exc.status_code, "http_error"), message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Runs outside the CORS middleware, so headers are added here."""
        logger.error(f"Unhandled exception: {exc}")
        logger.exception("Exception details:")
        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("internal_error", str(exc)),
            headers=cors_headers_for_path(request.url.path),
        )

    return app
