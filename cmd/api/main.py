"""
FastAPI Service - Main entry point for the Reflect AI relay.

Run from the project root:
    python cmd/api/main.py
or:
    uvicorn internal.api.app:create_app --factory --host 0.0.0.0 --port 8000

cmd/ is not a package, so the standard library ``cmd`` module stays importable.
"""

import os
import sys

# Project root on sys.path when run as a script
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.config import get_settings  # noqa: E402
from core.logger import logger  # noqa: E402
from internal.api.app import create_app  # noqa: E402


try:
    app = create_app()
except Exception as e:
    logger.error(f"Failed to create application instance: {e}")
    logger.exception("Startup error details:")
    raise


if __name__ == "__main__":
    import uvicorn  # type: ignore

    settings = get_settings()

    logger.info("========== Starting Uvicorn Server ==========")
    logger.info(f"Host: {settings.api_host}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Reload: {settings.api_reload}")

    if settings.api_reload:
        # Reloader subprocess needs the project root on PYTHONPATH
        current_pythonpath = os.environ.get("PYTHONPATH", "")
        if PROJECT_ROOT not in current_pythonpath.split(os.pathsep):
            os.environ["PYTHONPATH"] = (
                f"{PROJECT_ROOT}{os.pathsep}{current_pythonpath}"
                if current_pythonpath
                else PROJECT_ROOT
            )
        uvicorn.run(
            "internal.api.app:create_app",
            factory=True,
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level="info" if settings.debug else "warning",
        )
    else:
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            reload=False,
            log_level="info" if settings.debug else "warning",
        )
