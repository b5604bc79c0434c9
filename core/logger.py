"""
Centralized logging configuration using Loguru.

Features:
- Colored console output or flat JSON lines (LOG_FORMAT=json)
- Optional rotating log files (LOG_FILE_ENABLED)
- Standard library logging interception (uvicorn, httpx -> Loguru)
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger  # type: ignore


VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

_configured = False


# =============================================================================
# Standard Library Logging Interception
# =============================================================================


class InterceptHandler(logging.Handler):
    """
    Intercept standard library logging and route to Loguru.

    Uvicorn and httpx log through stdlib logging; this keeps their records
    in the same sinks and format as the application logs.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where logging call originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_standard_logging() -> None:
    """Route the root stdlib logger through InterceptHandler."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def configure_third_party_loggers() -> None:
    """
    Configure third-party library loggers to reduce noise.

    httpx logs every provider request at INFO; the relay already logs the
    provider status itself.
    """
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)

    logging.getLogger("fastapi").setLevel(logging.INFO)


def format_exception_short(exception: Exception, context: Optional[str] = None) -> str:
    """
    Format exception to be short and readable.

    Args:
        exception: Exception object
        context: Optional context message

    Returns:
        Short formatted error message

    Example:
        >>> try:
        ...     raise ValueError("Invalid input")
        ... except ValueError as e:
        ...     print(format_exception_short(e, "Analyzing prompt"))
        Analyzing prompt | ValueError: Invalid input | (analysis.py:42)
    """
    try:
        exc_type = type(exception).__name__

        # Last frame of the traceback is where the error was raised
        tb = exception.__traceback__
        if tb:
            while tb.tb_next:
                tb = tb.tb_next
            filename = Path(tb.tb_frame.f_code.co_filename).name
            location = f"{filename}:{tb.tb_lineno}"
        else:
            location = "unknown"

        parts = []
        if context:
            parts.append(context)
        parts.append(f"{exc_type}: {exception}")
        parts.append(f"({location})")

        return " | ".join(parts)

    except Exception:
        return f"{type(exception).__name__}: {exception}"


# =============================================================================
# JSON Logging Format
# =============================================================================


def serialize_log_record(record: dict) -> str:
    """
    Serialize a Loguru record to a flat JSON line.

    Used as a format function, so the result is escaped for Loguru's
    own format() call.
    """
    log_record = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["module"],
        "function": record["function"],
        "line": record["line"],
    }

    if record.get("exception"):
        exception = record["exception"]
        log_record["exception"] = {
            "type": exception.type.__name__ if exception.type else "Unknown",
            "message": str(exception.value),
        }

    # Context bound via logger.bind()
    for key, value in record.get("extra", {}).items():
        try:
            json.dumps(value)
            log_record[key] = value
        except (TypeError, OverflowError):
            log_record[key] = str(value)

    return (
        json.dumps(log_record).replace("{", "{{").replace("}", "}}").replace("<", "\\<")
        + "\n"
    )


def _filter_reloader_logs(record) -> bool:
    """Drop records emitted by uvicorn's reloader processes."""
    return record.get("name", "") not in ("__main__", "__mp_main__")


def setup_logger(force: bool = False) -> None:
    """
    Configure logger handlers for the application.

    Only configures once unless force=True.
    """
    global _configured

    if _configured and not force:
        return

    from .config import get_settings

    settings = get_settings()

    log_level = (settings.log_level or "").upper()
    if log_level not in VALID_LEVELS:
        log_level = "DEBUG" if settings.debug else "INFO"

    logger.remove()

    json_format = settings.log_format.lower() == "json"

    if json_format:
        logger.add(
            sys.stdout,
            format=serialize_log_record,
            level=log_level,
            colorize=False,
        )
    else:
        logger.add(
            sys.stdout,
            colorize=True,
            format=CONSOLE_FORMAT,
            level=log_level,
            filter=_filter_reloader_logs,
        )

    if settings.log_file_enabled:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        suffix = ".json.log" if json_format else ".log"
        file_format = serialize_log_record if json_format else FILE_FORMAT

        logger.add(
            log_dir / f"app{suffix}",
            rotation="100 MB",
            retention="30 days",
            compression="zip",
            format=file_format,
            level="DEBUG",
        )
        logger.add(
            log_dir / f"error{suffix}",
            rotation="100 MB",
            retention="30 days",
            compression="zip",
            format=file_format,
            level="ERROR",
        )

    intercept_standard_logging()
    configure_third_party_loggers()
    _configured = True


# Configure logger on module import
setup_logger()

__all__ = [
    "logger",
    "format_exception_short",
    "configure_third_party_loggers",
    "intercept_standard_logging",
    "serialize_log_record",
    "setup_logger",
    "InterceptHandler",
]
