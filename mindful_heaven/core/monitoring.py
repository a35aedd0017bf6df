"""
Monitoring and Tracing Configuration Module.

This module provides optional integration with Pydantic Logfire for tracing
of API requests, outgoing HTTP calls (completion relay, email delivery) and
database operations.

Every helper degrades to a debug log line when Logfire is disabled or not
configured, so call sites never need to check.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "mindful-heaven-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

# Feature flags
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_logfire_ready = False


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Logfire for monitoring and tracing.

    Instrumentation covers SQLAlchemy, HTTPX and, when ``app`` is given,
    FastAPI endpoints. Nothing happens unless ``LOGFIRE_ENABLED`` is set and a
    ``LOGFIRE_TOKEN`` is available.

    Args:
        app: FastAPI application instance for endpoint tracing (optional).
    """
    global _logfire_ready

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return

    import logfire

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    if LOGFIRE_TRACE_SQLALCHEMY:
        try:
            logfire.instrument_sqlalchemy()
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if LOGFIRE_TRACE_HTTPX:
        try:
            logfire.instrument_httpx()
            logger.info("Logfire: HTTPX instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument HTTPX: {e}")

    if LOGFIRE_TRACE_FASTAPI and app is not None:
        try:
            logfire.instrument_fastapi(app=app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument FastAPI: {e}")

    _logfire_ready = True
    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _logfire_ready:
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")
        return

    import logfire

    logfire.info(
        "API request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_completion_call(model: str, streamed: bool, status_code: int) -> None:
    """
    Log a call made by the completion relay.

    Args:
        model: The model requested upstream
        streamed: Whether the response was relayed as a stream
        status_code: Status returned by the upstream API
    """
    if not _logfire_ready:
        logger.debug(f"Completion call: model={model}, streamed={streamed}, status={status_code}")
        return

    import logfire

    logfire.info("Completion relay call", model=model, streamed=streamed, status_code=status_code)


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _logfire_ready:
        logger.debug(f"Error recorded: {error_type}: {error_message}")
        return

    import logfire

    logfire.error("Error occurred", error_type=error_type, error_message=error_message, **(context or {}))
