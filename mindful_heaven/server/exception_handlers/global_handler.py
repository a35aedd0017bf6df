"""
Catch-all exception handler and handler registration.

Anything not raised as a ``ServiceError`` ends here: the full traceback is
logged under a short error id, and the client only sees that id and the
exception type, never the exception text.
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mindful_heaven.core.errors import ServiceError
from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.core.monitoring import log_error

from .service_errors import service_error_handler

logger = get_logger(__name__)


def new_error_id() -> str:
    return uuid.uuid4().hex[:12]


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unhandled exception and answer 500 with its error id."""
    error_id = new_error_id()
    error_type = type(exc).__name__
    client = request.client.host if request.client else "unknown"

    logger.error(
        f"Unhandled {error_type} [{error_id}] in {request.method} {request.url.path} from {client}: {exc}",
        exc_info=exc,
    )
    log_error(error_type, str(exc), {"error_id": error_id, "method": request.method, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_id": error_id, "error_type": error_type},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the ``ServiceError`` renderer and the catch-all handler on ``app``."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered")
