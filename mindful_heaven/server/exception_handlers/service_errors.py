"""
Handler rendering ``ServiceError`` as the structured ``{"error": ...}`` body.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from mindful_heaven.core.errors import ServiceError
from mindful_heaven.core.logging_config import get_logger

logger = get_logger(__name__)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.debug(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())
