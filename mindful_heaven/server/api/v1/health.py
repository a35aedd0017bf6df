"""
Service status endpoints.

``/health`` also pings the database so a load balancer can take an instance
out of rotation when its database is gone.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.server.core import constant
from mindful_heaven.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Report whether the API server and its database are reachable.",
    response_description="Service and database status.",
    responses={503: {"description": "The database cannot be reached"}},
)
async def health_check(session: SessionDep):
    """
    Health check endpoint.

    Runs ``SELECT 1`` on the database; answers 503 with ``database: unreachable`` when it fails.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Health check could not reach the database: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unreachable"},
        )
    return {"status": "ok", "database": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Version of the Mindful Heaven API.",
)
async def version():
    return {"version": constant.VERSION, "schema_version": "v1"}
