"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindful_heaven.core.database import init_db
from mindful_heaven.core.logging_config import get_logger, setup_logging
from mindful_heaven.core.monitoring import initialize_logfire

from .api.v1 import (
    ai_chat,
    auth,
    chats,
    forum,
    health,
    mood_logs,
    notifications,
    password_reset,
    peer_chats,
    profiles,
    security_password_reset,
    security_questions,
    storage,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTracingMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Configures logging and prepares the database on startup.
    """
    setup_logging()
    try:
        logger.info("Starting up Mindful Heaven Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Mindful Heaven Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Mindful Heaven Server API

    Backend of the Mindful Heaven mental-health support application: anonymous
    profiles, an AI support assistant, a community forum, peer messaging with
    media, a mood journal, notifications and password recovery.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

app.add_middleware(RequestTracingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(storage.public_router)
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth")
app.include_router(profiles.router, prefix=f"{constant.API_V1_STR}/profiles")
app.include_router(storage.router, prefix=f"{constant.API_V1_STR}/storage")
app.include_router(chats.router, prefix=f"{constant.API_V1_STR}/chats")
app.include_router(ai_chat.router, prefix=f"{constant.API_V1_STR}/ai-chat")
app.include_router(security_questions.router, prefix=f"{constant.API_V1_STR}/security-questions")
app.include_router(security_password_reset.router, prefix=f"{constant.API_V1_STR}/security-password-reset")
app.include_router(password_reset.router, prefix=f"{constant.API_V1_STR}/password-reset")
app.include_router(forum.router, prefix=f"{constant.API_V1_STR}/forum")
app.include_router(peer_chats.router, prefix=f"{constant.API_V1_STR}/peer-chats")
app.include_router(mood_logs.router, prefix=f"{constant.API_V1_STR}/mood-logs")
app.include_router(notifications.router, prefix=f"{constant.API_V1_STR}/notifications")
