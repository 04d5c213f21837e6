"""User Registry API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RegistryError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Registry and generator client created on startup, client closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Registry is in-memory and starts empty: state is lost on restart
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_registry.api.error_handlers import register_error_handlers
from user_registry.api.routes import health, users
from user_registry.config import get_settings
from user_registry.infrastructure.observability import setup_logging
from user_registry.infrastructure.random_user_client import RandomUserClient
from user_registry.services.registry import init_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    client = RandomUserClient(
        settings.random_user_api_url,
        timeout_seconds=settings.random_user_timeout_seconds,
    )
    init_registry(
        client,
        page_size=settings.page_size,
        batch_limit=settings.random_user_batch_limit,
    )
    logger.info("User Registry API started")
    yield
    await client.aclose()
    logger.info("User Registry API shutting down")


app = FastAPI(
    title="User Registry API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)
