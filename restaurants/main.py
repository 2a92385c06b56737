"""Restaurants API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RestaurantsError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan
    - Every HTTP request runs inside a user context scope (UserContextMiddleware)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module's imports small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restaurants.api.error_handlers import register_error_handlers
from restaurants.api.middleware import RequestTimingMiddleware, UserContextMiddleware
from restaurants.api.routes import dishes, health, identity, restaurants
from restaurants.config import get_settings
from restaurants.infrastructure import database
from restaurants.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Restaurants API started")
    yield
    logger.info("Restaurants API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(title="Restaurants API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)
app.add_middleware(UserContextMiddleware)
app.add_middleware(
    RequestTimingMiddleware, threshold_ms=settings.slow_request_threshold_ms,
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(restaurants.router)
app.include_router(dishes.router)
app.include_router(identity.router)

register_error_handlers(app)
