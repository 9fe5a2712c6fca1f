"""Ticket Exchange API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ExchangeError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static files mounted last so /api/v1/* always takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

import app.infrastructure.database as database
from app.infrastructure.observability import setup_logging
from app.config import get_settings
from app.api.error_handlers import register_error_handlers
from app.api.routes import accounts, health, tickets

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
    logger.info(
        "Ticket exchange API started",
        extra={"operation": "transactional" if settings.transactional_mode else "sequential"},
    )
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Ticket exchange API shutting down")


app = FastAPI(
    title="Ticket Exchange API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(tickets.router)

register_error_handlers(app)

# html=True gives the SPA fallback (index.html for unknown paths)
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
