"""Delivery dispatch — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from delivery.adapters.persistence.database import engine
from delivery.config import settings
from delivery.infrastructure.api.routes_assignments import router as assignments_router
from delivery.infrastructure.api.routes_health import router as health_router
from delivery.infrastructure.api.routes_orders import router as orders_router
from delivery.infrastructure.api.routes_partners import router as partners_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established (max partner load %d)", settings.max_partner_load)
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Delivery dispatch",
        description="Delivery partners, orders, and order-to-partner assignment",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(partners_router, prefix="/api")
    app.include_router(orders_router, prefix="/api")
    app.include_router(assignments_router, prefix="/api")

    return app


app = create_app()
