"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from orbit_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from orbit_ledger.api.v1 import identity, months, preferences, transactions
from orbit_ledger.infrastructure.database.session import init_db
from orbit_ledger.infrastructure.observability.logging import setup_logging
from orbit_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Orbit Ledger",
        description="Personal finance timeline: monthly orbits, identity and planet visuals",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(months.router, prefix="/v1", tags=["months"])
    app.include_router(identity.router, prefix="/v1", tags=["identity"])
    app.include_router(preferences.router, prefix="/v1", tags=["preferences"])

    return app


app = create_app()
